"""Flask REST API for rtxconfig.

Endpoints:
  GET  /api/v1/status       — Service health check
  POST /api/v1/parse        — Parse config text into context-tagged commands
  POST /api/v1/parse/file   — Upload a config dump for parsing
  POST /api/v1/reassemble   — Repair terminal line wraps only
  POST /api/v1/commands     — Query commands by context or prefix
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from rtxconfig import __version__
from rtxconfig.ingest.parser import ConfigFileParser
from rtxconfig.ingest.reassembler import reassemble
from rtxconfig.models import ContextKind
from rtxconfig.report.generator import ReportGenerator
from rtxconfig.report.sanitizer import sanitize_line

logger = logging.getLogger(__name__)


def create_app(parser: ConfigFileParser | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.json.sort_keys = False

    _parser = parser or ConfigFileParser()
    _reporter = ReportGenerator()

    def _config_from_body():
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("config"), str):
            return None, None
        return data, data["config"]

    @app.route("/api/v1/status", methods=["GET"])
    def status():
        """Health check endpoint."""
        rules = _parser.rules
        return jsonify({
            "status": "healthy",
            "version": __version__,
            "custom_rules": rules is not None,
        })

    @app.route("/api/v1/parse", methods=["POST"])
    def parse_config():
        """Parse configuration text."""
        data, text = _config_from_body()
        if text is None:
            return jsonify({"error": "Missing 'config' in request body"}), 400

        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            return jsonify({"error": "'metadata' must be an object"}), 400

        parsed = _parser.parse_text(text, device_name=data.get("device_name", "unknown"))
        parsed.metadata.update(metadata)
        logger.info("Parsed %s via API: %d commands", parsed.device_name, parsed.command_count)
        return jsonify(_reporter.to_dict(parsed, redact=bool(data.get("redact", False))))

    @app.route("/api/v1/parse/file", methods=["POST"])
    def parse_file():
        """Upload a config dump for parsing."""
        if "file" not in request.files:
            return jsonify({"error": "No file uploaded"}), 400

        file = request.files["file"]
        if not file.filename:
            return jsonify({"error": "Empty filename"}), 400

        text = file.read().decode("utf-8", errors="replace")
        device_name = file.filename.rsplit(".", 1)[0]
        parsed = _parser.parse_text(text, device_name=device_name)
        redact = request.form.get("redact", "").lower() in ("1", "true", "yes")
        return jsonify(_reporter.to_dict(parsed, redact=redact))

    @app.route("/api/v1/reassemble", methods=["POST"])
    def reassemble_config():
        _, text = _config_from_body()
        if text is None:
            return jsonify({"error": "Missing 'config' in request body"}), 400
        return jsonify({"config": reassemble(text)})

    @app.route("/api/v1/commands", methods=["POST"])
    def query_commands():
        """Select commands by context reference, global scope and prefixes."""
        data, text = _config_from_body()
        if text is None:
            return jsonify({"error": "Missing 'config' in request body"}), 400

        parsed = _parser.parse_text(text)
        ref = data.get("context")
        if ref is not None and not isinstance(ref, str):
            return jsonify({"error": "'context' must be a string"}), 400
        prefixes = data.get("prefixes") or ()
        if isinstance(prefixes, str):
            prefixes = [prefixes]
        if (not isinstance(prefixes, (list, tuple))
                or not all(isinstance(p, str) for p in prefixes)):
            return jsonify({"error": "'prefixes' must be a string or a list of strings"}), 400
        prefixes = tuple(prefixes)

        if ref and data.get("global"):
            return jsonify({"error": "Use either 'context' or 'global', not both"}), 400
        if ref:
            try:
                ctx = parsed.get_context(ref)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            commands = parsed.commands_in_context(ctx) if ctx else []
        elif data.get("global"):
            commands = parsed.global_commands()
        else:
            commands = parsed.commands

        if prefixes:
            commands = [c for c in commands if c.text.startswith(prefixes)]

        redact = bool(data.get("redact", False))
        return jsonify({
            "count": len(commands),
            "commands": [
                {
                    "line": c.line_number,
                    "context": c.context.ref if c.context else None,
                    "kind": c.context.kind.value if c.context else ContextKind.GLOBAL.value,
                    "text": sanitize_line(c.text) if redact else c.text,
                }
                for c in commands
            ],
        })

    return app
