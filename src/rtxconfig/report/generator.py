"""Report generator — JSON, CSV and plain text views of a parsed dump."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from rtxconfig.models import Command, ParsedConfig
from rtxconfig.report.sanitizer import contains_sensitive, sanitize_line, sanitize_mapping

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Render a ParsedConfig for people and for other tools.

    Every generator takes ``redact``; when set, credential values in command
    texts are replaced before anything is rendered.
    """

    def to_dict(self, config: ParsedConfig, redact: bool = False) -> dict[str, Any]:
        counts = {ctx.ref: len(config.commands_in_context(ctx)) for ctx in config.contexts}
        return {
            "device": config.device_name,
            "source_file": config.source_file,
            "parsed_at": config.parsed_at.isoformat(),
            "metadata": sanitize_mapping(config.metadata) if redact else dict(config.metadata),
            "summary": {
                "line_count": config.line_count,
                "command_count": config.command_count,
                "context_count": len(config.contexts),
                "global_command_count": len(config.global_commands()),
                "sensitive_command_count": sum(
                    1 for c in config.commands if contains_sensitive(c.text)),
            },
            "contexts": [
                {
                    "ref": ctx.ref,
                    "kind": ctx.kind.value,
                    "id": ctx.numeric_id,
                    "name": ctx.name,
                    "command_count": counts[ctx.ref],
                }
                for ctx in config.contexts
            ],
            "commands": [self._command_dict(c, redact) for c in config.commands],
        }

    def generate_json(self, config: ParsedConfig,
                      output_path: str | Path | None = None,
                      redact: bool = False) -> str:
        json_str = json.dumps(self.to_dict(config, redact), indent=2)
        if output_path:
            Path(output_path).write_text(json_str)
            logger.info("JSON report generated: %s", output_path)
        return json_str

    def generate_csv(self, config: ParsedConfig, output_path: str | Path,
                     redact: bool = False) -> str:
        """Write one CSV row per command."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["Line", "Indent", "Context Kind", "Context", "Command"])
            for cmd in config.commands:
                writer.writerow([
                    cmd.line_number,
                    cmd.indent_level,
                    cmd.context.kind.value if cmd.context else "global",
                    cmd.context.ref if cmd.context else "",
                    self._text(cmd, redact),
                ])

        logger.info("CSV report generated: %s", output_path)
        return str(output_path)

    def generate_text(self, config: ParsedConfig,
                      output_path: str | Path | None = None,
                      redact: bool = False) -> str:
        """Generate a plain text report."""
        lines = [
            "=" * 70,
            "RTX CONFIGURATION REPORT",
            "=" * 70,
            f"Device:           {config.device_name}",
            f"Parsed:           {config.parsed_at.strftime('%Y-%m-%d %H:%M UTC')}",
            f"Lines:            {config.line_count}",
            f"Commands:         {config.command_count}",
            f"Contexts:         {len(config.contexts)}",
            "",
        ]
        if config.source_file:
            lines.insert(4, f"Source:           {config.source_file}")

        global_cmds = config.global_commands()
        lines.append("-" * 70)
        lines.append(f"GLOBAL ({len(global_cmds)} commands)")
        lines.append("-" * 70)
        for cmd in global_cmds:
            lines.append(f"{cmd.line_number:6d}  {self._text(cmd, redact)}")

        for ctx in config.contexts:
            cmds = config.commands_in_context(ctx)
            lines.append("")
            lines.append("-" * 70)
            lines.append(f"{ctx.ref.upper()} ({len(cmds)} commands)")
            lines.append("-" * 70)
            for cmd in cmds:
                lines.append(f"{cmd.line_number:6d}  {self._text(cmd, redact)}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("End of Report")
        lines.append("=" * 70)

        text = "\n".join(lines)
        if output_path:
            Path(output_path).write_text(text)
            logger.info("Text report generated: %s", output_path)
        return text

    def _text(self, cmd: Command, redact: bool) -> str:
        return sanitize_line(cmd.text) if redact else cmd.text

    def _command_dict(self, cmd: Command, redact: bool) -> dict[str, Any]:
        return {
            "line": cmd.line_number,
            "indent": cmd.indent_level,
            "context": cmd.context.ref if cmd.context else None,
            "text": self._text(cmd, redact),
        }
