"""Context-aware parser for RTX router configuration dumps."""

from __future__ import annotations

import logging
from pathlib import Path

from rtxconfig.ingest.context import ContextRules, ContextTracker, get_indent_level
from rtxconfig.ingest.reassembler import reassemble
from rtxconfig.models import Command, ParsedConfig

logger = logging.getLogger(__name__)


class ConfigFileParser:
    """Segments a ``show config`` dump into context-tagged commands.

    The parser repairs terminal line wraps, then walks the repaired text
    once, tagging every command with the tunnel, pp or nested ipsec tunnel
    context it belongs to. It never rejects input: unknown commands are
    tagged with whatever context is active. Instances hold only immutable
    rules and may be shared between threads.
    """

    def __init__(self, rules: ContextRules | None = None) -> None:
        self.rules = rules

    def parse_file(self, filepath: str | Path) -> ParsedConfig:
        """Parse a configuration dump stored on disk."""
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        raw = filepath.read_text(encoding="utf-8", errors="replace")
        config = self.parse_text(raw, device_name=filepath.stem)
        config.source_file = str(filepath)
        return config

    def parse_text(self, text: str, device_name: str = "unknown") -> ParsedConfig:
        """Parse configuration text directly."""
        config = ParsedConfig(raw_text=text, device_name=device_name)
        tracker = ContextTracker(self.rules)

        for line_number, line in enumerate(reassemble(text).split("\n"), 1):
            stripped = line.strip()
            if not stripped:
                continue
            config.line_count += 1

            if stripped.startswith("#"):
                continue

            indent = get_indent_level(line)
            context = tracker.feed(stripped, indent)
            config.commands.append(Command(
                text=stripped,
                context=context,
                line_number=line_number,
                indent_level=indent,
            ))

        config.contexts = list(tracker.contexts)
        config.command_count = len(config.commands)
        logger.debug("Parsed %s: %d lines, %d commands, %d contexts",
                     device_name, config.line_count, config.command_count,
                     len(config.contexts))
        return config


def parse(raw: str, rules: ContextRules | None = None) -> ParsedConfig:
    """Parse a configuration dump with a one-off parser."""
    return ConfigFileParser(rules).parse_text(raw)
