"""Config ingestion — wrap repair, context tracking and parsing."""

from rtxconfig.ingest.context import (
    DEFAULT_RULES,
    ContextRules,
    ContextTracker,
    detect_context_open,
    is_contextual,
)
from rtxconfig.ingest.parser import ConfigFileParser, parse
from rtxconfig.ingest.reassembler import reassemble
from rtxconfig.ingest.scanner import DirectoryScanner

__all__ = [
    "ConfigFileParser",
    "ContextRules",
    "ContextTracker",
    "DEFAULT_RULES",
    "DirectoryScanner",
    "detect_context_open",
    "is_contextual",
    "parse",
    "reassemble",
]
