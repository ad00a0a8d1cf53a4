"""Directory scanner for configuration dumps."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from rtxconfig.ingest.parser import ConfigFileParser
from rtxconfig.models import ParsedConfig

logger = logging.getLogger(__name__)

CONFIG_EXTENSIONS = {".txt", ".conf", ".cfg", ".config", ".rtx"}

# Keywords that show up near the top of a typical RTX dump.
CONFIG_INDICATORS = ("login password", "administrator password", "ip lan1 ",
                     "tunnel select", "pp select", "console character",
                     "timezone ")


class DirectoryScanner:
    """Scan a directory for configuration dumps and parse each one."""

    def __init__(self, parser: ConfigFileParser | None = None) -> None:
        self.parser = parser or ConfigFileParser()

    def scan(self, directory: str | Path, recursive: bool = True) -> list[ParsedConfig]:
        """Parse every configuration dump found under ``directory``."""
        directory = Path(directory)
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")

        configs = []
        for filepath in sorted(self._find_configs(directory, recursive)):
            try:
                config = self.parser.parse_file(filepath)
            except OSError as e:
                logger.warning("Failed to read %s: %s", filepath, e)
                continue
            configs.append(config)
            logger.info("Parsed: %s (%d commands, %d contexts)",
                        filepath.name, config.command_count, len(config.contexts))
        return configs

    def _find_configs(self, directory: Path, recursive: bool) -> Iterator[Path]:
        pattern = "**/*" if recursive else "*"
        for path in directory.glob(pattern):
            if path.is_file() and (
                path.suffix.lower() in CONFIG_EXTENSIONS
                or self._looks_like_config(path)
            ):
                yield path

    def _looks_like_config(self, path: Path) -> bool:
        """Heuristic check if a file looks like an RTX configuration dump."""
        try:
            if path.stat().st_size > 10 * 1024 * 1024:  # Skip files > 10MB
                return False
            head = path.read_text(errors="replace")[:500].lower()
        except OSError:
            return False
        return any(ind in head for ind in CONFIG_INDICATORS)
