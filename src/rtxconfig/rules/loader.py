"""YAML loader for context rule tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from rtxconfig.ingest.context import (
    DEFAULT_CONTEXTUAL_PREFIXES,
    DEFAULT_PARENT_PREFIXES,
    ContextRules,
)
from rtxconfig.models import ContextKind

logger = logging.getLogger(__name__)

KIND_MAP = {
    "tunnel": ContextKind.TUNNEL,
    "pp": ContextKind.PP,
    "ipsec-tunnel": ContextKind.IPSEC_TUNNEL,
    "ipsec_tunnel": ContextKind.IPSEC_TUNNEL,
}


class ContextRuleLoader:
    """Load contextual and parent prefix tables from YAML.

    Example document::

        extend: true
        contextual_prefixes:
          tunnel: ["tunnel ", "ipsec ", "l2tp ", "description "]
          pp: ["pp ", "pppoe ", "ppp ", "ip pp ", "description "]
        parent_prefixes: ["l2tp ", "tunnel endpoint"]

    Kinds left out keep the built-in prefixes. With ``extend: true`` the
    listed prefixes are added to the built-in ones instead of replacing them.
    """

    def load_file(self, filepath: str | Path) -> ContextRules:
        """Load rules from a single YAML file."""
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Rules file not found: {filepath}")

        with open(filepath) as f:
            data = self._safe_load(f, filepath.name)

        rules = self.load_data(data or {})
        logger.info("Loaded context rules from %s", filepath.name)
        return rules

    def load_text(self, text: str) -> ContextRules:
        return self.load_data(self._safe_load(text, "<text>") or {})

    def load_data(self, data: dict[str, Any]) -> ContextRules:
        """Build rules from an already-decoded mapping."""
        if not isinstance(data, dict):
            raise ValueError("Rules document must be a mapping")

        extend = bool(data.get("extend", False))
        contextual = dict(DEFAULT_CONTEXTUAL_PREFIXES)
        sections = data.get("contextual_prefixes") or {}
        if not isinstance(sections, dict):
            raise ValueError("contextual_prefixes must be a mapping of kind to prefixes")
        for kind_name, prefixes in sections.items():
            kind = KIND_MAP.get(str(kind_name).lower())
            if kind is None:
                raise ValueError(f"Unknown context kind in rules: {kind_name!r}")
            values = self._prefix_list(prefixes, f"contextual_prefixes.{kind_name}")
            contextual[kind] = self._merge(contextual[kind], values, extend)

        parent = DEFAULT_PARENT_PREFIXES
        if "parent_prefixes" in data:
            values = self._prefix_list(data["parent_prefixes"], "parent_prefixes")
            parent = self._merge(parent, values, extend)

        return ContextRules(contextual_prefixes=contextual, parent_prefixes=parent)

    def _safe_load(self, stream: Any, source: str) -> Any:
        try:
            return yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {source}: {e}") from e

    def _prefix_list(self, value: Any, where: str) -> tuple[str, ...]:
        if value is None:
            return ()
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{where} must be a list of strings")
        return tuple(value)

    def _merge(self, base: tuple[str, ...], values: tuple[str, ...],
               extend: bool) -> tuple[str, ...]:
        if not extend:
            return values
        return base + tuple(v for v in values if v not in base)
