"""Configurable prefix tables for context tracking."""

from rtxconfig.rules.loader import ContextRuleLoader

__all__ = ["ContextRuleLoader"]
