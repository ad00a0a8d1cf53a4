"""Context classification and tracking for RTX-style configuration dumps.

A dump is flat text, but some commands open a scope that later lines belong
to until the scope is closed explicitly (``tunnel enable 1``) or implicitly
(a non-indented line that does not belong to the scope)::

    tunnel select 1
     tunnel encapsulation l2tpv3
     ipsec tunnel 101
      ipsec sa policy 101 1 esp aes-cbc sha-hmac
     l2tp tunnel auth on secret
     tunnel enable 1
    ip route default gateway 192.0.2.1

The dispatch is table driven: ordered ``(pattern, kind)`` openers and
per-kind prefix allow-lists, not a grammar.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from rtxconfig.models import Context, ContextKind

logger = logging.getLogger(__name__)

CONTEXT_OPENERS: tuple[tuple[re.Pattern[str], ContextKind], ...] = (
    (re.compile(r"^tunnel\s+select\s+([0-9]+)\s*$"), ContextKind.TUNNEL),
    (re.compile(r"^pp\s+select\s+(anonymous)\s*$"), ContextKind.PP),
    (re.compile(r"^pp\s+select\s+([0-9]+)\s*$"), ContextKind.PP),
    (re.compile(r"^ipsec\s+tunnel\s+([0-9]+)\s*$"), ContextKind.IPSEC_TUNNEL),
)

CONTEXT_EXIT_RE = re.compile(r"^(tunnel|pp)\s+(enable|disable)\s+")

DEFAULT_CONTEXTUAL_PREFIXES: dict[ContextKind, tuple[str, ...]] = {
    ContextKind.TUNNEL: ("tunnel ", "ipsec ", "l2tp ", "description "),
    ContextKind.PP: ("pp ", "pppoe ", "ppp ", "ip pp ", "description "),
    ContextKind.IPSEC_TUNNEL: ("ipsec ",),
}

# Commands that belong to the enclosing tunnel even when they follow a
# nested ipsec tunnel block.
DEFAULT_PARENT_PREFIXES: tuple[str, ...] = (
    "l2tp ",
    "tunnel endpoint",
    "tunnel enable",
    "tunnel disable",
    "ip tunnel ",
)


def get_indent_level(line: str) -> int:
    """Number of leading spaces and tabs."""
    return len(line) - len(line.lstrip(" \t"))


def detect_context_open(trimmed_line: str) -> Context | None:
    """Return the context a line opens, or None if it opens none."""
    for pattern, kind in CONTEXT_OPENERS:
        m = pattern.match(trimmed_line)
        if m:
            ident = m.group(1)
            if ident.isdigit():
                return Context(kind=kind, numeric_id=int(ident))
            return Context(kind=kind, name=ident)
    return None


def is_context_exit(trimmed_line: str) -> bool:
    """True for ``tunnel|pp enable|disable <x>`` lines."""
    return CONTEXT_EXIT_RE.match(trimmed_line) is not None


@dataclass(frozen=True)
class ContextRules:
    """Prefix tables that decide which lines stay inside a context."""

    contextual_prefixes: dict[ContextKind, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_CONTEXTUAL_PREFIXES))
    parent_prefixes: tuple[str, ...] = DEFAULT_PARENT_PREFIXES

    def detect_open(self, trimmed_line: str) -> Context | None:
        return detect_context_open(trimmed_line)

    def is_exit(self, trimmed_line: str) -> bool:
        return is_context_exit(trimmed_line)

    def is_contextual(self, trimmed_line: str, context: Context | None) -> bool:
        """True if the line is known to belong inside ``context``."""
        if context is None:
            return False
        prefixes = self.contextual_prefixes.get(context.kind, ())
        return bool(prefixes) and trimmed_line.startswith(prefixes)

    def returns_to_parent(self, trimmed_line: str) -> bool:
        return bool(self.parent_prefixes) and trimmed_line.startswith(self.parent_prefixes)


DEFAULT_RULES = ContextRules()


def is_contextual(trimmed_line: str, context: Context | None) -> bool:
    """Check a line against the built-in contextual prefix tables."""
    return DEFAULT_RULES.is_contextual(trimmed_line, context)


class ContextTracker:
    """Tracks the active context while a dump is consumed line by line.

    ``current`` is the context new lines are tagged with; ``stack`` holds the
    tunnel suspended while a nested ipsec tunnel is active. The tracker also
    records every distinct context in first-seen order. One tracker serves
    one parse call.
    """

    def __init__(self, rules: ContextRules | None = None) -> None:
        self.rules = rules or DEFAULT_RULES
        self.current: Context | None = None
        self.stack: list[Context] = []
        self.contexts: list[Context] = []
        self._seen: set[Context] = set()

    def feed(self, trimmed_line: str, indent_level: int) -> Context | None:
        """Consume one command line and return the context to tag it with."""
        opened = self.rules.detect_open(trimmed_line)
        if opened is not None:
            self._open(opened)
            return self.current

        if self.current is not None and self.rules.is_exit(trimmed_line):
            # ``tunnel enable 1`` right after ``ipsec tunnel 101`` closes the
            # tunnel, not the ipsec block.
            self._return_to_parent(trimmed_line)
            tag = self.current
            self.current = None
            self.stack.clear()
            return tag

        if (indent_level == 0 and self.current is not None
                and not self.rules.is_contextual(trimmed_line, self.current)):
            self.current = self.stack.pop() if self.stack else None

        self._return_to_parent(trimmed_line)
        return self.current

    def _return_to_parent(self, trimmed_line: str) -> None:
        if (self.current is not None
                and self.current.kind == ContextKind.IPSEC_TUNNEL
                and self.stack
                and self.rules.returns_to_parent(trimmed_line)):
            self.current = self.stack.pop()

    def _open(self, context: Context) -> None:
        if (context.kind == ContextKind.IPSEC_TUNNEL
                and self.current is not None
                and self.current.kind == ContextKind.TUNNEL):
            self.stack.append(self.current)
        elif context.kind in (ContextKind.TUNNEL, ContextKind.PP):
            self.stack.clear()

        self.current = context
        if context not in self._seen:
            self._seen.add(context)
            self.contexts.append(context)
            logger.debug("Context opened: %s", context.ref)

    @property
    def depth(self) -> int:
        return len(self.stack)
