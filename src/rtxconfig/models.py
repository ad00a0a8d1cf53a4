"""Core data models for rtxconfig."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


class ContextKind(enum.Enum):
    """Configuration scopes a command can belong to."""

    GLOBAL = "global"
    TUNNEL = "tunnel"
    PP = "pp"
    IPSEC_TUNNEL = "ipsec-tunnel"


@dataclass(frozen=True, eq=False)
class Context:
    """A configuration scope opened by a select-style command.

    Two contexts are the same scope when their kind matches and either their
    names match (named contexts such as ``pp select anonymous``) or, for
    unnamed ones, their numeric ids match.
    """

    kind: ContextKind
    numeric_id: int = 0
    name: str | None = None

    @property
    def key(self) -> tuple[ContextKind, int | str]:
        if self.name is not None:
            return (self.kind, self.name)
        return (self.kind, self.numeric_id)

    @property
    def ref(self) -> str:
        """Textual reference such as ``tunnel:1`` or ``pp:anonymous``."""
        ident = self.name if self.name is not None else self.numeric_id
        return f"{self.kind.value}:{ident}"

    @classmethod
    def from_ref(cls, ref: str) -> Context:
        """Build a context from a reference produced by :attr:`ref`."""
        kind_str, sep, ident = ref.strip().partition(":")
        if not sep or not ident:
            raise ValueError(f"Invalid context reference: {ref!r}")
        try:
            kind = ContextKind(kind_str)
        except ValueError:
            raise ValueError(f"Unknown context kind: {kind_str!r}") from None
        if kind == ContextKind.GLOBAL:
            raise ValueError("The global scope is not a selectable context")
        if ident.isdigit():
            return cls(kind=kind, numeric_id=int(ident))
        return cls(kind=kind, name=ident)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.ref


@dataclass
class Command:
    """One logical configuration line after reassembly."""

    text: str
    context: Context | None = None
    line_number: int = 1
    indent_level: int = 0

    @property
    def is_global(self) -> bool:
        return self.context is None


@dataclass
class ParsedConfig:
    """A configuration dump segmented into context-tagged commands."""

    raw_text: str
    line_count: int = 0
    command_count: int = 0
    contexts: list[Context] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)
    device_name: str = "unknown"
    source_file: str = ""
    parsed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict[str, Any] = field(default_factory=dict)

    def commands_in_context(self, context: Context) -> list[Command]:
        """All commands tagged with the given context, in original order."""
        return [c for c in self.commands
                if c.context is not None and c.context == context]

    def global_commands(self) -> list[Command]:
        """All commands outside any context, in original order."""
        return [c for c in self.commands if c.context is None]

    def contexts_of_kind(self, kind: ContextKind) -> list[Context]:
        return [c for c in self.contexts if c.kind == kind]

    def get_context(self, ref: str) -> Context | None:
        """Look up a recorded context by reference, e.g. ``tunnel:1``."""
        wanted = Context.from_ref(ref)
        for ctx in self.contexts:
            if ctx == wanted:
                return ctx
        return None

    def global_lines(self, *prefixes: str, exclude: tuple[str, ...] = ()) -> list[str]:
        """Texts of global commands starting with any of ``prefixes``.

        With no prefixes every global command matches. Commands starting with
        an ``exclude`` prefix are dropped, so ``global_lines("ip filter ",
        exclude=("ip filter dynamic ",))`` selects only static filters.
        """
        lines = []
        for cmd in self.global_commands():
            if prefixes and not cmd.text.startswith(prefixes):
                continue
            if exclude and cmd.text.startswith(exclude):
                continue
            lines.append(cmd.text)
        return lines

    def global_section(self, *prefixes: str, exclude: tuple[str, ...] = ()) -> str:
        return "\n".join(self.global_lines(*prefixes, exclude=exclude))

    def context_section(self, context: Context) -> str:
        """The commands of one context joined as a config fragment."""
        return "\n".join(c.text for c in self.commands_in_context(context))
