"""Repair of terminal line wraps in configuration dumps.

The router's terminal wraps ``show config`` output at a fixed column without
regard for token boundaries. Two wrap styles show up in practice:

* value suffixes, where a parameter such as ``edns=on`` is broken before the
  ``=`` and the continuation line starts with ``=``;
* long space-separated filter-id lists, where the continuation line starts
  with a digit. When the continuation has no leading whitespace and the
  previous line ends in a digit, a single number was split in two::

      ip lan2 secure filter in 200020 20010
      0 200102

  joins to ``... 200020 200100 200102``, whereas an indented continuation::

      ip lan2 secure filter in 200020 200021
       200022 200023

  joins with a space.

Blank lines never take part in a join in either direction.
"""

from __future__ import annotations

import re

_CONTINUATION_RE = re.compile(r"^\s*[0-9]")
_DIGITS = "0123456789"


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and bare CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def join_value_suffixes(lines: list[str]) -> list[str]:
    """Append ``=``-prefixed continuation lines to the line before them."""
    joined: list[str] = []
    for line in lines:
        trimmed = line.strip()
        if trimmed.startswith("=") and joined and joined[-1].strip():
            joined[-1] = joined[-1].rstrip() + trimmed
        else:
            joined.append(line)
    return joined


def _ends_with_digit(s: str) -> bool:
    # Untrimmed: trailing whitespace means the number was complete.
    return s != "" and s[-1] in _DIGITS


def _starts_with_digit(s: str) -> bool:
    return s != "" and s[0] in _DIGITS


def join_token_lists(lines: list[str]) -> list[str]:
    """Merge digit-led continuation lines into the logical line they extend."""
    result: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        while (line.strip() and i + 1 < len(lines)
               and _CONTINUATION_RE.match(lines[i + 1].strip())):
            i += 1
            raw_next = lines[i]
            # The raw continuation is checked before trimming; leading
            # whitespace is the only signal separating the two wrap styles.
            if _ends_with_digit(line) and _starts_with_digit(raw_next):
                line = line + raw_next.strip()
            else:
                line = line + " " + raw_next.strip()
        result.append(line)
        i += 1
    return result


def reassemble(raw: str) -> str:
    """Return ``raw`` with line endings normalized and wrapped lines rejoined."""
    lines = normalize_line_endings(raw).split("\n")
    lines = join_value_suffixes(lines)
    lines = join_token_lists(lines)
    return "\n".join(lines)
