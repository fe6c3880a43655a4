"""Lexical clean-up applied to file contents before any signal check."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .constants import DIRECTIVE

_DIRECTIVE_RE = re.compile(r"""['"]use client['"]""")
_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_STRING_LITERAL_RE = re.compile(
    r"""
    "(?:\\.|[^"\\\n])*"
    | '(?:\\.|[^'\\\n])*'
    | `(?:\\.|[^`\\])*`
    """,
    re.VERBOSE,
)


def normalize_directive(content: str) -> str:
    """Rewrite every quoted ``use client`` spelling to the canonical form."""
    return _DIRECTIVE_RE.sub(DIRECTIVE, content)


def strip_comments(content: str) -> str:
    """Remove line comments, then every block comment.

    Block comments are dropped even when they hold the directive, so a
    commented-out ``'use client'`` never counts as present.
    """
    content = _LINE_COMMENT_RE.sub("", content)
    return _BLOCK_COMMENT_RE.sub("", content)


def strip_string_literals(content: str) -> str:
    """Remove single, double and template string literals."""
    return _STRING_LITERAL_RE.sub("", content)


@dataclass
class PreparedSource:
    """Normalised, comment-free view of one file handed to detectors."""

    code: str
    _without_literals: str | None = field(default=None, repr=False)

    @classmethod
    def from_text(cls, content: str) -> "PreparedSource":
        return cls(code=strip_comments(normalize_directive(content)))

    @property
    def code_without_literals(self) -> str:
        if self._without_literals is None:
            self._without_literals = strip_string_literals(self.code)
        return self._without_literals

    def has_directive(self) -> bool:
        return DIRECTIVE in self.code
