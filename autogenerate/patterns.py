"""Glob patterns over delimited module names.

A glob is split on the namespace delimiter. Each segment is a literal, ``*``
(exactly one segment) or ``**`` (zero or more segments). Globs compile to an
anchored regular expression with one capture group per wildcard, so captures
are exposed positionally the way regex groups are.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from autogenerate.constants import (
    DEFAULT_DELIMITER,
    MULTI_SEGMENT_WILDCARD,
    PATH_SEPARATORS,
    SEGMENT_WILDCARD,
    SOURCE_SUFFIXES,
)
from autogenerate.errors import MalformedPatternError


class TokenKind(str, Enum):
    LITERAL = "literal"
    SEGMENT = "segment"
    MULTI = "multi"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


@dataclass(frozen=True)
class PatternMatch:
    name: str
    captures: tuple[str, ...]


@dataclass(frozen=True)
class Pattern:
    source: str
    delimiter: str
    tokens: tuple[Token, ...]
    regex: re.Pattern[str] = field(compare=False, repr=False)
    anchored: bool = True

    @property
    def is_glob(self) -> bool:
        return bool(self.tokens)

    def _search(self, name: str) -> re.Match[str] | None:
        if self.anchored:
            return self.regex.fullmatch(name)
        return self.regex.search(name)

    def match(self, name: str) -> PatternMatch | None:
        found = self._search(name)
        if found is None:
            return None
        captures = tuple(group or "" for group in found.groups())
        return PatternMatch(name=name, captures=captures)

    def matches(self, name: str) -> bool:
        return self._search(name) is not None

    def admits_prefix(self, name: str, require_literal: bool = True) -> bool:
        """Return True if some longer name under ``name`` could match.

        With ``require_literal`` at least one literal token has to line up
        with a segment of ``name``, so a leading ``**`` or ``*`` alone never
        claims a prefix. Regex-backed patterns never admit prefixes.
        """
        if not self.is_glob or not name:
            return False
        segments = name.split(self.delimiter)
        return _admits_longer(self.tokens, segments, 0, 0, not require_literal)

    def __str__(self) -> str:
        return self.source


PatternLike = Union[str, Pattern, re.Pattern]


def _admits_longer(
    tokens: tuple[Token, ...], segments: list[str], ti: int, si: int, anchored: bool
) -> bool:
    if si == len(segments):
        return anchored and ti < len(tokens)
    if ti == len(tokens):
        return False
    token = tokens[ti]
    if token.kind == TokenKind.MULTI:
        return _admits_longer(
            tokens, segments, ti + 1, si, anchored
        ) or _admits_longer(tokens, segments, ti, si + 1, anchored)
    if token.kind == TokenKind.LITERAL:
        if token.text != segments[si]:
            return False
        anchored = True
    return _admits_longer(tokens, segments, ti + 1, si + 1, anchored)


def _tokenize(glob: str, delimiter: str) -> list[Token]:
    tokens: list[Token] = []
    for segment in glob.split(delimiter):
        if not segment:
            raise MalformedPatternError(glob, "empty segment")
        if segment == MULTI_SEGMENT_WILDCARD:
            tokens.append(Token(TokenKind.MULTI, segment))
        elif segment == SEGMENT_WILDCARD:
            tokens.append(Token(TokenKind.SEGMENT, segment))
        elif SEGMENT_WILDCARD in segment:
            raise MalformedPatternError(glob, f"wildcard inside segment {segment!r}")
        else:
            tokens.append(Token(TokenKind.LITERAL, segment))
    return tokens


def _to_regex(tokens: list[Token], delimiter: str) -> str:
    sep = re.escape(delimiter)
    segment = f"(?:(?!{sep}).)+"
    segments = f"{segment}(?:{sep}{segment})*"

    parts: list[str] = []
    needs_sep = False
    for index, token in enumerate(tokens):
        is_last = index == len(tokens) - 1
        if token.kind == TokenKind.MULTI:
            # optional group owns its adjacent delimiter
            if needs_sep:
                parts.append(f"(?:{sep}({segments}))?")
            elif is_last and index > 0:
                # earlier groups may have consumed a trailing delimiter
                parts.append(f"(?:({segments})|(?<!{sep}))")
            elif is_last:
                parts.append(f"({segments})?")
            else:
                parts.append(f"(?:({segments}){sep})?")
            continue

        if needs_sep:
            parts.append(sep)
        if token.kind == TokenKind.SEGMENT:
            parts.append(f"({segment})")
        else:
            parts.append(re.escape(token.text))
        needs_sep = True

    return "".join(parts)


def compile_pattern(glob: PatternLike, delimiter: str = DEFAULT_DELIMITER) -> Pattern:
    if isinstance(glob, Pattern):
        return glob
    if isinstance(glob, re.Pattern):
        return Pattern(
            source=glob.pattern,
            delimiter=delimiter,
            tokens=(),
            regex=glob,
            anchored=False,
        )
    if not isinstance(glob, str):
        raise TypeError(f"Unsupported pattern type: {type(glob).__name__}")
    if not delimiter:
        raise ValueError("Delimiter must be a non-empty string")
    if not glob:
        raise MalformedPatternError(glob, "empty pattern")

    tokens = _tokenize(glob, delimiter)
    return Pattern(
        source=glob,
        delimiter=delimiter,
        tokens=tuple(tokens),
        regex=re.compile(_to_regex(tokens, delimiter)),
    )


def compile_patterns(
    patterns: PatternLike | Iterable[PatternLike], delimiter: str = DEFAULT_DELIMITER
) -> tuple[Pattern, ...]:
    if isinstance(patterns, (str, Pattern, re.Pattern)):
        return (compile_pattern(patterns, delimiter),)
    return tuple(compile_pattern(item, delimiter) for item in patterns)


def canonicalize_name(name: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Turn a path-style request (``pkg/mod.py``) into ``pkg.mod``.

    With the default ``.`` delimiter a file suffix is only stripped from
    path-style names, since ``pkg.py`` is also a valid dotted module name.
    """
    path_style = any(separator in name for separator in PATH_SEPARATORS)
    if path_style or delimiter != DEFAULT_DELIMITER:
        for suffix in SOURCE_SUFFIXES:
            if name.endswith(suffix):
                name = name[: -len(suffix)]
                break
    for separator in PATH_SEPARATORS:
        name = name.replace(separator, delimiter)
    return name


def to_delimited(fullname: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Spell a dotted import name with ``delimiter`` between segments."""
    if delimiter == DEFAULT_DELIMITER:
        return fullname
    return fullname.replace(DEFAULT_DELIMITER, delimiter)
