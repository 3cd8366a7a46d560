#!/usr/bin/env python3
"""
Spec Compiler
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Compiles a filename spec such as "%n - %_T" into an ordered tuple of
literal and placeholder tokens. The same compiled spec drives both
directions: matching a filename to pull tags out of it, and rendering tags
into a new filename.

Placeholder syntax:
  %<letter>          field by letter, lowercase downcases the value
  %<mode><letter>    mode is one non-alphanumeric character (or "_") used as
                     the substitution character when renaming

Field letters:
  l album, r artist, c comment, g genre, t title, n track, y year
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple, Union

from .fields import FieldSpec, field_for_code

# "%", an optional mode character (anything but a letter or digit), one letter
PLACEHOLDER_PATTERN = re.compile(r"%([\W_])?([A-Za-z])")


class CaseMode(Enum):
    """How a placeholder treats the case of its value."""
    PRESERVE = "preserve"
    DOWNCASE = "downcase"


@dataclass(frozen=True)
class LiteralToken:
    """Spec text outside placeholders, copied verbatim in both directions."""
    text: str


@dataclass(frozen=True)
class PlaceholderToken:
    """One field reference inside a spec."""
    field: FieldSpec
    substitute: str = ""
    case: CaseMode = CaseMode.PRESERVE

    @property
    def code(self) -> str:
        """
        The field letter this placeholder refers to.

        Returns:
            str: Lowercase field code
        """
        return self.field.code


Token = Union[LiteralToken, PlaceholderToken]


@dataclass(frozen=True)
class CompiledSpec:
    """An immutable, ordered token sequence compiled from a spec string."""
    source: str
    tokens: Tuple[Token, ...]

    def __iter__(self) -> Iterator[Token]:
        """
        Iterate over tokens in source order.

        Returns:
            Iterator[Token]: Literal and placeholder tokens
        """
        return iter(self.tokens)

    def __len__(self) -> int:
        """
        Number of tokens.

        Returns:
            int: Token count
        """
        return len(self.tokens)

    def placeholders(self) -> Iterator[PlaceholderToken]:
        """
        Iterate over placeholder tokens only, in source order.

        Returns:
            Iterator[PlaceholderToken]: The placeholders of the spec
        """
        return (token for token in self.tokens if isinstance(token, PlaceholderToken))


def compile_spec(spec: str) -> CompiledSpec:
    """
    Compile a spec string into tokens.

    Scans left to right. A "%" that does not start a placeholder stays part
    of the surrounding literal text.

    Args:
        spec (str): Template text, e.g. "%n - %R - %_t"

    Returns:
        CompiledSpec: The compiled token sequence

    Raises:
        InvalidField: If a placeholder uses a letter that is not a field code
    """
    tokens = []
    position = 0

    for match in PLACEHOLDER_PATTERN.finditer(spec):
        if match.start() > position:
            tokens.append(LiteralToken(spec[position:match.start()]))

        mode, letter = match.groups()
        tokens.append(PlaceholderToken(
            field=field_for_code(letter),
            substitute=mode or "",
            case=CaseMode.DOWNCASE if letter.islower() else CaseMode.PRESERVE,
        ))
        position = match.end()

    if position < len(spec):
        tokens.append(LiteralToken(spec[position:]))

    return CompiledSpec(source=spec, tokens=tuple(tokens))
