#!/usr/bin/env python3
"""
Field Registry
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

The fixed set of tag fields tagsmith knows about. Each field has a single
letter code (used by placeholders and short flags), a name (used by long
flags and by the tag accessor) and a value type.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from .exceptions import InvalidField

_INTEGER = re.compile(r"[+-]?[0-9]+")


class ValueType(Enum):
    """Value types a field can hold."""
    TEXT = "text"
    INTEGER = "integer"


@dataclass(frozen=True)
class FieldSpec:
    """A single tag field: letter code, name and value type."""
    code: str
    name: str
    value_type: ValueType

    @property
    def is_integer(self) -> bool:
        """
        Check whether the field holds an integer.

        Returns:
            bool: True for integer fields (track, year)
        """
        return self.value_type is ValueType.INTEGER

    @property
    def empty(self) -> Optional[int]:
        """
        The value that means "absent" for this field.

        Returns:
            Optional[int]: 0 for integer fields, None for text fields
        """
        return 0 if self.is_integer else None

    def parse(self, raw: str) -> Union[str, int]:
        """
        Convert user input into a value of this field's type.

        Args:
            raw (str): Text given on the command line or captured from a filename

        Returns:
            Union[str, int]: The text unchanged, or the base-10 integer

        Raises:
            ValueError: If an integer field gets input that is not base-10
        """
        if not self.is_integer:
            return raw
        text = raw.strip()
        if not _INTEGER.fullmatch(text):
            raise ValueError(f"invalid integer for {self.name}: '{raw}'")
        return int(text, 10)

    def format(self, value: Any) -> str:
        """
        Render a value as the text used in filenames.

        Track numbers are zero-padded to two digits, every other integer is
        plain decimal. Absent values render as an empty string.

        Args:
            value (Any): The field value (str, int or None)

        Returns:
            str: Text form of the value
        """
        if self.is_integer:
            if not value:
                return ""
            if self.name == "track":
                return f"{int(value):02d}"
            return str(int(value))
        return value or ""


FIELDS = (
    FieldSpec("l", "album", ValueType.TEXT),
    FieldSpec("r", "artist", ValueType.TEXT),
    FieldSpec("c", "comment", ValueType.TEXT),
    FieldSpec("g", "genre", ValueType.TEXT),
    FieldSpec("t", "title", ValueType.TEXT),
    FieldSpec("n", "track", ValueType.INTEGER),
    FieldSpec("y", "year", ValueType.INTEGER),
)

_BY_CODE: Dict[str, FieldSpec] = {field.code: field for field in FIELDS}
_BY_NAME: Dict[str, FieldSpec] = {field.name: field for field in FIELDS}


def field_for_code(code: str) -> FieldSpec:
    """
    Look up a field by its letter, in either case.

    Args:
        code (str): Single letter such as 'r' or 'R'

    Returns:
        FieldSpec: The matching registry entry

    Raises:
        InvalidField: If no field uses that letter
    """
    try:
        return _BY_CODE[code.lower()]
    except KeyError:
        valid = ", ".join(field.code for field in FIELDS)
        raise InvalidField(code, f"Unknown field letter '{code}' (valid: {valid})") from None


def field_for_name(name: str) -> FieldSpec:
    """
    Look up a field by its name.

    Args:
        name (str): Field name such as 'artist'

    Returns:
        FieldSpec: The matching registry entry

    Raises:
        InvalidField: If no field has that name
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        valid = ", ".join(field.name for field in FIELDS)
        raise InvalidField(name, f"Unknown field '{name}' (valid: {valid})") from None
