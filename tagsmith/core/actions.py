#!/usr/bin/env python3
"""
Field Edit Actions
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Field assignments collected while parsing the command line and applied to
each file, in order, before it is saved. Later actions on the same field
overwrite earlier ones.
"""

from dataclasses import dataclass
from typing import Iterable, List, Union

from .fields import FIELDS, FieldSpec


@dataclass(frozen=True)
class SetField:
    """Set a field to an explicit value."""
    field: FieldSpec
    value: Union[str, int]

    def apply(self, tags):
        """
        Write the value through the tag accessor.

        Args:
            tags: Accessor with a set(name, value) method
        """
        tags.set(self.field.name, self.value)

    def describe(self) -> str:
        """
        Short human-readable form used in log messages.

        Returns:
            str: e.g. "artist='Portishead'"
        """
        return f"{self.field.name}={self.value!r}"


@dataclass(frozen=True)
class ClearField:
    """Clear a field (absent for text, 0 for integers)."""
    field: FieldSpec

    def apply(self, tags):
        """
        Clear the field through the tag accessor.

        Args:
            tags: Accessor with a set(name, value) method
        """
        tags.set(self.field.name, self.field.empty)

    def describe(self) -> str:
        """
        Short human-readable form used in log messages.

        Returns:
            str: e.g. "no-artist"
        """
        return f"no-{self.field.name}"


FieldAction = Union[SetField, ClearField]


def clear_all() -> List[ClearField]:
    """
    One ClearField per registry field, in registry order.

    Returns:
        List[ClearField]: Actions clearing every field
    """
    return [ClearField(field) for field in FIELDS]


def apply_actions(actions: Iterable[FieldAction], tags):
    """
    Apply field actions to a tag accessor in order.

    Args:
        actions (Iterable[FieldAction]): Actions in command-line order
        tags: Accessor with a set(name, value) method
    """
    for action in actions:
        action.apply(tags)
