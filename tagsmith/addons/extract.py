#!/usr/bin/env python3
"""
Tag Extractor
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Fills in tags from a file's name using a compiled spec. Every placeholder
becomes a capture group: text fields take one or more of any character,
integer fields one or more digits. The whole filename stem has to match.

Example:
  spec "%n - %r - %t" against "03 - Portishead - Glory Box"
  gives track=3, artist="Portishead", title="Glory Box"
"""

import logging
import re
from typing import Any, Dict, Pattern, Tuple

from ..core.template import CompiledSpec, LiteralToken

logger = logging.getLogger('TagExtractor')

TEXT_GROUP = r"(.+)"
INTEGER_GROUP = r"(\d+)"


def build_pattern(spec: CompiledSpec) -> Pattern:
    """
    Build the regular expression that matches filenames produced by a spec.

    Args:
        spec (CompiledSpec): The compiled spec

    Returns:
        Pattern: Compiled pattern with one group per placeholder, in spec order
    """
    parts = []
    for token in spec:
        if isinstance(token, LiteralToken):
            parts.append(re.escape(token.text))
        elif token.field.is_integer:
            parts.append(INTEGER_GROUP)
        else:
            parts.append(TEXT_GROUP)
    return re.compile("".join(parts))


def extract(spec: CompiledSpec, stem: str) -> Tuple[Dict[str, Any], bool]:
    """
    Match a filename stem against a spec.

    Args:
        spec (CompiledSpec): The compiled spec
        stem (str): Filename without directory or extension

    Returns:
        Tuple[Dict[str, Any], bool]: Field name to value, and whether the stem
        matched. The dict is empty when it did not match. A field used twice
        keeps its last capture.
    """
    match = build_pattern(spec).fullmatch(stem)
    if match is None:
        logger.debug(f"'{stem}' does not match '{spec.source}'")
        return {}, False

    values = {}
    for placeholder, captured in zip(spec.placeholders(), match.groups()):
        field = placeholder.field
        values[field.name] = int(captured, 10) if field.is_integer else captured
    return values, True


def extract_into(spec: CompiledSpec, stem: str, tags) -> bool:
    """
    Match a filename stem and write the captured values to a tag accessor.

    Args:
        spec (CompiledSpec): The compiled spec
        stem (str): Filename without directory or extension
        tags: Accessor with a set(name, value) method

    Returns:
        bool: True if the stem matched and values were written
    """
    values, matched = extract(spec, stem)
    for name, value in values.items():
        tags.set(name, value)
    return matched
