#!/usr/bin/env python3
"""
Tag Renamer
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Builds filenames from tags using a compiled spec and renames files to them.
Each placeholder is replaced by its field's value, downcased for lowercase
letters, and passed through the sanitizer with the placeholder's own
substitution character. The original file extension is kept.

Examples:
  "%n-%_t"     with track=3, title="Glory Box"   ->  03-glory_box
  "%R - %-T"   with artist="Portishead"          ->  Portishead - Glory-Box
  "%R - %T"    same tags                         ->  Portishead - GloryBox
"""

import logging
import os
from typing import Dict, Optional, Pattern

from ..core.exceptions import RenameCollision
from ..core.fields import FIELDS
from ..core.sanitize import sanitize
from ..core.template import CaseMode, CompiledSpec, LiteralToken

logger = logging.getLogger('TagRenamer')


def field_text(field, tags) -> str:
    """
    Current text of a field as it appears in a filename.

    Args:
        field (FieldSpec): The registry field
        tags: Mapping or accessor answering get(name)

    Returns:
        str: The value as text, empty if the field is absent
    """
    return field.format(tags.get(field.name))


def render(spec: CompiledSpec, tags, dangerous: Optional[Pattern] = None) -> str:
    """
    Substitute tag values into a spec.

    Works one field at a time in registry order: each field's value is looked
    up once and then applied to every placeholder for that field, each with
    its own case mode and substitution character.

    Args:
        spec (CompiledSpec): The compiled spec
        tags: Mapping or accessor answering get(name)
        dangerous (Pattern, optional): Dangerous-character class for the
            sanitizer; None leaves everything but apostrophes alone

    Returns:
        str: The rendered name, without extension
    """
    rendered: Dict[int, str] = {}

    for field in FIELDS:
        occurrences = [
            (index, token) for index, token in enumerate(spec.tokens)
            if not isinstance(token, LiteralToken) and token.field == field
        ]
        if not occurrences:
            continue

        value = field_text(field, tags)
        for index, token in occurrences:
            text = value.lower() if token.case is CaseMode.DOWNCASE else value
            rendered[index] = sanitize(text, token.substitute, dangerous)

    return "".join(
        token.text if isinstance(token, LiteralToken) else rendered[index]
        for index, token in enumerate(spec.tokens)
    )


def new_filename(spec: CompiledSpec, tags, source: str, dangerous: Optional[Pattern] = None) -> str:
    """
    Build the new filename for a file, keeping its extension.

    Args:
        spec (CompiledSpec): The compiled spec
        tags: Mapping or accessor answering get(name)
        source (str): Current path of the file
        dangerous (Pattern, optional): Dangerous-character class for the sanitizer

    Returns:
        str: New base filename including the original extension
    """
    extension = os.path.splitext(source)[1]
    return f"{render(spec, tags, dangerous)}{extension}"


def rename_file(source: str, new_name: str, dry_run: bool = False) -> str:
    """
    Rename a file within its directory without overwriting anything.

    The existence check and the rename are two separate steps, so another
    process can still create the target in between.

    Args:
        source (str): Current path of the file
        new_name (str): New base filename
        dry_run (bool): Log the rename without performing it

    Returns:
        str: The new path (equal to source if the name did not change)

    Raises:
        RenameCollision: If a different file already exists at the target
        OSError: If the rename itself fails
    """
    directory = os.path.dirname(source)
    target = os.path.join(directory, new_name)

    if os.path.basename(source) == new_name:
        logger.debug(f"File already has correct name: {new_name}")
        return source

    if os.path.exists(target):
        raise RenameCollision(source, f"CONFLICT: Target file already exists, not renaming "
                                      f"{os.path.basename(source)} -> {new_name}")

    if dry_run:
        logger.info(f"[DRY RUN] Would rename: {os.path.basename(source)} -> {new_name}")
    else:
        os.rename(source, target)
        logger.info(f"Renamed: {os.path.basename(source)} -> {new_name}")

    return target
