#!/usr/bin/env python3
"""
Tagsmith Core Modules Package
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

The template engine (field registry, spec compiler, sanitizer) and the
mutagen-backed tag accessor it reads from and writes to.
"""

from .fields import FIELDS, FieldSpec, ValueType, field_for_code, field_for_name
from .sanitize import FILESYSTEM_UNSAFE, SHELL_UNSAFE, SanitizeMode, sanitize
from .template import CaseMode, CompiledSpec, LiteralToken, PlaceholderToken, compile_spec

__all__ = [
    'FIELDS', 'FieldSpec', 'ValueType', 'field_for_code', 'field_for_name',
    'FILESYSTEM_UNSAFE', 'SHELL_UNSAFE', 'SanitizeMode', 'sanitize',
    'CaseMode', 'CompiledSpec', 'LiteralToken', 'PlaceholderToken', 'compile_spec',
]
