#!/usr/bin/env python3
"""
Tagsmith Addon Modules
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

The two directions a compiled spec is used in: extracting tags from
filenames and rendering filenames from tags.
"""

from . import extract
from . import rename

__all__ = ['extract', 'rename']
