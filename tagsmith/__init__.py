#!/usr/bin/env python3
"""
Tagsmith Package
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Audio tag editing and tag-driven renaming:

Core Modules:
- fields: the seven tag fields, their letters and value types
- sanitize: make tag text safe for shells and filesystems
- template: compile %-placeholder filename specs
- metadata: read and write tag fields using mutagen
- actions: queued set/clear field edits

Addon Modules:
- extract: fill tags in from filenames
- rename: build filenames from tags and rename files
"""

__version__ = "1.0.0"
__author__ = "Walrio Contributors"
