#!/usr/bin/env python3
"""
Filename Sanitizer
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Turns arbitrary tag text into text that is safe to drop into a filename.
Runs of dangerous characters become a single substitution character, which
is never doubled and never left at either end. Apostrophes are always
removed outright since a substituted quote reads worse than a missing one.
"""

import re
from enum import Enum
from typing import Optional, Pattern

# Whitespace and shell metacharacters
SHELL_UNSAFE = re.compile(r"""[\s`~!#$%^&*()=\[{}\\|;:",<>/?]""")

# Characters Windows and most network filesystems reject, plus whitespace
FILESYSTEM_UNSAFE = re.compile(r"""[\s<>:"/\\|?*]""")

# Returned when nothing survives sanitization
FALLBACK = "_"


class SanitizeMode(Enum):
    """Which dangerous-character class a rename uses."""
    SHELL = "shell"
    FILESYSTEM = "filesystem"

    @property
    def dangerous(self) -> Pattern:
        """
        The character class for this mode.

        Returns:
            Pattern: Compiled single-character class
        """
        return SHELL_UNSAFE if self is SanitizeMode.SHELL else FILESYSTEM_UNSAFE


def sanitize(value: str, substitute: str = "", dangerous: Optional[Pattern] = None) -> str:
    """
    Make a string safe for use inside a filename.

    Args:
        value (str): Text to clean up
        substitute (str): Replacement for each run of dangerous characters;
            an empty string removes them
        dangerous (Pattern, optional): Single-character class of unsafe
            characters; None only strips apostrophes

    Returns:
        str: Sanitized text, or "_" if nothing is left
    """
    if substitute == "'":
        substitute = ""

    text = value.replace("'", "")
    if dangerous is not None:
        text = re.sub(f"(?:{dangerous.pattern})+", lambda _: substitute, text)

    if substitute:
        text = re.sub(f"(?:{re.escape(substitute)}){{2,}}", lambda _: substitute, text)
        if text.startswith(substitute):
            text = text[len(substitute):]
        if text.endswith(substitute):
            text = text[:-len(substitute)]

    return text or FALLBACK
