#!/usr/bin/env python3
"""
Tagsmith entry point for python -m tagsmith
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
