#!/usr/bin/env python3
"""
Tagsmith Exceptions
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Errors raised by the template engine, the tag accessor and the renamer.
Everything except InvalidField and ArgumentError is a per-file problem: the
batch reports it and moves on to the next file.
"""


class TagsmithError(Exception):
    """Base class for all errors raised by tagsmith."""


class InvalidField(TagsmithError, ValueError):
    """
    Raised when a placeholder letter or field name is not in the registry.
    """

    def __init__(self, field: str, message: str = None):
        """
        Initialize the error for an unknown field.

        Args:
            field (str): The offending field letter or name
            message (str, optional): Custom error message
        """
        self.field = field
        super().__init__(message or f"Unknown field '{field}'")


class ArgumentError(TagsmithError, ValueError):
    """Raised for a malformed flag value. Fatal for the whole invocation."""


class FileError(TagsmithError):
    """
    Base class for recoverable errors tied to a single file.
    """

    def __init__(self, filepath: str, message: str):
        """
        Initialize a per-file error.

        Args:
            filepath (str): Path of the file the error belongs to
            message (str): Description of what went wrong
        """
        self.filepath = filepath
        super().__init__(message)


class FileOpenError(FileError):
    """The file could not be opened or is not a recognised audio file."""


class ExtractionMismatch(FileError):
    """The filename stem did not match the extraction spec."""


class SaveRefused(FileError):
    """The container format is known to be unsafe to write, so no save was attempted."""


class SaveFailed(FileError):
    """The tag writer raised while saving."""


class RenameCollision(FileError, FileExistsError):
    """
    Raised when the rename target already exists.

    Inherits from FileExistsError so callers that only care about the
    filesystem condition can catch it as such.
    """
