"""
Shared fixtures: an in-memory tag accessor and a minimal FLAC file factory.
"""

import struct

import pytest

from tagsmith import cli
from tagsmith.core.exceptions import FileOpenError, SaveRefused
from tagsmith.core.fields import FIELDS


class FakeTags:
    """In-memory stand-in for TagFile with the same get/set/save interface."""

    def __init__(self, filepath=None, refuse_save=False, **values):
        """
        Create the accessor.

        Args:
            filepath (str): Path the accessor pretends to belong to
            refuse_save (bool): Make save() raise SaveRefused
            **values: Initial field values by name
        """
        self.filepath = filepath
        self.refuse_save = refuse_save
        self.values = {field.name: field.empty for field in FIELDS}
        self.values.update(values)
        self.save_count = 0
        self.closed = False

    def __enter__(self):
        """Enter the context manager."""
        return self

    def __exit__(self, exc_type, exc, tb):
        """Mark the accessor as released."""
        self.closed = True
        return False

    def get(self, name):
        """Return a field value."""
        return self.values[name]

    def set(self, name, value):
        """Set a field value."""
        self.values[name] = value

    def save(self):
        """Count saves, or refuse."""
        if self.refuse_save:
            raise SaveRefused(self.filepath, f"Refusing to save {self.filepath}")
        self.save_count += 1


class FakeLibrary:
    """Maps paths to FakeTags and opens them the way TagFile would."""

    def __init__(self):
        """Start with no files."""
        self.files = {}

    def add(self, path, **values):
        """
        Create an empty file on disk and register tags for it.

        Args:
            path (pathlib.Path): File to create
            **values: Field values, plus refuse_save

        Returns:
            FakeTags: The registered accessor
        """
        path.touch()
        tags = FakeTags(str(path), **values)
        self.files[str(path)] = tags
        return tags

    def open(self, filepath):
        """
        Open a registered file.

        Args:
            filepath (str): Path to open

        Returns:
            FakeTags: The registered accessor

        Raises:
            FileOpenError: For unregistered paths
        """
        try:
            return self.files[str(filepath)]
        except KeyError:
            raise FileOpenError(str(filepath), f"File not found: {filepath}") from None


@pytest.fixture
def library(monkeypatch):
    """A FakeLibrary wired in as the CLI's tag opener."""
    library = FakeLibrary()
    monkeypatch.setattr(cli, 'TagFile', library.open)
    return library


def write_flac(path):
    """
    Write the smallest FLAC file mutagen will load: the stream marker and a
    STREAMINFO block with no audio frames.

    Args:
        path (pathlib.Path): Where to write the file

    Returns:
        pathlib.Path: The same path
    """
    sample_rate, channels, bits_per_sample, total_samples = 44100, 2, 16, 0
    packed = ((sample_rate << 44) | ((channels - 1) << 41)
              | ((bits_per_sample - 1) << 36) | total_samples)
    streaminfo = struct.pack('>HH', 4096, 4096) + b'\x00' * 6
    streaminfo += packed.to_bytes(8, 'big') + b'\x00' * 16
    header = bytes([0x80]) + len(streaminfo).to_bytes(3, 'big')
    path.write_bytes(b'fLaC' + header + streaminfo)
    return path


@pytest.fixture
def flac_file(tmp_path):
    """An untagged FLAC file."""
    return write_flac(tmp_path / "song.flac")
