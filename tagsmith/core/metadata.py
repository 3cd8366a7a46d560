#!/usr/bin/env python3
"""
Tag Accessor
Copyright (c) 2025 TAPS OSS
Project: https://github.com/TAPSOSS/Walrio
Licensed under the BSD-3-Clause License (see LICENSE file for details)

Reads and writes the seven registry fields of an audio file through mutagen.
Supports ID3 (MP3, WAV, AIFF), Vorbis comments (FLAC, OGG, OPUS), MP4/M4A
atoms and APEv2 (WavPack, Monkey's Audio, Musepack).
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Optional, Union

from mutagen import File as MutagenFile
from mutagen import MutagenError
from mutagen.apev2 import APEv2
from mutagen.id3 import ID3, COMM, TALB, TCON, TDRC, TIT2, TPE1, TRCK
from mutagen.mp4 import MP4Tags

from .exceptions import FileOpenError, SaveFailed, SaveRefused
from .fields import field_for_name

logger = logging.getLogger('TagFile')

# Audio file extensions picked up when a directory is given
AUDIO_EXTENSIONS = {'.mp3', '.flac', '.ogg', '.oga', '.opus', '.m4a', '.mp4', '.aac',
                    '.wv', '.ape', '.mpc', '.wav', '.aif', '.aiff'}

# Raw ADTS AAC has no tag container mutagen can write into safely
SAVE_REFUSED_EXTENSIONS = {'.aac'}

# ID3 frame ids and the frame classes used to write them
ID3_FRAMES = {
    'album': ('TALB', TALB),
    'artist': ('TPE1', TPE1),
    'comment': ('COMM', COMM),
    'genre': ('TCON', TCON),
    'title': ('TIT2', TIT2),
    'track': ('TRCK', TRCK),
    'year': ('TDRC', TDRC),
}

VORBIS_KEYS = {
    'album': 'ALBUM',
    'artist': 'ARTIST',
    'comment': 'COMMENT',
    'genre': 'GENRE',
    'title': 'TITLE',
    'track': 'TRACKNUMBER',
    'year': 'DATE',
}

MP4_KEYS = {
    'album': '\xa9alb',
    'artist': '\xa9ART',
    'comment': '\xa9cmt',
    'genre': '\xa9gen',
    'title': '\xa9nam',
    'track': 'trkn',
    'year': '\xa9day',
}

APE_KEYS = {
    'album': 'Album',
    'artist': 'Artist',
    'comment': 'Comment',
    'genre': 'Genre',
    'title': 'Title',
    'track': 'Track',
    'year': 'Year',
}


def _parse_number(value: Any) -> int:
    """
    Parse track numbers that may be in 'X/Y' format.

    Args:
        value (Any): Raw tag value

    Returns:
        int: Leading number, or 0 if there is none
    """
    match = re.match(r'\s*(\d+)', str(value))
    return int(match.group(1)) if match else 0


def _parse_year(value: Any) -> int:
    """
    Pull the year out of a date tag such as '2004' or '2004-05-01'.

    Args:
        value (Any): Raw tag value

    Returns:
        int: Four digit year, or 0 if there is none
    """
    match = re.match(r'\s*(\d{4})', str(value))
    return int(match.group(1)) if match else 0


class TagFile:
    """
    Field-level view of one audio file's tags.

    Use as a context manager so the file is always released, even when an
    edit fails halfway:

        with TagFile("song.flac") as tags:
            tags.set("artist", "Portishead")
            tags.save()
    """

    def __init__(self, filepath: Union[str, Path]):
        """
        Open an audio file with mutagen.

        Args:
            filepath (Union[str, Path]): Path to the audio file

        Raises:
            FileOpenError: If the file is missing or not a recognised audio file
        """
        self.filepath = str(filepath)
        self.extension = Path(self.filepath).suffix.lower()

        if not os.path.isfile(self.filepath):
            raise FileOpenError(self.filepath, f"File not found: {self.filepath}")

        try:
            self.audio = MutagenFile(self.filepath)
        except (MutagenError, OSError) as e:
            raise FileOpenError(self.filepath, f"Could not open {os.path.basename(self.filepath)}: {e}") from e

        if self.audio is None:
            raise FileOpenError(self.filepath, f"Not a recognised audio file: {os.path.basename(self.filepath)}")

        logger.debug(f"Opened {os.path.basename(self.filepath)} as {type(self.audio).__name__}")

    def __enter__(self) -> "TagFile":
        """
        Enter the context manager.

        Returns:
            TagFile: This accessor
        """
        return self

    def __exit__(self, exc_type, exc, tb):
        """
        Release the mutagen object.

        Args:
            exc_type: Exception type, if one was raised
            exc: Exception instance, if one was raised
            tb: Traceback, if an exception was raised

        Returns:
            bool: False, exceptions are never suppressed
        """
        self.close()
        return False

    def close(self):
        """Drop the reference to the mutagen object."""
        self.audio = None

    @property
    def save_refused(self) -> bool:
        """
        Check whether this file's format is on the refuse-to-save list.

        Returns:
            bool: True if saving would be refused
        """
        return self.extension in SAVE_REFUSED_EXTENSIONS

    def _tags(self):
        """Return the mutagen tag container, or None."""
        return getattr(self.audio, 'tags', None)

    def _ensure_tags(self):
        """
        Return the tag container, adding an empty one if the file has none.

        Returns:
            The mutagen tag container

        Raises:
            SaveFailed: If mutagen cannot add tags to this format
        """
        if self._tags() is None:
            try:
                self.audio.add_tags()
            except (MutagenError, NotImplementedError) as e:
                raise SaveFailed(self.filepath, f"Cannot add tags to {os.path.basename(self.filepath)}: {e}") from e
        return self._tags()

    def _get_raw(self, name: str) -> Optional[Any]:
        """
        Read the first raw value of a field from whichever tag format the file uses.

        Args:
            name (str): Field name

        Returns:
            Optional[Any]: Raw tag value, or None if the field is not set
        """
        tags = self._tags()
        if not tags:
            return None

        if isinstance(tags, ID3):
            frame_id, _ = ID3_FRAMES[name]
            frames = tags.getall(frame_id)
            if name == 'comment':
                frames = [f for f in frames if not f.desc] or frames
            if frames and frames[0].text:
                return str(frames[0].text[0])
            return None

        if isinstance(tags, MP4Tags):
            values = tags.get(MP4_KEYS[name])
            if not values:
                return None
            if name == 'track':
                return values[0][0]
            return values[0]

        if isinstance(tags, APEv2):
            key = APE_KEYS[name]
            return str(tags[key]) if key in tags else None

        # Vorbis comments (FLAC, OGG Vorbis, OPUS, Speex)
        values = tags.get(VORBIS_KEYS[name])
        return values[0] if values else None

    def get(self, name: str) -> Union[str, int, None]:
        """
        Read a registry field.

        Args:
            name (str): Field name such as 'artist' or 'track'

        Returns:
            Union[str, int, None]: Text (None when absent) or integer (0 when absent)

        Raises:
            InvalidField: If the name is not a registry field
        """
        field = field_for_name(name)
        raw = self._get_raw(name)

        if field.is_integer:
            if raw is None:
                return 0
            return _parse_year(raw) if name == 'year' else _parse_number(raw)

        return str(raw) if raw else None

    def set(self, name: str, value: Union[str, int, None]):
        """
        Write a registry field. None, empty text and 0 remove the field.

        Args:
            name (str): Field name such as 'artist' or 'track'
            value (Union[str, int, None]): New value

        Raises:
            InvalidField: If the name is not a registry field
            SaveFailed: If the file cannot hold tags at all
        """
        field = field_for_name(name)

        if not value:
            if self._tags() is not None:
                self._delete(self._tags(), name)
            logger.debug(f"Cleared {name} in {os.path.basename(self.filepath)}")
            return

        tags = self._ensure_tags()
        text = str(int(value)) if field.is_integer else str(value)

        if isinstance(tags, ID3):
            frame_id, frame_class = ID3_FRAMES[name]
            if name == 'comment':
                frame = frame_class(encoding=3, lang='eng', desc='', text=text)
            else:
                frame = frame_class(encoding=3, text=text)
            tags.setall(frame_id, [frame])
        elif isinstance(tags, MP4Tags):
            key = MP4_KEYS[name]
            if name == 'track':
                existing = tags.get(key)
                total = existing[0][1] if existing else 0
                tags[key] = [(int(value), total)]
            else:
                tags[key] = [text]
        elif isinstance(tags, APEv2):
            tags[APE_KEYS[name]] = text
        else:
            tags[VORBIS_KEYS[name]] = [text]

        logger.debug(f"Set {name}={text!r} in {os.path.basename(self.filepath)}")

    def _delete(self, tags, name: str):
        """
        Remove a field from the tag container if present.

        Args:
            tags: The mutagen tag container
            name (str): Field name
        """
        if isinstance(tags, ID3):
            tags.delall(ID3_FRAMES[name][0])
            return

        if isinstance(tags, MP4Tags):
            key = MP4_KEYS[name]
        elif isinstance(tags, APEv2):
            key = APE_KEYS[name]
        else:
            key = VORBIS_KEYS[name]

        if key in tags:
            del tags[key]

    def save(self):
        """
        Write the tags back to disk.

        Raises:
            SaveRefused: If the container format is on the refuse-to-save list
            SaveFailed: If mutagen fails to write the file
        """
        basename = os.path.basename(self.filepath)
        if self.save_refused:
            raise SaveRefused(self.filepath, f"Refusing to save {basename}: writing {self.extension} files is not safe")

        try:
            self.audio.save()
        except (MutagenError, OSError) as e:
            raise SaveFailed(self.filepath, f"Error saving {basename}: {e}") from e

        logger.debug(f"Saved tags to {basename}")
