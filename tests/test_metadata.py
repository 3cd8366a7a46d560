"""
Tests for the mutagen-backed tag accessor, using a generated FLAC file.
"""

import pytest
from mutagen.flac import FLAC

from tagsmith.core import metadata
from tagsmith.core.exceptions import FileOpenError, InvalidField, SaveRefused
from tagsmith.core.metadata import TagFile


def test_untagged_file_reads_empty(flac_file):
    """A file without tags reports every field as absent."""
    with TagFile(flac_file) as tags:
        assert tags.get("artist") is None
        assert tags.get("title") is None
        assert tags.get("track") == 0
        assert tags.get("year") == 0


def test_set_save_and_reopen(flac_file):
    """Values written and saved are there after reopening."""
    with TagFile(flac_file) as tags:
        tags.set("artist", "Portishead")
        tags.set("title", "Glory Box")
        tags.set("track", 11)
        tags.set("year", 1994)
        tags.save()

    with TagFile(flac_file) as tags:
        assert tags.get("artist") == "Portishead"
        assert tags.get("title") == "Glory Box"
        assert tags.get("track") == 11
        assert tags.get("year") == 1994

    raw = FLAC(str(flac_file))
    assert raw.tags["ARTIST"] == ["Portishead"]
    assert raw.tags["TRACKNUMBER"] == ["11"]
    assert raw.tags["DATE"] == ["1994"]


def test_clear_fields(flac_file):
    """None and 0 remove the field."""
    with TagFile(flac_file) as tags:
        tags.set("genre", "Trip Hop")
        tags.set("track", 2)
        tags.save()

    with TagFile(flac_file) as tags:
        tags.set("genre", None)
        tags.set("track", 0)
        tags.save()

    raw = FLAC(str(flac_file))
    assert "GENRE" not in raw.tags
    assert "TRACKNUMBER" not in raw.tags


def test_integer_fields_parse_loose_values(flac_file):
    """Track totals and full dates are reduced to the leading number."""
    raw = FLAC(str(flac_file))
    raw.add_tags()
    raw["TRACKNUMBER"] = ["3/12"]
    raw["DATE"] = ["2004-05-01"]
    raw.save()

    with TagFile(flac_file) as tags:
        assert tags.get("track") == 3
        assert tags.get("year") == 2004


def test_unknown_field_name(flac_file):
    """Only registry fields can be read or written."""
    with TagFile(flac_file) as tags:
        with pytest.raises(InvalidField):
            tags.get("composer")
        with pytest.raises(InvalidField):
            tags.set("composer", "x")


def test_missing_file(tmp_path):
    """A path that does not exist cannot be opened."""
    with pytest.raises(FileOpenError) as excinfo:
        TagFile(tmp_path / "missing.flac")
    assert excinfo.value.filepath.endswith("missing.flac")


def test_not_audio(tmp_path):
    """A file mutagen does not recognise cannot be opened."""
    path = tmp_path / "notes.txt"
    path.write_text("just some notes")
    with pytest.raises(FileOpenError):
        TagFile(path)


def test_save_refused_for_listed_formats(flac_file, monkeypatch):
    """Formats on the refuse list are never written."""
    monkeypatch.setattr(metadata, "SAVE_REFUSED_EXTENSIONS", {".flac"})
    with TagFile(flac_file) as tags:
        assert tags.save_refused
        tags.set("title", "never written")
        with pytest.raises(SaveRefused):
            tags.save()

    assert "TITLE" not in (FLAC(str(flac_file)).tags or {})


def test_context_manager_releases(flac_file):
    """Leaving the with block drops the mutagen object."""
    with TagFile(flac_file) as tags:
        pass
    assert tags.audio is None
