from pathlib import Path

import pytest

from foldersort.classifier import CategoryTable, derive_managed_folders, resolve_category
from foldersort.default_rules import DEFAULT_CATEGORIES, OTHERS_FOLDER
from foldersort.models import FileRecord, split_name


@pytest.mark.parametrize("ext,folder", sorted(DEFAULT_CATEGORIES.items()))
def test_default_extensions_resolve_in_any_case(ext, folder):
    for variant in (ext, ext.upper(), ext[:2].upper() + ext[2:]):
        assert resolve_category(f"file{variant}", DEFAULT_CATEGORIES) == folder


@pytest.mark.parametrize("name", ["README", "notes.md", "archive.tar.bz2", "Makefile", "weird."])
def test_unknown_or_missing_extension_falls_back_to_others(name):
    assert resolve_category(name, DEFAULT_CATEGORIES) == OTHERS_FOLDER


def test_last_dot_wins():
    assert resolve_category("backup.tar.zip", DEFAULT_CATEGORIES) == "archives"
    assert split_name("backup.tar.zip") == ("backup.tar", ".zip")
    assert split_name("README") == ("README", "")


def test_default_table_groups():
    table = CategoryTable.default()
    assert table.folder_for("clip.MKV") == "videos"
    assert table.folder_for("song.wav") == "audio"
    assert table.folder_for("sheet.xlsx") == "documents"
    assert table.folder_for("setup.msi") == "applications"
    assert table.folder_for("photo.jpeg") == "images"


def test_custom_table_keys_are_lowercased():
    table = CategoryTable({".JPG": "pics"})
    assert table.folder_for("a.jpg") == "pics"
    assert table.folder_for("a.png") == OTHERS_FOLDER


def test_table_is_read_only():
    table = CategoryTable({".md": "notes"})
    with pytest.raises(TypeError):
        table.map[".txt"] = "text"


def test_classify_uses_base_name_of_record():
    table = CategoryTable.default()
    assert table.classify(FileRecord(Path("sub/dir/movie.MOV"))) == "videos"


def test_managed_folders_default():
    assert derive_managed_folders(DEFAULT_CATEGORIES) == {
        "images", "videos", "audio", "documents", "archives", "applications", "others",
    }


def test_managed_folders_follow_table():
    table = CategoryTable({".md": "notes", ".rst": "notes"})
    assert table.managed_folders == {"notes", "others"}
    assert CategoryTable({}).managed_folders == {"others"}
