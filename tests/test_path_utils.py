"""Tests for file name resolution and the derived base name / folder."""

import pytest

from issuekit.builder.paths import base_name, folder, is_absolute, resolve_file_name


def test_missing_file_name_is_undefined():
    assert resolve_file_name(None, "/tmp") == "-"


def test_relative_path_without_directory_is_unchanged():
    assert resolve_file_name("relative.txt") == "relative.txt"
    assert resolve_file_name("src\\main.c") == "src/main.c"


def test_relative_path_is_prefixed_with_directory():
    assert resolve_file_name("relative.txt", "/tmp") == "/tmp/relative.txt"


def test_trailing_slash_of_directory_is_not_doubled():
    assert resolve_file_name("relative.txt", "/tmp/") == "/tmp/relative.txt"
    assert resolve_file_name("relative.txt", "C:\\work\\") == "C:/work/relative.txt"
    assert resolve_file_name("relative.txt", "/") == "/relative.txt"


def test_empty_directory_means_no_context():
    assert resolve_file_name("relative.txt", "") == "relative.txt"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("/tmp/absolute.txt", "/tmp/absolute.txt"),
        ("C:\\tmp\\absolute.txt", "C:/tmp/absolute.txt"),
        ("c:/tmp/absolute.txt", "c:/tmp/absolute.txt"),
        ("file:/opt/app/x.jar", "file:/opt/app/x.jar"),
        ("https://example.org/a/b.js", "https://example.org/a/b.js"),
    ],
)
def test_absolute_paths_ignore_directory(raw, expected):
    assert is_absolute(raw)
    assert resolve_file_name(raw, "/ignored") == expected


@pytest.mark.parametrize("raw", ["relative.txt", "./a/b.txt", "a\\b.txt", "-"])
def test_relative_paths(raw):
    assert not is_absolute(raw)


@pytest.mark.parametrize(
    "path",
    ["/path/to/file.txt", "./file.txt", "file.txt", "C:/Programme/Folder/file.txt", "C:/file.txt"],
)
def test_base_name(path):
    assert base_name(path) == "file.txt"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("relative.txt", "-"),
        ("/tmp/relative.txt", "tmp"),
        ("/a/b/c.txt", "b"),
        ("C:/tmp/absolute.txt", "tmp"),
        ("C:/file.txt", "-"),
        ("/file.txt", "-"),
        ("./file.txt", "-"),
        ("-", "-"),
    ],
)
def test_folder(path, expected):
    assert folder(path) == expected


def test_nested_uri_scheme_is_absolute():
    assert is_absolute("jar:file:/opt/app.jar!/a/B.class")
    assert resolve_file_name("jar:file:/opt/app.jar!/a/B.class", "/work") == "jar:file:/opt/app.jar!/a/B.class"


@pytest.mark.parametrize("file_name", ["", "  "])
def test_blank_file_name_is_undefined(file_name):
    assert resolve_file_name(file_name, "/tmp") == "-"


def test_whitespace_directory_means_no_context():
    assert resolve_file_name("relative.txt", "   ") == "relative.txt"
