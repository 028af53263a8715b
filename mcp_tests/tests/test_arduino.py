import pytest

from core.arduino import chapter_of, is_arduino_file, language_for, short_name, sort_descriptors, text_download_name
from core.models import FileDescriptor


@pytest.mark.parametrize("path", ["Blink.ino", "a/b/Motor.CPP", "lib/pins.h", "X.InO"])
def test_is_arduino_file_accepts(path):
    assert is_arduino_file(path)


@pytest.mark.parametrize("path", ["readme.md", "a.hpp", "a.c", "ino", "dir.ino/notes.txt", "", None])
def test_is_arduino_file_rejects(path):
    assert not is_arduino_file(path)


def test_path_helpers():
    assert short_name("LedBlink/LedBlink.ino") == "LedBlink.ino"
    assert chapter_of("LedBlink/LedBlink.ino") == "LedBlink"
    assert chapter_of("Blink.ino") == "Other"
    assert language_for("x.h") == "cpp"


@pytest.mark.parametrize(
    "path,expected",
    [("LedBlink/LedBlink.ino", "LedBlink.txt"), ("a/Motor.cpp", "Motor.txt"), ("noext", "noext.txt")],
)
def test_text_download_name(path, expected):
    assert text_download_name(path) == expected


def test_descriptor_equality_is_by_path():
    assert FileDescriptor(path="a.ino", sha="1") == FileDescriptor(path="a.ino", sha="2", size=3)
    assert FileDescriptor(path="a.ino") != FileDescriptor(path="b.ino")


def test_sort_descriptors():
    files = [FileDescriptor(path=p) for p in ["c/x.ino", "a/y.ino", "b.h"]]
    assert [f.path for f in sort_descriptors(files)] == ["a/y.ino", "b.h", "c/x.ino"]


def test_sort_descriptors_ignores_case_with_lowercase_first():
    files = [FileDescriptor(path=p) for p in ["b.ino", "B.ino", "a.ino", "Zeta/x.ino", "alpha/y.ino"]]
    assert [f.path for f in sort_descriptors(files)] == ["a.ino", "alpha/y.ino", "b.ino", "B.ino", "Zeta/x.ino"]
