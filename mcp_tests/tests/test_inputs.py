import pytest

from clients.github.inputs import coordinate, normalize_max_chars, normalize_name, normalize_path, normalize_ref
from core.errors import ValidationError


def test_normalize_name_valid():
    assert normalize_name("  octo-cat.io ", what="owner") == "octo-cat.io"


@pytest.mark.parametrize("bad", ["", "   ", "a/b", "has space", "../x"])
def test_normalize_name_invalid(bad):
    with pytest.raises(ValidationError):
        normalize_name(bad, what="owner")


def test_normalize_ref_blank_means_default_branch():
    assert normalize_ref(None) is None
    assert normalize_ref("   ") is None
    assert normalize_ref(" dev ") == "dev"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Blink/Blink.ino", "Blink/Blink.ino"),
        ("/Blink/Blink.ino", "Blink/Blink.ino"),
        ("././Blink\\Blink.ino", "Blink/Blink.ino"),
        ("  a.h  ", "a.h"),
    ],
)
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected


@pytest.mark.parametrize("bad", ["", "   ", "/", "./"])
def test_normalize_path_empty(bad):
    with pytest.raises(ValidationError):
        normalize_path(bad)


def test_normalize_max_chars():
    assert normalize_max_chars(10) == 10
    with pytest.raises(ValidationError):
        normalize_max_chars(0)


def test_coordinate_builds_validated_value():
    c = coordinate(" octo ", "sketches", " ")
    assert (c.owner, c.name, c.ref) == ("octo", "sketches", None)
