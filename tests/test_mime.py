"""
Unit tests for content type parsing.
"""

import pytest

from http_parser import MimeType, is_json_content_type, parse_mime_type


def test_parse_mime_type():
    """Test a plain type."""
    assert parse_mime_type("application/json") == MimeType(
        category="application",
        primary_type="json",
        secondary_type="",
    )


def test_parse_mime_type_with_secondary_type_and_parameters():
    """Test a vendor type with parameters."""
    assert parse_mime_type("application/vnd.github+json; charset=utf-8") == MimeType(
        category="application",
        primary_type="json",
        secondary_type="vnd.github",
    )


def test_parse_mime_type_trims_components():
    """Test whitespace around components is removed."""
    mime = parse_mime_type(" text/html ; charset=utf-8")

    assert mime.category == "text"
    assert mime.primary_type == "html"
    assert mime.secondary_type == ""


def test_plus_in_parameters_is_not_a_secondary_type():
    """Test a '+' after ';' does not split the type."""
    assert parse_mime_type("text/plain; note=a+b") == MimeType("text", "plain", "")


@pytest.mark.parametrize("src", ["", "garbage", "/json"])
def test_unparsable_mime_type_is_empty(src):
    """Test input without category/type yields an empty MimeType."""
    mime = parse_mime_type(src)

    assert mime == MimeType()
    assert str(mime) == ""


def test_mime_type_str():
    assert str(parse_mime_type("application/vnd.api+json;q=1")) == "application/vnd.api+json"
    assert str(parse_mime_type("text/plain")) == "text/plain"


@pytest.mark.parametrize("content_type, expected", [
    ("application/json", True),
    ("APPLICATION/JSON", True),
    ("Application/Json; charset=utf-8", True),
    ("application/problem+json", True),
    ("application/json;charset=utf-8", True),
    ("text/json", False),
    ("application/jsonp", False),
    ("application/x-ndjson", False),
    ("text/html", False),
    ("", False),
    (None, False),
])
def test_is_json_content_type(content_type, expected):
    """Test JSON detection ignores case, secondary types and parameters."""
    assert is_json_content_type(content_type) is expected
