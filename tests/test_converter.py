"""
Tests for converting whole captures, including the bundled client captures.
"""

import io
import json

import pytest

from hj import ResponseConverter, Settings
from http_parser import InvalidStatusLineError


def test_single_response(capture):
    """Test an h2o-httpclient HTTP/3 capture."""
    output = ResponseConverter().convert_text(capture("response-single.txt"))

    assert output.endswith("}\n")
    result = json.loads(output)
    assert result["protocol"] == "HTTP/3"
    assert result["status_code"] == 200
    assert result["headers"]["content-type"] == "text/html"
    assert "<!DOCTYPE html>" in result["content"]


def test_multiple_responses_as_array(capture):
    """Test N responses in array mode give an array of N objects."""
    output = ResponseConverter(array=True).convert_text(capture("response-multi.txt"))

    assert output.startswith("[{")
    assert output.endswith("}]\n")
    results = json.loads(output)
    assert len(results) == 3
    for result in results:
        assert result["protocol"] == "HTTP/3"
        assert result["status_code"] == 200
        assert result["headers"]["content-type"] == "text/html"
        assert "<!DOCTYPE html>" in result["content"]
        assert result["content"].endswith("</html>\n")


def test_multiple_responses_one_per_line(capture):
    output = ResponseConverter().convert_text(capture("response-multi.txt"))

    lines = output.splitlines()
    assert len(lines) == 3
    assert all(json.loads(line)["status_code"] == 200 for line in lines)


def test_curl_sv_as_raw(capture):
    """Test raw mode on a curl -sv capture of a JSON endpoint."""
    output = ResponseConverter(raw=True).convert_text(capture("response-curl-sv-httpbin.txt"))

    result = json.loads(output)
    assert result["protocol"] == "HTTP/1.1"
    assert result["status_code"] == 200
    assert result["headers"]["content-type"] == "application/json"
    assert isinstance(result["content"], str)
    assert json.loads(result["content"])["url"] == "https://httpbin.org/get"


def test_curl_sv_as_json(capture):
    """Test a curl -sv capture of a JSON endpoint is decoded."""
    output = ResponseConverter().convert_text(capture("response-curl-sv-httpbin.txt"))

    result = json.loads(output)
    assert result["protocol"] == "HTTP/1.1"
    assert result["status_code"] == 200
    assert result["headers"]["content-type"] == "application/json"
    assert result["headers"]["access-control-allow-origin"] == "*"
    assert result["content"]["url"] == "https://httpbin.org/get"
    assert result["content"]["headers"]["Host"] == "httpbin.org"


def test_curl_sv_as_json_with_charset(capture):
    """Test a JSON content type with parameters and a body without newline."""
    output = ResponseConverter().convert_text(capture("response-jsonplaceholder.txt"))

    result = json.loads(output)
    assert result["protocol"] == "HTTP/1.1"
    assert result["status_code"] == 200
    assert result["headers"]["content-type"] == "application/json; charset=utf-8"
    assert result["headers"]["etag"] == 'W/"53-hfEnumeNh6YirfjyjaujcOPPT+s"'
    assert result["content"]["id"] == 1
    assert result["content"]["completed"] is False


def test_back_to_back_responses_with_lengths():
    """Test a declared length is not read past into the next response."""
    data = (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: application/json\r\n"
        b"Content-Length: 7\r\n"
        b"\r\n"
        b'{"a":1}'
        b"HTTP/1.1 201 Created\r\n"
        b"Content-Type: text/plain\r\n"
        b"Content-Length: 4\r\n"
        b"\r\n"
        b"done\n"
    )

    results = json.loads(ResponseConverter(array=True).convert_text(data))

    assert [r["status_code"] for r in results] == [200, 201]
    assert results[0]["content"] == {"a": 1}
    assert results[1]["content"] == "done"


def test_convert_returns_response_count(capture):
    sink = io.StringIO()

    count = ResponseConverter().convert(io.BytesIO(capture("response-multi.txt")), sink)

    assert count == 3


def test_error_writes_no_partial_object():
    """Test a malformed response leaves nothing in the output."""
    sink = io.StringIO()

    with pytest.raises(InvalidStatusLineError):
        ResponseConverter().convert(io.BytesIO(b"* noise\nnot a status line\n"), sink)

    assert sink.getvalue() == ""


def test_error_closes_array():
    """Test the array holds the responses parsed before the error."""
    data = (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Length: 2\r\n"
        b"\r\n"
        b"ok"
        b"garbage\r\n"
    )
    sink = io.StringIO()

    with pytest.raises(InvalidStatusLineError):
        ResponseConverter(array=True).convert(io.BytesIO(data), sink)

    results = json.loads(sink.getvalue())
    assert len(results) == 1
    assert results[0]["content"] == "ok"


def test_extra_noise_prefixes():
    converter = ResponseConverter(noise_prefixes=["[debug] "])

    result = json.loads(converter.convert_text("[debug] start\nHTTP/1.1 204 No Content\n\n"))

    assert result == {
        "protocol": "HTTP/1.1",
        "status_code": 204,
        "headers": {},
        "content": "",
    }


def test_from_settings():
    settings = Settings(raw=True, array=True, noise_prefixes=["# "])

    converter = ResponseConverter.from_settings(settings)

    assert converter.raw is True
    assert converter.array is True
    assert converter.noise_prefixes == ["# "]
