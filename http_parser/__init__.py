"""
HTTP/1-style Response Parser Module

Parse responses captured from verbose HTTP clients into JSON text.

Example usage:
    import io, sys
    from http_parser import LineReader, ResponseParser

    reader = LineReader(sys.stdin.buffer)
    parser = ResponseParser(reader)

    out = io.StringIO()
    parser.parse_response(out)
    print(out.getvalue())
"""

from .models import (
    HTTPParseError,
    InvalidContentError,
    InvalidHeaderFieldError,
    InvalidStatusLineError,
    MimeType,
    TruncatedStreamError,
)
from .mime import is_json_content_type, parse_mime_type
from .parser import NoiseFilter, ResponseParser
from .reader import LineReader

__all__ = [
    'HTTPParseError',
    'InvalidContentError',
    'InvalidHeaderFieldError',
    'InvalidStatusLineError',
    'LineReader',
    'MimeType',
    'NoiseFilter',
    'ResponseParser',
    'TruncatedStreamError',
    'is_json_content_type',
    'parse_mime_type',
]

__version__ = '0.1.0'
