# Copyright 2025 Jesse Bate (https://github.com/jbatesy)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Data models and errors for parsing captured HTTP/1-style responses.
"""

import json
from dataclasses import dataclass
from typing import Union


def json_string(value: str) -> str:
    """Encode a string as a JSON string literal."""
    return json.dumps(value, ensure_ascii=False)


@dataclass(frozen=True)
class MimeType:
    """
    A content type split into its components.

    For ``application/vnd.github+json; charset=utf-8``:
        category       -> "application"
        primary_type   -> "json"
        secondary_type -> "vnd.github"

    Parameters after ``;`` are not kept.
    """

    category: str = ""
    primary_type: str = ""
    secondary_type: str = ""

    @property
    def is_json(self) -> bool:
        """Check if this type describes a JSON document."""
        return (
            self.category.lower() == "application"
            and self.primary_type.lower() == "json"
        )

    def __str__(self) -> str:
        if not self.category:
            return ""
        if self.secondary_type:
            return f"{self.category}/{self.secondary_type}+{self.primary_type}"
        return f"{self.category}/{self.primary_type}"


class HTTPParseError(ValueError):
    """Raised when a capture does not follow the response grammar."""

    reason = "Invalid input"

    def __init__(self, line: Union[str, bytes]):
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        self.line = line
        super().__init__(f"{self.reason}: {json_string(line)}")


class InvalidStatusLineError(HTTPParseError):
    """Raised when the first meaningful line is not an HTTP status line."""

    reason = "Invalid status line"


class InvalidHeaderFieldError(HTTPParseError):
    """Raised when a line in the header block is not a ``name: value`` pair."""

    reason = "Invalid header field"


class InvalidContentError(HTTPParseError):
    """Raised when a JSON-typed body is not valid JSON."""

    reason = "Invalid JSON content"

    def __init__(self, content: str, error: ValueError):
        self.error = error
        super().__init__(content)
        self.args = (f"{self.reason} ({error}): {json_string(content)}",)


class TruncatedStreamError(EOFError):
    """Raised when the stream ends before a length-delimited read completes."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Unexpected end of stream: expected {expected} bytes, got {received}"
        )
