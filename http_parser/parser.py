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
Parser for HTTP/1-style responses captured from verbose HTTP clients.

Handles the output of ``curl -sv ...`` and ``h2o-httpclient ...``, including
the informational lines these tools mix into the response, and writes each
response as a JSON object.
"""

import json
import re
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, Optional, TextIO, Tuple

from .mime import is_json_content_type
from .models import (
    InvalidContentError,
    InvalidHeaderFieldError,
    InvalidStatusLineError,
    json_string,
)
from .reader import LineReader


# UndefinedBehaviorSanitizer warnings, if the client was built with UBSan:
#   /path/to/file.c:80:34: runtime error: blah blah blah
#   SUMMARY: UndefinedBehaviorSanitizer: undefined-behavior /path/to/file.c:80:34 in
NOISE_PATTERNS = (
    re.compile(r"^[^:]+:[0-9]+:[0-9]+: runtime error:"),
    re.compile(r"^SUMMARY: [a-zA-Z0-9_-]+:"),
)

# curl -v: info and TLS lines, request headers
NOISE_PREFIXES = ("* ", "> ", "{ ", "} ")

# e.g. "HTTP/1.1 200 OK" or "HTTP/3 200"
STATUS_LINE_PATTERN = re.compile(
    r"^(?:< )?(?P<protocol>HTTP/[0-9]+(?:\.[0-9]+)?) (?P<status>[0-9]+)"
)

# e.g. "Content-Type: text/html"
HEADER_FIELD_PATTERN = re.compile(r"^(?:< )?(?P<name>[^:]+):(?P<value>.+)")

CONTENT_LENGTH_PATTERN = re.compile(r"[0-9]+")


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


@contextmanager
def json_member(out: TextIO, name: str) -> Iterator[None]:
    """
    Write ``,"name":{`` and always close it with ``}``.

    The closing brace is written even when the body of the ``with`` block
    raises. Callers that write members only on success, like
    ``ResponseParser.parse_header_fields``, leave an empty object ``{}``
    behind on error.
    """
    out.write(f",{json_string(name)}:{{")
    try:
        yield
    finally:
        out.write("}")


class NoiseFilter:
    """Recognizes lines emitted by the client tool rather than the server."""

    def __init__(self, extra_prefixes: Iterable[str] = ()):
        extra_prefixes = tuple(extra_prefixes)
        if not all(extra_prefixes):
            raise ValueError("noise prefixes must be non-empty strings")
        self.prefixes = NOISE_PREFIXES + extra_prefixes

    def is_noise(self, line: str) -> bool:
        if line.startswith(self.prefixes):
            return True
        return any(pattern.match(line) for pattern in NOISE_PATTERNS)


class ResponseParser:
    """
    Parses HTTP/1-style responses from a ``LineReader`` into JSON text.

    Each ``parse_*`` method consumes one stage of the response grammar and
    writes its JSON fragment to ``out``:

        {"protocol":...,"status_code":...,"headers":{...},"content":...}
    """

    def __init__(
        self,
        reader: LineReader,
        raw: bool = False,
        noise: Optional[NoiseFilter] = None,
    ):
        """
        Initialize the parser.

        Args:
            reader: Shared line reader over the capture
            raw: Emit bodies as strings regardless of their content type
            noise: Filter for tool-generated lines (default: built-in patterns)
        """
        self.reader = reader
        self.raw = raw
        self.noise = noise or NoiseFilter()

    def skip_noise(self, blank_lines: bool = False) -> int:
        """
        Discard tool-generated lines up to the next meaningful line.

        Args:
            blank_lines: Also discard whitespace-only lines

        Returns:
            Number of lines skipped
        """
        skipped = 0
        while True:
            line = self.reader.read_line()
            text = _decode(line)
            if self.noise.is_noise(text) or (blank_lines and line and not text.strip()):
                skipped += 1
                continue
            self.reader.unread_line(line)
            return skipped

    def parse_status_line(self, out: TextIO) -> Tuple[str, int]:
        """
        Parse the status line and write the protocol and status code.

        Returns:
            Tuple of (protocol, status_code)

        Raises:
            InvalidStatusLineError: If the line is not a status line
        """
        line = self.reader.read_line()
        match = STATUS_LINE_PATTERN.match(_decode(line))
        if not match:
            raise InvalidStatusLineError(line)

        protocol = match.group("protocol")
        status_code = int(match.group("status"))
        out.write(f'"protocol":{json_string(protocol)},"status_code":{status_code}')
        return protocol, status_code

    def parse_header_fields(self, out: TextIO) -> Tuple[Optional[str], Optional[int]]:
        """
        Parse the header block and write it as the ``headers`` object.

        Field names are lower-cased. A repeated field is folded into its first
        occurrence with the values joined by ", ".

        Returns:
            Tuple of (content_type, content_length); either may be None

        Raises:
            InvalidHeaderFieldError: If a line is not a ``name: value`` pair
        """
        content_type: Optional[str] = None
        content_length: Optional[int] = None
        headers: Dict[str, str] = {}

        with json_member(out, "headers"):
            while True:
                line = self.reader.read_line()
                text = _decode(line)
                if text.strip() in ("", "<"):
                    break

                match = HEADER_FIELD_PATTERN.match(text)
                if not match:
                    raise InvalidHeaderFieldError(line)

                name = match.group("name").strip().lower()
                value = match.group("value").strip()

                if name in headers:
                    headers[name] = f"{headers[name]}, {value}"
                else:
                    headers[name] = value

                if name == "content-type":
                    content_type = value
                elif name == "content-length":
                    if CONTENT_LENGTH_PATTERN.fullmatch(value):
                        content_length = int(value)

            out.write(",".join(
                f"{json_string(name)}:{json_string(value)}"
                for name, value in headers.items()
            ))

        return content_type, content_length

    def read_content(self, content_length: Optional[int]) -> bytes:
        """Read the body: ``content_length`` bytes, or up to end of stream."""
        if content_length is not None:
            return self.reader.read(content_length)
        return self.reader.read_to_end()

    def parse_content_raw(self, out: TextIO, content_length: Optional[int]) -> None:
        """Write the body as a JSON string."""
        content = _decode(self.read_content(content_length))
        out.write(f',"content":{json_string(content)}')

    def parse_content(
        self,
        out: TextIO,
        content_type: Optional[str],
        content_length: Optional[int],
    ) -> None:
        """
        Write the body according to its content type.

        JSON bodies are parsed and written as JSON values, everything else as
        a string. An empty JSON body is written as an empty string.

        Raises:
            InvalidContentError: If a JSON-typed body does not parse
        """
        if not is_json_content_type(content_type):
            self.parse_content_raw(out, content_length)
            return

        content = _decode(self.read_content(content_length))
        if not content.strip():
            out.write(f',"content":{json_string(content)}')
            return

        try:
            value = json.loads(content, parse_constant=_reject_constant)
            stringified = json.dumps(
                value, ensure_ascii=False, allow_nan=False, separators=(",", ":")
            )
        except ValueError as e:
            raise InvalidContentError(content, e) from e

        try:
            stringified.encode("utf-8")
        except UnicodeEncodeError:
            # lone surrogates from \uXXXX escapes can only be written escaped
            stringified = json.dumps(value, allow_nan=False, separators=(",", ":"))
        out.write(f',"content":{stringified}')

    def parse_response(self, out: TextIO) -> None:
        """Parse one complete response and write it as a JSON object."""
        out.write("{")

        self.skip_noise()
        self.parse_status_line(out)

        self.skip_noise()
        content_type, content_length = self.parse_header_fields(out)

        self.skip_noise()
        if self.raw:
            self.parse_content_raw(out, content_length)
        else:
            self.parse_content(out, content_type, content_length)
        self.skip_noise(blank_lines=True)

        out.write("}")
