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
Converter from captured HTTP responses to JSON.

This module drives the response parser over a whole capture, writing one JSON
object per response, optionally wrapped in a JSON array.
"""

import io
from typing import BinaryIO, Iterable, TextIO, Union

from http_parser import LineReader, NoiseFilter, ResponseParser

from .config import Settings


class ResponseConverter:
    """Converts a capture of one or more responses to JSON."""

    def __init__(
        self,
        raw: bool = False,
        array: bool = False,
        noise_prefixes: Iterable[str] = (),
    ):
        """
        Initialize the converter.

        Args:
            raw: Emit bodies as strings regardless of their content type
            array: Wrap the responses in a JSON array
            noise_prefixes: Extra line prefixes to skip as client output
        """
        self.raw = raw
        self.array = array
        self.noise_prefixes = list(noise_prefixes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResponseConverter":
        return cls(
            raw=settings.raw,
            array=settings.array,
            noise_prefixes=settings.noise_prefixes,
        )

    def convert(self, source: BinaryIO, sink: TextIO) -> int:
        """
        Convert every response in ``source`` and write the JSON to ``sink``.

        A response is written only once it has been parsed completely. On
        error the array (if any) is closed and the error is re-raised, so
        ``sink`` always holds valid JSON for the responses before it.

        Args:
            source: Binary stream holding the capture
            sink: Text stream for the JSON output

        Returns:
            Number of responses written
        """
        reader = LineReader(source)
        parser = ResponseParser(
            reader,
            raw=self.raw,
            noise=NoiseFilter(self.noise_prefixes),
        )

        count = 0
        if self.array:
            sink.write("[")
        try:
            while True:
                buf = io.StringIO()
                parser.parse_response(buf)

                if self.array and count:
                    sink.write(",")
                sink.write(buf.getvalue())
                if not self.array:
                    sink.write("\n")
                count += 1

                if reader.is_eof():
                    break
        finally:
            if self.array:
                sink.write("]\n")

        return count

    def convert_text(self, data: Union[str, bytes]) -> str:
        """
        Convert an in-memory capture.

        Args:
            data: The capture; text is encoded as UTF-8

        Returns:
            The JSON output
        """
        if isinstance(data, str):
            data = data.encode("utf-8")

        sink = io.StringIO()
        self.convert(io.BytesIO(data), sink)
        return sink.getvalue()
