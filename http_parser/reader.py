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
Line reader with pushback over a binary stream.
"""

from typing import BinaryIO, List

from .models import TruncatedStreamError


READ_CHUNK_SIZE = 65536


class LineReader:
    """
    Reads a binary stream line by line, allowing lines to be pushed back.

    The parser looks one line ahead to decide which grammar stage a line
    belongs to; a line that belongs to the next stage is handed back with
    ``unread_line`` and returned by the next ``read_line``. Byte reads
    (``read``/``read_to_end``) always consume the pushed back lines first.

    Example:
        reader = LineReader(io.BytesIO(b"HTTP/1.1 200 OK\\r\\n\\r\\nbody"))
        line = reader.read_line()      # b"HTTP/1.1 200 OK\\r\\n"
        reader.unread_line(line)
        reader.read(4)                 # b"HTTP"
    """

    def __init__(self, stream: BinaryIO):
        """
        Initialize the reader.

        Args:
            stream: Binary stream to read from (e.g. ``sys.stdin.buffer``)
        """
        self.stream = stream
        self._pushback: List[bytes] = []

    @property
    def pending(self) -> int:
        """Number of bytes held in the pushback buffer."""
        return sum(len(line) for line in self._pushback)

    def read_line(self) -> bytes:
        """
        Read the next line, including its terminator.

        Returns:
            The line, or ``b""`` at end of stream
        """
        if self._pushback:
            return self._pushback.pop()
        return self.stream.readline()

    def unread_line(self, line: bytes) -> None:
        """Push a line back so the next ``read_line`` returns it."""
        self._pushback.append(line)

    def _drain(self) -> bytes:
        """Empty the pushback buffer, returning its lines in stream order."""
        data = b"".join(reversed(self._pushback))
        self._pushback.clear()
        return data

    def read(self, size: int) -> bytes:
        """
        Read exactly ``size`` bytes.

        Pushed back lines are consumed first. If they already hold more than
        ``size`` bytes, the surplus is pushed back again so nothing past
        ``size`` is consumed.

        Args:
            size: Number of bytes to read

        Returns:
            The bytes read

        Raises:
            TruncatedStreamError: If the stream ends before ``size`` bytes
        """
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")

        data = self._drain()
        if len(data) > size:
            self.unread_line(data[size:])
            return data[:size]

        chunks = [data]
        received = len(data)
        while received < size:
            chunk = self.stream.read(min(size - received, READ_CHUNK_SIZE))
            if not chunk:
                raise TruncatedStreamError(size, received)
            chunks.append(chunk)
            received += len(chunk)

        return b"".join(chunks)

    def read_to_end(self) -> bytes:
        """Read everything left in the stream, pushed back lines first."""
        data = self._drain()
        return data + self.stream.read()

    def is_eof(self) -> bool:
        """
        Check whether the stream is exhausted.

        This reads a line ahead and pushes it back, so it must be called in
        sequence with the other reads.
        """
        try:
            line = self.read_line()
        except OSError:
            return True

        if not line:
            return True

        self.unread_line(line)
        return False
