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
Content-Type parsing.
"""

import re
from typing import Optional

from .models import MimeType


# application/vnd.github+json; charset=utf-8
MIME_TYPE_PATTERN = re.compile(
    r"^(?P<category>[^/]+)/(?:(?P<secondary_type>[^+;]+)\+)?(?P<primary_type>[^;]+)"
)


def parse_mime_type(src: str) -> MimeType:
    """
    Split a content type into category, primary and secondary type.

    Anything that does not look like ``category/type`` yields an empty
    ``MimeType`` rather than an error.
    """
    match = MIME_TYPE_PATTERN.match(src)
    if not match:
        return MimeType()

    return MimeType(
        category=match.group("category").strip(),
        primary_type=match.group("primary_type").strip(),
        secondary_type=(match.group("secondary_type") or "").strip(),
    )


def is_json_content_type(content_type: Optional[str]) -> bool:
    """Check if a Content-Type header value denotes a JSON body."""
    if not content_type:
        return False
    return parse_mime_type(content_type).is_json
