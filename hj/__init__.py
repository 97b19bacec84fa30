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
hj - Convert HTTP/1 style responses into JSON.

This module turns the output of verbose HTTP clients (``curl -sv``,
``h2o-httpclient``) into one JSON object per response.

Usage:
    # As a CLI tool
    curl -sv https://httpbin.org/get 2>&1 | python -m hj

    # As a library
    from hj import ResponseConverter

    converter = ResponseConverter(array=True)
    print(converter.convert_text(capture))
"""

from .config import ConfigError, Settings, load_config, load_settings
from .converter import ResponseConverter
from .cli import main

__version__ = "0.1.0"
__all__ = [
    # Converter
    "ResponseConverter",
    # Configuration
    "ConfigError",
    "Settings",
    "load_config",
    "load_settings",
    # CLI
    "main",
]
