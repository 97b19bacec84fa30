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
Command-line interface for hj.
"""

import argparse
import sys
from typing import Optional

from http_parser import HTTPParseError

from .config import ConfigError, load_settings
from .converter import ResponseConverter


def main(args: Optional[list] = None) -> int:
    """
    Main entry point for the hj CLI.

    Reads the capture from stdin and writes JSON to stdout.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="hj",
        description="Converts HTTP/1 style HTTP responses into JSON.\n"
                    "This command can parse the output of `curl -sv ...` "
                    "or `h2o-httpclient ...`",
        epilog="Examples:\n"
               "  curl -sv https://httpbin.org/get 2>&1 | hj\n"
               "  h2o-httpclient https://example.com/ | hj --raw\n"
               "  cat responses.txt | hj --array",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-r", "--raw",
        action="store_true",
        help="Stop parsing contents according to its corresponding content-type",
    )

    parser.add_argument(
        "-a", "--array",
        action="store_true",
        help="Wrap responses with a JSON array, assuming multiple responses",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    parsed_args = parser.parse_args(args)

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    converter = ResponseConverter(
        raw=parsed_args.raw or settings.raw,
        array=parsed_args.array or settings.array,
        noise_prefixes=settings.noise_prefixes,
    )

    try:
        converter.convert(sys.stdin.buffer, sys.stdout)
        return 0

    except (HTTPParseError, EOFError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    finally:
        sys.stdout.flush()


if __name__ == "__main__":
    sys.exit(main())
