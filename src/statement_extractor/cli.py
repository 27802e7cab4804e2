"""Command-line entry point.

Usage: python -m statement_extractor.cli <text-file> [--diagnostics]
"""

import json
import os
import sys

from statement_extractor.config import settings
from statement_extractor.core.exceptions import UnknownProviderError
from statement_extractor.core.logging import setup_logging
from statement_extractor.parsers.factory import extract_statement

USAGE = "Usage: python -m statement_extractor.cli <text-file> [--diagnostics]"


def extract_file(text_path: str, include_diagnostics: bool = False) -> dict:
    if not os.path.exists(text_path):
        print(f"Error: File not found: {text_path}", file=sys.stderr)
        sys.exit(1)

    with open(text_path, encoding="utf-8") as f:
        text = f.read()

    try:
        result = extract_statement(text, include_diagnostics=include_diagnostics)
    except UnknownProviderError as e:
        print(f"Error: {e.failure.detail}", file=sys.stderr)
        sys.exit(1)

    return result.model_dump(mode="json")


def main(argv: list[str] | None = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    include_diagnostics = "--diagnostics" in args
    paths = [arg for arg in args if arg != "--diagnostics"]

    if len(paths) != 1:
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_file)
    result = extract_file(paths[0], include_diagnostics=include_diagnostics)

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
