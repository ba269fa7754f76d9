"""Command line front end: scan a Go file and print its entity model."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from boxgen.binding import Binding
from boxgen.dump import binding_to_dict, format_binding
from boxgen.errors import BindingError


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Discover ObjectBox entities declared in a Go source file"
    )
    parser.add_argument(
        "source",
        type=Path,
        help="Path to the Go source file",
    )
    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Output the entity model as JSON",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log discovery details to stderr",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.source.is_file():
        print(f"Error: Source file not found: {args.source}", file=sys.stderr)
        return 1

    try:
        binding = Binding.from_source(args.source.read_text(encoding="utf-8"))
    except (SyntaxError, BindingError) as e:
        print(f"Error: {args.source}: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(binding_to_dict(binding), indent=args.indent))
    else:
        print(format_binding(binding))

    return 0


if __name__ == "__main__":
    sys.exit(main())
