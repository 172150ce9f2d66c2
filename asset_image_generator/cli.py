import argparse
import sys
from typing import List, Optional

from .core.errors import AssetGeneratorError
from .generator import generate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-images",
        description="Generate Dart image constants from the asset folders declared in pubspec.yaml",
    )
    parser.add_argument("--output", "-o", type=str, default=None, help="Output directory (default: lib/generated/images)")
    parser.add_argument("--pubspec", type=str, default=None, help="Path to pubspec.yaml (default: ./pubspec.yaml)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        generate(args.output, pubspec_path=args.pubspec)
    except AssetGeneratorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
