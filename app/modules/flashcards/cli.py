from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from app.core.logging import setup_logging
from app.modules.flashcards.errors import OpenRouterError
from app.modules.flashcards.main import FlashcardsGenerator


def _load_text(args: argparse.Namespace) -> str:
    if args.text and args.text_file:
        raise SystemExit("Provide either --text or --text-file, not both")
    if args.text_file:
        return Path(args.text_file).read_text(encoding="utf-8")
    if args.text:
        return args.text
    raise SystemExit("--text or --text-file is required")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashcards-gen", description="Flashcards generator CLI"
    )
    parser.add_argument("--log-level", default=None, help="Logging level")
    sub = parser.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="Generate candidate flashcards from text")
    g.add_argument("--text", "-t", help="Source text to study")
    g.add_argument("--text-file", help="Path to a file containing the source text")

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.cmd == "generate":
        text = _load_text(args)
        svc = FlashcardsGenerator.from_settings()
        try:
            cards = svc.generate_sync(text)
        except OpenRouterError as e:
            print(f"Generation failed ({e.kind.value}): {e.message}", file=sys.stderr)
            return 1
        print(json.dumps([c.model_dump() for c in cards], indent=2, ensure_ascii=False))
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
