from __future__ import annotations

import argparse
import json
import logging
import sys

import requests

from .core import EmojiMixer
from .data import resolve_data
from .errors import EmojiMixError


def _print_check(mixer: EmojiMixer, raw: str, legacy_remap: bool) -> int:
    ident = mixer.to_canonical_identifier(raw, legacy_remap)
    if ident is None:
        print(f"{raw}: not a valid emoji or identifier", file=sys.stderr)
        return 1
    records = mixer.check_supported(raw, legacy_remap)
    if records is None:
        print(f"{raw}: {ident} (no combinations)")
        return 1
    print(f"{raw}: {ident}")
    print(f"Compatible with {len(records)}: {', '.join(mixer.data.compatible_with(ident))}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="emojimix", description="Build Google Emoji Kitchen image URLs for two emojis.")
    p.add_argument("left", nargs="?", help="Left emoji: a literal emoji char or a code point identifier (e.g. 1f525).")
    p.add_argument("right", nargs="?", help="Right emoji, same forms as left.")
    p.add_argument("--detailed-errors", action="store_true", help="Explain why a pair can't be mixed.")
    p.add_argument("--legacy-remap", action="store_true", help="Map outdated emojis to their replacements instead of failing.")
    p.add_argument("--check", metavar="EMOJI", help="Show the identifier of EMOJI and what it combines with.")
    p.add_argument("--json", action="store_true", help="Print the resolved record and url as JSON.")
    p.add_argument("--data", metavar="PATH", help="Kitchen dataset JSON file. Default: bundled sample.")
    p.add_argument("--data-url", metavar="URL", help="Download the kitchen dataset JSON from URL.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr.")
    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if not args.check and not (args.left and args.right):
        parser.error("give two emojis, or --check EMOJI")

    try:
        mixer = EmojiMixer(resolve_data(path=args.data, url=args.data_url))
    except (OSError, requests.RequestException, EmojiMixError) as e:
        print(f"Could not load kitchen data: {e}", file=sys.stderr)
        return 1

    try:
        if args.check:
            return _print_check(mixer, args.check, args.legacy_remap)

        result = mixer.mix(args.left, args.right, legacy_remap=args.legacy_remap)
    except EmojiMixError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not result.ok:
        if args.detailed_errors:
            print(str(result.error), file=sys.stderr)
        else:
            print("These emojis can't be mixed.", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({**result.record.to_dict(), "url": result.url}, indent=2))
    else:
        print(result.url)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
