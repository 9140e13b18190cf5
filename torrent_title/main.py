"""
Entry point for parsing release names and saving JSON outputs.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from .clues import build_parser
from .config import LOG_LEVEL
from .processor import parse_directory


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Release name title parser")
    parser.add_argument("names", nargs="*", help="Release names to parse")
    parser.add_argument("--scan-dir", "-s", default=None, help="Directory to scan (root folders or files)")
    parser.add_argument("--mode", "-m", default="dirs", choices=["dirs", "files"], help="Scan mode")
    parser.add_argument("--clues", "-c", default=None, help="Handler catalog JSON file")
    parser.add_argument("--out", "-o", default=None, help="Output JSON file path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every handler match")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    title_parser = build_parser(Path(args.clues) if args.clues else None)

    results = {name: title_parser.parse(name).to_dict() for name in args.names}
    if args.scan_dir:
        source = Path(args.scan_dir)
        if not source.is_dir():
            print(f"Directory not found: {source}", file=sys.stderr)
            return 1
        results.update(parse_directory(str(source), title_parser, mode=args.mode))

    payload = {"generated_at": datetime.now().isoformat(), "results": results}
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False)
        print(f"Saved {len(results)} results to {out_path}")
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
