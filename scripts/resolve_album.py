#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging

from engine.album_resolver import build_default_resolver


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Look up an album on Wikipedia and Spotify.")
    parser.add_argument("query", nargs="+", help="Free-text album query, e.g. 'Abbey Road'.")
    parser.add_argument("--json", action="store_true", help="Print the result record as JSON.")
    parser.add_argument("--verbose", action="store_true", help="Log score breakdowns and request details.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    query = " ".join(args.query)
    if not query.strip():
        parser.error("query is required")

    record = asyncio.run(build_default_resolver().resolve(query))
    if args.json:
        print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(record.display_text)
        print(f"image={record.image_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
