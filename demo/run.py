from __future__ import annotations

import argparse
import asyncio
import logging

from config.settings import load_settings

from .status_check import check_urls


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Check URL status codes a batch at a time.")
    parser.add_argument("urls", nargs="+", help="URLs to request.")
    parser.add_argument(
        "--rate",
        type=int,
        default=settings.concurrency_rate,
        help="How many requests run together in each batch.",
    )
    parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Log failed requests and keep going instead of aborting.",
    )
    args = parser.parse_args(argv)

    if args.rate < 1:
        parser.error("--rate must be >= 1")

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    statuses = asyncio.run(check_urls(args.urls, concurrency_rate=args.rate, best_effort=args.best_effort))

    print(f"Checked {len(statuses)} URL(s):")
    for status in statuses:
        print(f"- {status.url}: {status.status_code} ({status.elapsed_ms:.0f}ms)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
