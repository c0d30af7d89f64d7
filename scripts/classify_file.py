"""Classify a JSON file of provider payloads.

Usage:
    PYTHONPATH=src python scripts/classify_file.py payloads.json [--provider helius] [--output results.json]

The file holds one payload object or a list of them. Payload shapes are
auto-detected unless --provider is given. Results are written as JSON, one
ParserResult per payload, in input order.
"""

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path

logger = logging.getLogger("classify_file")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("path", type=Path, help="JSON file with one payload or a list of payloads")
    parser.add_argument("--provider", choices=["normalized", "shyft", "helius", "rpc"], default=None)
    parser.add_argument("--output", type=Path, default=None, help="write results here instead of stdout")
    parser.add_argument("--workers", type=int, default=None, help="thread pool size (default from settings)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    from swapclassifier.container import Container
    from swapclassifier.parser.batch import classify_payload_batch

    args = parse_args(argv)
    container = Container()
    settings = container.settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")

    try:
        data = json.loads(args.path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Cannot read %s: %s", args.path, e)
        return 1
    payloads = data if isinstance(data, list) else [data]

    results = classify_payload_batch(
        container.classifier(),
        payloads,
        provider=args.provider,
        max_workers=args.workers or settings.batch_max_workers,
    )

    outcomes = Counter(
        r.outcome.kind if r.success else f"erase:{r.erase.reason.value}" for r in results
    )
    for outcome, count in sorted(outcomes.items()):
        logger.info("%-40s %d", outcome, count)

    rendered = json.dumps([r.model_dump(mode="json") for r in results], indent=2)
    if args.output:
        args.output.write_text(rendered)
        logger.info("Wrote %d result(s) to %s", len(results), args.output)
    else:
        print(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
