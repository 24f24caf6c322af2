"""CLI entrypoint for scheduled schedule refreshes."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from schedule_app.ingestion.aggregate import build_unified_schedule
from schedule_app.ingestion.nll_client import TokenCache
from schedule_app.publish import build_document, publish_schedule
from schedule_app.settings import get_settings


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch NHL, WHL, AHL and NLL schedules and merge them into one document.",
    )

    target_group = parser.add_mutually_exclusive_group()
    target_group.add_argument(
        "--upload",
        action="store_true",
        help="Upload the document to the configured S3 bucket/key.",
    )
    target_group.add_argument(
        "--output",
        type=str,
        help="Write the document to this path instead of stdout.",
    )

    return parser.parse_args()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    args = _parse_args()
    settings = get_settings()
    token_cache = TokenCache()

    if args.upload:
        logging.info(
            "Starting schedule upload bucket=%s key=%s",
            settings.s3_bucket_name,
            settings.s3_key,
        )
        document = publish_schedule(settings, token_cache)
        logging.info("Done: uploaded=%s lastUpdated=%s", document["count"], document["lastUpdated"])
        return

    games = build_unified_schedule(settings, token_cache)
    document = build_document(games)
    rendered = json.dumps(document, indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as handle:
            handle.write(rendered)
        logging.info("Done: wrote %s games to %s", document["count"], args.output)
    else:
        sys.stdout.write(rendered + "\n")


if __name__ == "__main__":
    main()
