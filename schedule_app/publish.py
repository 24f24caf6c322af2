"""Upload the unified schedule to S3 as a JSON document (batch job / Lambda entrypoint)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from schedule_app.ingestion.aggregate import build_unified_schedule
from schedule_app.ingestion.nll_client import TokenCache
from schedule_app.ingestion.schema import UnifiedGameRecord
from schedule_app.schemas import PublishedSchedule, PublishResult
from schedule_app.settings import ScheduleSettings, get_settings

logger = logging.getLogger(__name__)

CACHE_CONTROL = "max-age=3600"

# Reused across warm Lambda invocations.
_token_cache = TokenCache()


class PublishError(RuntimeError):
    pass


def build_document(
    games: list[UnifiedGameRecord], now: datetime | None = None
) -> dict[str, Any]:
    document = PublishedSchedule(
        success=True,
        count=len(games),
        last_updated=now or datetime.now(timezone.utc),
        data=games,
    )
    return document.model_dump(mode="json", by_alias=True)


def upload_document(document: dict[str, Any], settings: ScheduleSettings, s3_client=None) -> None:
    s3 = s3_client or boto3.client("s3", region_name=settings.aws_region)
    try:
        s3.put_object(
            Bucket=settings.s3_bucket_name,
            Key=settings.s3_key,
            Body=json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8"),
            ContentType="application/json",
            CacheControl=CACHE_CONTROL,
        )
    except (BotoCoreError, ClientError) as exc:
        raise PublishError(
            f"Upload to s3://{settings.s3_bucket_name}/{settings.s3_key} failed: {exc}"
        ) from exc


def publish_schedule(
    settings: ScheduleSettings | None = None,
    token_cache: TokenCache | None = None,
    s3_client=None,
) -> dict[str, Any]:
    """Fetch, merge and upload the schedule. Returns the uploaded document."""

    settings = settings or get_settings()
    games = build_unified_schedule(settings, token_cache or _token_cache)
    document = build_document(games)
    upload_document(document, settings, s3_client=s3_client)
    logger.info(
        "Successfully uploaded %s games to s3://%s/%s",
        document["count"],
        settings.s3_bucket_name,
        settings.s3_key,
    )
    return document


def lambda_handler(event, context) -> dict[str, Any]:
    try:
        logger.info("Starting schedule fetch...")
        document = publish_schedule()
        result = PublishResult(
            success=True,
            message=f"Successfully updated schedule with {document['count']} games",
            last_updated=document["lastUpdated"],
        )
        status_code = 200
    except Exception as exc:
        logger.exception("Schedule publish failed")
        result = PublishResult(success=False, error="Failed to update schedule", message=str(exc))
        status_code = 500

    return {
        "statusCode": status_code,
        "body": result.model_dump_json(by_alias=True, exclude_none=True),
    }
