"""
Lambda handler that resizes images written to an S3 bucket.
"""

from collections.abc import Callable
from functools import lru_cache
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.settings import ResizeSettings
from core.utils.constants import (
    METRICS_NAMESPACE,
    OUTCOME_COMPLETED,
    OUTCOME_SKIPPED,
    SERVICE_NAME,
)
from core.utils.decorators import storage_event_handler

from .models import ProcessingSummary, StorageEventRecord
from .service import ResizeService

logger = Logger(UTC=True)
tracer = Tracer(service=SERVICE_NAME)
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)

LambdaHandler = Callable[[dict[str, Any], LambdaContext], dict[str, Any]]


def make_handler(service: ResizeService) -> LambdaHandler:
    """Build the Lambda entry point around an already configured service."""

    @storage_event_handler
    @tracer.capture_lambda_handler
    @metrics.log_metrics()
    def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
        """
        Handle S3 object-created notifications.

        Each record is processed independently; a failure in one record is
        logged and counted but never raised.

        Expected S3 event structure:
        {
            "Records": [
                {
                    "eventName": "ObjectCreated:Put",
                    "s3": {"bucket": {"name": "..."}, "object": {"key": "..."}}
                }
            ]
        }

        Args:
            event: S3 notification event
            context: AWS Lambda execution context

        Returns:
            Summary of record outcomes
        """
        records = event.get("Records") or []

        logger.info(
            "Received storage event",
            extra={
                "record_count": len(records),
                "request_id": getattr(context, "aws_request_id", None),
                "function_name": getattr(context, "function_name", None),
            },
        )

        summary = ProcessingSummary(records=len(records))

        for raw_record in records:
            try:
                record = StorageEventRecord.from_record(raw_record)
            except ValidationError as exc:
                logger.error(
                    "Invalid storage event record",
                    extra={"errors": exc.errors(include_url=False)},
                )
                summary.failed += 1
                continue

            if not record.is_object_created:
                logger.info(
                    "Ignoring non object-created event",
                    extra={"event_name": record.event_name, "key": record.key},
                )
                summary.skipped += 1
                continue

            outcome = service.process_object(bucket=record.bucket, key=record.key)

            if outcome == OUTCOME_COMPLETED:
                summary.completed += 1
            elif outcome == OUTCOME_SKIPPED:
                summary.skipped += 1
            else:
                summary.failed += 1

        metrics.add_metric(name="ProcessedImages", unit=MetricUnit.Count, value=summary.completed)
        metrics.add_metric(name="SkippedImages", unit=MetricUnit.Count, value=summary.skipped)
        metrics.add_metric(name="FailedImages", unit=MetricUnit.Count, value=summary.failed)

        return summary.model_dump()

    return handler


@lru_cache(maxsize=1)
def _startup_handler() -> LambdaHandler:
    """Build the service once per process from environment configuration."""
    settings = ResizeSettings.from_env()
    logger.info(
        "Resize service configured",
        extra={
            "image_sizes": list(settings.image_sizes),
            "resized_images_path": settings.resized_images_path,
            "delete_original_file": settings.delete_original_file,
        },
    )
    return make_handler(ResizeService.from_settings(settings))


def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Default Lambda entry point."""
    return _startup_handler()(event, context)
