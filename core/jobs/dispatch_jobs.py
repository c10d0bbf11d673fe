"""Background jobs for dispatching notification events.

Used when ``NOTIFICATION_DISPATCH_ASYNC`` is on: the API enqueues the event
and an RQ worker runs the dispatch.
"""

from typing import Any

import django_rq
import structlog

from core.schemas.notification import NotificationEvent
from core.services.engine import get_engine

logger = structlog.get_logger(__name__)

DISPATCH_QUEUE = "default"


def dispatch_event_job(payload: dict[str, Any]) -> dict[str, Any]:
    """Dispatch one serialized event.

    This job is executed by RQ workers. The event is validated again since
    the payload crossed a process boundary.

    Args:
        payload: JSON form of a NotificationEvent.

    Returns:
        The dispatch outcome in its JSON form, stored as the job result.

    Raises:
        ValidationError: If the payload is not a valid event.
    """
    outcome = get_engine().dispatcher.dispatch(payload)
    logger.info(
        "dispatch_job_completed",
        dispatch_id=outcome.dispatch_id,
        delivered_count=outcome.delivered_count,
    )
    return outcome.to_api()


def enqueue_dispatch(event: NotificationEvent) -> str:
    """Queue an event for dispatch and return the job id."""
    queue = django_rq.get_queue(DISPATCH_QUEUE)
    job = queue.enqueue(dispatch_event_job, event.model_dump(mode="json"))
    logger.info(
        "dispatch_job_enqueued",
        job_id=job.id,
        event_type=str(event.type),
        recipient_count=len(event.recipient_ids),
    )
    return job.id
