"""
Alert Relay - Notification Routes
"""

from fastapi import APIRouter, Depends
import structlog

from alertrelay.api.deps import get_dispatcher
from alertrelay.api.schemas.notification import NotificationRequest, NotificationResponse
from alertrelay.notification.dispatcher import NotificationDispatcher

logger = structlog.get_logger()

router = APIRouter()


@router.post("", response_model=NotificationResponse)
async def send_notification(
    request: NotificationRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationResponse:
    """
    Dispatch a check notification to its subscriptions.
    
    Channel failures are reported per subscription; the request itself
    succeeds as long as it is valid.
    """
    logger.info(
        "Dispatching notification",
        check_id=request.check.id,
        state=request.check.state.value,
        subscriptions=len(request.subscriptions),
    )
    
    results = await dispatcher.dispatch(
        check=request.check,
        subscriptions=request.subscriptions,
        alerts=request.alerts,
    )
    
    return NotificationResponse.from_results(results)
