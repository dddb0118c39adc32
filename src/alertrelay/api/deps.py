"""
Alert Relay - API Dependencies

FastAPI dependency injection functions.
"""

from fastapi import HTTPException, Request, status

from alertrelay.notification.dispatcher import NotificationDispatcher


def get_dispatcher(request: Request) -> NotificationDispatcher:
    """Get the notification dispatcher created at startup."""
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification dispatcher not initialized",
        )
    return dispatcher
