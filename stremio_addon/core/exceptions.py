"""
Addon Exceptions
Error types raised by handlers and the request pipeline
"""
from typing import Any, Dict, Optional


class AddonError(Exception):
    """
    Base exception for addon errors

    Attributes:
        message: Description that is safe to return to a client
        context: Extra debug info, logged but never returned
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(AddonError):
    """Raised when a handler has nothing for the requested type/id (HTTP 404)"""

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class MissingRequestContextError(AddonError, RuntimeError):
    """
    Raised when a stage reads the request context before the timer installed it.

    This is a misconfigured middleware chain, not bad client input.
    """

    def __init__(self, stage: str = "unknown"):
        super().__init__(
            message=f"Request context not installed before stage '{stage}'; "
                    "TimerMiddleware must be the outermost stage",
            context={"stage": stage},
        )
