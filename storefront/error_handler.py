"""Turn integration failures into transient user-facing notices."""
from typing import Any, Callable, Dict, List, Optional
import logging

from storefront.integrations.contracts.interfaces import Notice, NoticeVariant
from storefront.integrations.errors import IntegrationError, PreconditionRejected, StorefrontError
from storefront.integrations.policy.response_wrappers import DEFAULT_ERROR_MESSAGE

logger = logging.getLogger(__name__)

NoticeListener = Callable[[Notice], None]


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Notice:
        context = dict(context or {})
        if isinstance(exc, PreconditionRejected):
            logger.info("Rejected locally (%s): %s", exc.reason, exc.message)
            return Notice(
                message=exc.message,
                variant=NoticeVariant.WARNING,
                context={**context, "reason": exc.reason},
            )
        if isinstance(exc, IntegrationError):
            logger.warning(
                "%s during %s: %s (status=%s)",
                type(exc).__name__, context.get("operation", "request"), exc.message, exc.status_code,
            )
            return Notice(
                message=exc.message or DEFAULT_ERROR_MESSAGE,
                variant=NoticeVariant.ERROR,
                context={**context, "error": type(exc).__name__, "status_code": exc.status_code},
            )
        if isinstance(exc, StorefrontError):
            logger.warning("Storefront error: %s", exc.message)
            return Notice(message=exc.message, variant=NoticeVariant.ERROR, context=context)

        logger.error("Unhandled exception in storefront engine: %s", exc, exc_info=True)
        return Notice(
            message=DEFAULT_ERROR_MESSAGE,
            variant=NoticeVariant.ERROR,
            context={**context, "error": str(exc)},
        )


class NoticeBoard:
    """Collects notices for the view layer (the snackbar queue).

    A listener, when given, is called for every posted notice; ``history``
    keeps them all until ``clear`` is called.
    """

    def __init__(self, listener: Optional[NoticeListener] = None):
        self.listener = listener
        self.history: List[Notice] = []

    def post(self, notice: Notice) -> Notice:
        self.history.append(notice)
        if self.listener is not None:
            self.listener(notice)
        return notice

    def of_variant(self, variant: NoticeVariant) -> List[Notice]:
        return [n for n in self.history if n.variant == variant]

    def clear(self) -> None:
        self.history.clear()
