"""JSON logging with the payment intent of the current request attached."""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

payment_intent_ctx: ContextVar[str] = ContextVar("payment_intent", default="")


class ContextFilter(logging.Filter):
    """Inject service name and payment intent id into every log record."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        record.payment_intent = payment_intent_ctx.get()
        return True


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """Configure root logger once per process."""

    handler = logging.StreamHandler(sys.stdout)
    context_filter = ContextFilter(service_name)
    handler.addFilter(context_filter)
    handler.setFormatter(
        JsonFormatter("%(asctime)s %(levelname)s %(name)s %(service_name)s %(payment_intent)s %(message)s")
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
