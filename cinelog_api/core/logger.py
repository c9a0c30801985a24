import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from queue import Queue

from pythonjsonlogger.json import JsonFormatter

from cinelog_api.core.config import settings
from cinelog_api.core.context import get_caller_id, get_trace_id

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "%(trace_id)s %(caller_id)s %(service)s %(env)s"
)


class RequestContextFilter(logging.Filter):
    """Stamp request context onto every record before it is queued."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = (getattr(record, "trace_id", None)
                           or get_trace_id() or "-")
        if getattr(record, "caller_id", None) is None:
            record.caller_id = get_caller_id()
        record.service = getattr(record, "service", None) or settings.app_name
        record.env = getattr(record, "env", None) or settings.env
        return True


_listener: QueueListener | None = None


def setup_json_logging(service: str = "cinelog_service",
                       level: str | int = logging.INFO) -> None:
    global _listener

    if _listener is not None:
        # already configured (e.g. lifespan re-entered in tests)
        return

    root = logging.getLogger()
    root.setLevel(level)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(JsonFormatter(LOG_FORMAT))

    q: Queue = Queue(-1)
    queue_handler = QueueHandler(q)
    # the queue handler runs in the request's context, the listener does not
    queue_handler.addFilter(RequestContextFilter())

    _listener = QueueListener(q, stream_handler, respect_handler_level=True)
    _listener.start()

    root.handlers = [queue_handler]

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    logging.getLogger(__name__).info(
        "logger_initialized",
        extra={"service": service})


def shutdown_logging() -> None:
    """Flush and stop the queue listener on application shutdown."""
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
