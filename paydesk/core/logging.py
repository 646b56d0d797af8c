import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional
from pythonjsonlogger import jsonlogger
from contextvars import ContextVar

# Correlation id of the HTTP request being served
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
# "YYYY-MM-DD/YYYY-MM-DD" while a payroll run is being generated
payroll_period_var: ContextVar[str] = ContextVar("payroll_period", default="")


class PaydeskJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        req_id = request_id_var.get()
        if req_id:
            log_record["request_id"] = req_id

        period = payroll_period_var.get()
        if period:
            log_record["payroll_period"] = period

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname


def new_request_id(incoming: Optional[str] = None) -> str:
    """Use the caller's correlation id when it sent one, otherwise mint a fresh one."""
    return incoming.strip() if incoming and incoming.strip() else uuid.uuid4().hex


@contextmanager
def payroll_period_context(period_label: str) -> Iterator[None]:
    token = payroll_period_var.set(period_label)
    try:
        yield
    finally:
        payroll_period_var.reset(token)


def setup_logging(level: str = "INFO"):
    root = logging.getLogger()
    root.setLevel(level)
    # The app module can be imported more than once (tests, reload)
    if any(isinstance(h.formatter, PaydeskJsonFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(PaydeskJsonFormatter("%(timestamp) %(level) %(name) %(message)"))
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
