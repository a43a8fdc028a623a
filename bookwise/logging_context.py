"""Per-command operation ids for log output.

Each CLI invocation runs as one operation. ``main()`` mints an id such as
``OP-1a2b3c`` and stores it in a context variable; every record that passes
through ``OperationIdFilter`` then carries it as ``record.op_id``. Blocking a
whole day writes one store record per slot, and the shared id is what ties
those log lines back to the single command that produced them. Records
logged outside any command show ``NO_OP_ID``.
"""

import logging
import uuid
from contextvars import ContextVar

_op_id: ContextVar[str] = ContextVar("op_id", default="NO_OP_ID")


def new_op_id() -> str:
    return f"OP-{uuid.uuid4().hex[:6]}"


def set_op_id(op_id: str) -> None:
    """Make ``op_id`` the id of the operation running in this context."""
    _op_id.set(op_id)


def get_op_id() -> str:
    return _op_id.get()


class OperationIdFilter(logging.Filter):
    """Stamps the running operation's id onto each record; never drops one."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.op_id = _op_id.get()  # type: ignore[attr-defined]
        return True


def get_op_logger(name: str) -> logging.Logger:
    """``logging.getLogger(name)`` with an ``OperationIdFilter`` installed.

    Calling it repeatedly for the same name installs the filter only once.
    Handlers that format with ``%(op_id)s`` need the filter too, because
    records from third-party loggers never pass through this one.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, OperationIdFilter) for f in logger.filters):
        logger.addFilter(OperationIdFilter())
    return logger
