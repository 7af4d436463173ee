import logging
import sys
import contextvars
from typing import Optional

# Dotted path of the record currently being converted, e.g. "Order.customer"
_RECORD_PATH: contextvars.ContextVar[str] = contextvars.ContextVar("record_path", default="-")


class _RecordPathFilter(logging.Filter):
    """Logging filter that injects the record path from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        try:
            record.record_path = _RECORD_PATH.get()
        except Exception:
            record.record_path = "-"
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | path=%(record_path)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_root_logger(level: str = "INFO") -> None:
    """
    Configure the root logger and the structmap-specific logger.

    Root logger stays at INFO so that host application libraries stay quiet.
    Only structmap namespace logs are set to the requested level.

    Args:
        level: Log level for structmap logs (DEBUG, INFO, WARNING, ERROR).

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()

    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _RecordPathFilter) for f in h.filters):
            logging.getLogger("structmap").setLevel(getattr(logging, level.upper(), logging.INFO))
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_RecordPathFilter())
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)

    logging.getLogger("structmap").setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str = "structmap", level: Optional[str] = None) -> logging.Logger:
    """
    Get a module-specific logger.

    Library modules call this without a level so the host application keeps
    control of verbosity; pass ``level`` to configure stdout output as well.
    """
    logger = logging.getLogger(name)
    if level is not None:
        configure_root_logger(level)
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def current_record_path() -> str:
    return _RECORD_PATH.get()


def push_record_path(segment: Optional[str]) -> Optional[contextvars.Token]:
    """Append a segment to the current record path and return a token for later reset."""
    if not segment:
        return None
    parent = _RECORD_PATH.get()
    path = segment if parent == "-" else f"{parent}.{segment}"
    return _RECORD_PATH.set(path)


def reset_record_path(token: Optional[contextvars.Token]) -> None:
    """Reset the record path context using the provided token (if any)."""
    if token is None:
        return
    try:
        _RECORD_PATH.reset(token)
    except ValueError:
        # Token created in a different context; nothing to undo here
        pass
