"""
Logging setup for the Parcel Tracker.

Structured context is passed through the ``extra`` argument and rendered
after the message.
"""

import logging

# Configure structured logger
logger = logging.getLogger("tracker")

# Attributes every LogRecord carries; anything else came in via ``extra``.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = {
            key: value for key, value in vars(record).items()
            if key not in _RESERVED
        }
        if not context:
            return base
        rendered = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{base} | {rendered}"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stream handler with structured output to the tracker logger.
    
    Calling it again only updates the level.
    """
    logger.setLevel(level.upper())
    if not any(getattr(h, "_tracker_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            StructuredFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._tracker_handler = True
        logger.addHandler(handler)
    return logger
