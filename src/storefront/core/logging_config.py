import logging
import sys

from .config import LOG_LEVEL


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True  # If no namespaces are specified, allow all records
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(level: str = LOG_LEVEL, allowed_namespaces=None) -> logging.Logger:
    """Attach a stdout handler to the ``storefront`` logger.

    Modules log through ``logging.getLogger(__name__)`` so their records
    propagate to this logger. Calling this more than once does not stack
    handlers.
    """
    app_logger = logging.getLogger("storefront")
    app_logger.setLevel(level)

    if not any(getattr(h, "_storefront_handler", False) for h in app_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(log_formatter)
        console_handler._storefront_handler = True
        if allowed_namespaces:
            console_handler.addFilter(NamespaceFilter(allowed_namespaces))
        app_logger.addHandler(console_handler)

    return app_logger
