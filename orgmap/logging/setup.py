import sys
import logging
from typing import Any, Iterable, Optional

from loguru import logger

SENSITIVE_KEYS = ["key", "token", "password", "secret", "auth"]


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "****" + value[-4:]
    return "********"


def make_sensitive_data_filter(secrets: Iterable[Optional[str]] = ()):
    """Builds a loguru filter masking known secrets and sensitive extra values."""
    known_secrets = [s for s in secrets if s]

    def sensitive_data_filter(record: dict[str, Any]) -> bool:
        extra = record.get("extra")
        if isinstance(extra, dict):
            for extra_key, value in extra.items():
                if any(sk in extra_key.lower() for sk in SENSITIVE_KEYS):
                    extra[extra_key] = (
                        _mask(value) if isinstance(value, str) else "********"
                    )

        for secret in known_secrets:
            if secret in record["message"]:
                record["message"] = record["message"].replace(secret, "********")

        return True  # Keep the record after filtering/masking

    return sensitive_data_filter


class InterceptHandler(logging.Handler):
    """Routes standard logging records (httpx, etc.) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = "INFO", secrets: Iterable[Optional[str]] = ()) -> None:
    """Configures the loguru logger.

    Args:
        level: Minimum level for the stderr sink.
        secrets: Credential values that must never appear in log output.
    """
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=False,  # Keep local variables (credentials) out of tracebacks
        filter=make_sensitive_data_filter(secrets),
    )
    logger.info(f"Logging initialized with level: {level.upper()}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.debug("Standard logging intercepted.")
