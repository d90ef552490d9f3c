"""
Structured JSON logging for the upload service.

Every record carries:
- timestamp (ISO8601)
- level
- service
- event (for the upload helpers below)

Upload events add provider, key, duration_ms and payload size fields.
Credentials and payload bytes are never passed to these helpers.

Usage:
    from imghost.utils.logging import configure_logging, log_upload_started

    configure_logging('imghost', 'INFO')
    log_upload_started(logger, provider='r2', key='img/a.png', has_file_path=True)
"""
import logging
import sys
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = jsonlogger.JsonFormatter(
            '%(timestamp)s %(levelname)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    provider: str,
    key: str,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    extra = {
        "event": event,
        "provider": provider,
        "key": key,
        **kwargs
    }
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
    return extra


def log_upload_started(
    logger: logging.Logger,
    provider: str,
    key: str,
    has_file_path: bool = False,
    body_base64_len: int = 0,
    body_len: int = 0,
    **kwargs
):
    """
    Log the start of an upload.

    Only presence and sizes of the payload sources are recorded.

    Args:
        logger: Logger instance
        provider: "r2" or "alioss"
        key: Object key as sent by the caller
        has_file_path: Whether a usable file path was supplied
        body_base64_len: Length of the base64 string (0 if absent)
        body_len: Length of the raw body (0 if absent)
    """
    extra = _build_log_extra(
        event="upload_started",
        provider=provider,
        key=key,
        has_file_path=has_file_path,
        body_base64_len=body_base64_len,
        body_len=body_len,
        **kwargs
    )
    logger.info(
        f"{provider}_upload start: key={key}, file_path={has_file_path}, "
        f"body_base64_len={body_base64_len}, body_len={body_len}",
        extra=extra
    )


def log_upload_completed(
    logger: logging.Logger,
    provider: str,
    key: str,
    size_bytes: int,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log a successful upload."""
    extra = _build_log_extra(
        event="upload_completed",
        provider=provider,
        key=key,
        duration_ms=duration_ms,
        size_bytes=size_bytes,
        **kwargs
    )
    logger.info(f"{provider}_upload done: key={key}, size={size_bytes}", extra=extra)


def log_upload_failed(
    logger: logging.Logger,
    provider: str,
    key: str,
    error: str,
    error_type: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a failed upload.

    No stack trace: every failure here is an expected, already classified error.

    Args:
        logger: Logger instance
        provider: "r2" or "alioss"
        key: Object key as sent by the caller
        error: Message returned to the caller
        error_type: Exception class name (InvalidInputError, ProviderError, ...)
        duration_ms: Optional duration in milliseconds
    """
    extra = _build_log_extra(
        event="upload_failed",
        provider=provider,
        key=key,
        duration_ms=duration_ms,
        error=str(error),
        error_type=error_type,
        **kwargs
    )
    logger.error(f"{provider}_upload failed: key={key} - {error}", extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
