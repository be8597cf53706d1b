"""
Utilities Package for SchemaForge
"""
from .logging import (
    setup_logging,
    get_logger,
    log_context,
    log_operation,
)

from .errors import (
    ErrorSeverity,
    ErrorCategory,
    ErrorContext,
    SchemaForgeError,
    UnknownFormatError,
    UnsupportedTargetError,
    SchemaValidationError,
    LLMError,
    ConfigurationError,
    format_error_for_user,
)

from .metrics import (
    MetricsCollector,
    get_metrics_collector,
    counter,
    timer,
    SchemaForgeMetrics,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "log_context",
    "log_operation",
    # Errors
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorContext",
    "SchemaForgeError",
    "UnknownFormatError",
    "UnsupportedTargetError",
    "SchemaValidationError",
    "LLMError",
    "ConfigurationError",
    "format_error_for_user",
    # Metrics
    "MetricsCollector",
    "get_metrics_collector",
    "counter",
    "timer",
    "SchemaForgeMetrics",
]
