"""
Error Handling Module for SchemaForge
Defines custom exceptions and error handling utilities
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from datetime import datetime


class ErrorSeverity(str, Enum):
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification"""
    INPUT_FORMAT = "input_format"
    SCHEMA_VALIDATION = "schema_validation"
    GENERATION = "generation"
    LLM = "llm"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Additional context for errors"""
    request_id: Optional[str] = None
    input_format: Optional[str] = None
    target: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_id": self.request_id,
            "input_format": self.input_format,
            "target": self.target,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class SchemaForgeError(Exception):
    """Base exception for SchemaForge"""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        recoverable: bool = False,
        suggestions: Optional[List[str]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.recoverable = recoverable
        self.suggestions = suggestions or []
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }

    def __str__(self) -> str:
        return f"[{self.category.value}] {self.message}"


class UnknownFormatError(SchemaForgeError):
    """An input format tag outside the supported set"""

    def __init__(
        self,
        input_format: Any,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=f"Unknown format: {getattr(input_format, 'value', input_format)}",
            category=ErrorCategory.INPUT_FORMAT,
            severity=ErrorSeverity.HIGH,
            context=context,
            suggestions=["Use one of: prisma, sql, english"],
        )
        self.input_format = input_format


class UnsupportedTargetError(SchemaForgeError):
    """A generation target with no template generator"""

    def __init__(
        self,
        target: Any,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=f"No template generator for target: {getattr(target, 'value', target)}",
            category=ErrorCategory.GENERATION,
            severity=ErrorSeverity.HIGH,
            context=context,
            suggestions=[
                "Template targets are: zod, types",
                "Route trpc and react-form through the model-driven renderer",
            ],
        )
        self.target = target


class SchemaValidationError(SchemaForgeError):
    """Structurally invalid intermediate representation"""

    def __init__(
        self,
        message: str,
        validation_errors: Optional[List[str]] = None,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        suggestions = ["Check the schema JSON against the IR structure"]
        if validation_errors:
            suggestions.extend([f"Fix: {error}" for error in validation_errors])

        super().__init__(
            message=message,
            category=ErrorCategory.SCHEMA_VALIDATION,
            severity=ErrorSeverity.HIGH,
            context=context,
            suggestions=suggestions,
            original_error=original_error
        )
        self.validation_errors = validation_errors or []


class LLMError(SchemaForgeError):
    """LLM-related errors"""

    def __init__(
        self,
        message: str,
        model_id: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.LLM,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=True,
            suggestions=[
                "Check AWS credentials and permissions",
                "Verify Bedrock model availability",
                "Check for rate limiting",
            ],
            original_error=original_error
        )
        self.model_id = model_id


class ConfigurationError(SchemaForgeError):
    """Configuration errors"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        suggestions = ["Review configuration settings"]
        if config_key:
            suggestions.append(f"Check configuration for key: {config_key}")

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            context=context,
            suggestions=suggestions,
            original_error=original_error
        )
        self.config_key = config_key


def format_error_for_user(error: SchemaForgeError) -> str:
    """Format an error for terminal display"""
    lines = [f"Error: {error.message}"]

    if isinstance(error, SchemaValidationError) and error.validation_errors:
        lines.append("Problems:")
        for problem in error.validation_errors:
            lines.append(f"  - {problem}")
    elif error.suggestions:
        lines.append("Suggestions:")
        for suggestion in error.suggestions:
            lines.append(f"  - {suggestion}")

    if error.original_error:
        lines.append(f"Cause: {error.original_error}")

    return "\n".join(lines)
