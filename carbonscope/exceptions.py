"""CarbonScope Custom Exception Hierarchy.

This module provides the exception hierarchy for CarbonScope with rich error
context for debugging and user feedback.

Exception Hierarchy:
    CarbonScopeException (base)
    ├── CalculationException
    │   ├── MissingFactorError
    │   ├── NonFiniteInputError
    │   └── ValidationError
    ├── DataException
    │   ├── InvalidSchema
    │   └── MissingData
    └── ConfigurationError

All exceptions include rich context:
- error_code: Unique error identifier
- context: Dictionary with error-specific details
- timestamp: When the error occurred

Example:
    >>> from carbonscope.exceptions import MissingFactorError
    >>> raise MissingFactorError(category="diesel")
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, List, Optional


# ==============================================================================
# Base Exception
# ==============================================================================

class CarbonScopeException(Exception):
    """Base exception for all CarbonScope errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "CS_CALC_MISSING_FACTOR_ERROR")
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "CS"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        """Generate error code based on exception class.

        Returns:
            Error code like "CS_CALC_MISSING_FACTOR_ERROR"
        """
        class_name = self.__class__.__name__
        # CamelCase -> SCREAMING_SNAKE_CASE
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', class_name).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Calculation Exceptions
# ==============================================================================

class CalculationException(CarbonScopeException):
    """Base exception for emissions calculation errors."""
    ERROR_PREFIX = "CS_CALC"


class MissingFactorError(CalculationException):
    """A custom emission factor table omits a required category.

    Raised eagerly, before any computation, so that a missing factor is never
    silently treated as zero.

    Example:
        >>> raise MissingFactorError(category="refrigerants")
    """

    def __init__(
        self,
        category: str,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        context["category"] = category
        self.category = category
        super().__init__(
            message or f"Emission factor missing for category '{category}'",
            context=context,
        )


class NonFiniteInputError(CalculationException):
    """An activity value or emission factor is NaN or infinite.

    Example:
        >>> raise NonFiniteInputError(
        ...     category="diesel", value=float("nan"), scope="scope1"
        ... )
    """

    def __init__(
        self,
        category: str,
        value: float,
        scope: Optional[str] = None,
        source: str = "activity",
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        context["category"] = category
        context["value"] = repr(value)
        context["source"] = source
        if scope:
            context["scope"] = scope
        self.category = category
        self.value = value
        self.scope = scope
        where = f"{scope}.{category}" if scope else category
        super().__init__(
            f"Non-finite {source} value for {where}: {value!r}",
            context=context,
        )


class ValidationError(CalculationException):
    """Input to a derived computation failed validation.

    Example:
        >>> raise ValidationError(
        ...     message="Offset percentage out of range",
        ...     invalid_fields={"offset_percentage": "must be within [0, 100]"}
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        invalid_fields: Optional[Dict[str, str]] = None,
    ):
        if invalid_fields:
            context = context or {}
            context["invalid_fields"] = invalid_fields
        super().__init__(message, context=context)


# ==============================================================================
# Data Exceptions
# ==============================================================================

class DataException(CarbonScopeException):
    """Base exception for data loading errors."""
    ERROR_PREFIX = "CS_DATA"


class InvalidSchema(DataException):
    """Data does not conform to the expected schema.

    Example:
        >>> raise InvalidSchema(
        ...     message="Scenario file is not a list",
        ...     data_source="scenarios.yaml",
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        data_source: Optional[str] = None,
        schema_errors: Optional[List[Any]] = None,
    ):
        context = context or {}
        if data_source:
            context["data_source"] = data_source
        if schema_errors:
            context["schema_errors"] = schema_errors
        super().__init__(message, context=context)


class MissingData(DataException):
    """Required data is missing (file, scenario, catalogue entry).

    Example:
        >>> raise MissingData(
        ...     message="Baseline scenario not found",
        ...     data_type="scenario",
        ...     missing_fields=["baseline"],
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        data_type: Optional[str] = None,
        missing_fields: Optional[List[str]] = None,
    ):
        context = context or {}
        if data_type:
            context["data_type"] = data_type
        if missing_fields:
            context["missing_fields"] = missing_fields
        super().__init__(message, context=context)


# ==============================================================================
# Configuration Exceptions
# ==============================================================================

class ConfigurationError(CarbonScopeException):
    """Configuration is invalid.

    Example:
        >>> raise ConfigurationError(
        ...     message="display_decimals must be >= 0",
        ...     context={"display_decimals": -1}
        ... )
    """
    ERROR_PREFIX = "CS_CONFIG"


# ==============================================================================
# Utilities
# ==============================================================================

def format_exception_chain(exc: BaseException) -> str:
    """Format exception chain for logging/display.

    Args:
        exc: Exception to format

    Returns:
        Formatted string with full exception chain
    """
    lines = []
    current: Optional[BaseException] = exc

    while current is not None:
        if isinstance(current, CarbonScopeException):
            lines.append(str(current))
            lines.append(f"  Context: {current.context}")
        else:
            lines.append(f"{type(current).__name__}: {current}")

        current = getattr(current, "__cause__", None)

    return "\n".join(lines)


__all__ = [
    "CarbonScopeException",
    "CalculationException",
    "MissingFactorError",
    "NonFiniteInputError",
    "ValidationError",
    "DataException",
    "InvalidSchema",
    "MissingData",
    "ConfigurationError",
    "format_exception_chain",
]
