"""
Domain-specific exceptions for the Ames Housing exploration pipeline.

This module defines a hierarchy of custom exceptions so callers can tell
infrastructure failures apart from data quality problems in the dataset.
"""

# =============================================================================
# INFRASTRUCTURE & IO ERRORS
# =============================================================================


class IngestionError(Exception):
    """Raised when the data source cannot be accessed or read (Infrastructure/IO)."""

    pass


class ReportingError(Exception):
    """Raised when a summary or figure artifact cannot be rendered or written."""

    pass


# =============================================================================
# DATA QUALITY & VALIDATION ERRORS
# =============================================================================


class DataValidationError(Exception):
    """Raised when the data itself fails quality checks or statistical requirements."""

    pass


class OutcomeSchemaError(DataValidationError):
    """Raised when the outcome column is missing or does not hold numeric values."""

    pass


class OutcomeDomainError(DataValidationError):
    """
    Raised when the outcome column holds values outside the log domain.

    Zero, negative, missing and infinite values all land here; they point at an
    upstream data quality problem and are never coerced to NaN.
    """

    pass


class ConfigurationError(Exception):
    """Raised when the application contract (config.yaml) is violated."""

    pass
