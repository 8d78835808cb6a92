"""
Exception hierarchy for the feature generation pipeline.
Every error carries the HTTP status code the API layer should answer with.
"""

from typing import Any, Optional


class FeatureSmithError(Exception):
    """Base exception for all FeatureSmith errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


# =============================================================================
# Pipeline Errors (500)
# =============================================================================


class PipelineError(FeatureSmithError):
    """A pipeline operation failed. Message reads 'Failed to <operation>: <cause>'."""

    def __init__(
        self,
        operation: str,
        cause: str,
        code: str = "PIPELINE_ERROR",
        status_code: int = 500,
    ) -> None:
        super().__init__(
            message=f"Failed to {operation}: {cause}",
            code=code,
            details={"operation": operation},
            status_code=status_code,
        )
        self.operation = operation
        self.cause = cause


class ModelInvocationError(PipelineError):
    """Transport or API-level failure while calling the language model."""

    def __init__(self, operation: str, cause: str) -> None:
        super().__init__(operation, cause, code="MODEL_INVOCATION_ERROR")


class ModelResponseError(PipelineError):
    """The model answered with something that is not a JSON object."""

    def __init__(self, operation: str, cause: str) -> None:
        super().__init__(operation, cause, code="MODEL_RESPONSE_ERROR")


class ConfigurationError(FeatureSmithError):
    """Required configuration (an API key) is missing."""

    def __init__(self, message: str, setting: str) -> None:
        super().__init__(message=message, code="CONFIGURATION_ERROR", details={"setting": setting})
        self.setting = setting


# =============================================================================
# Client Errors (400-499)
# =============================================================================


class FeatureValidationError(PipelineError):
    """Caller supplied an incomplete request (checked before any model call)."""

    def __init__(self, operation: str, cause: str) -> None:
        super().__init__(operation, cause, code="VALIDATION_ERROR", status_code=400)


class FeatureNotFoundError(FeatureSmithError):
    """Requested feature does not exist."""

    def __init__(self, feature_id: int) -> None:
        super().__init__(
            message="Feature not found",
            code="NOT_FOUND",
            details={"feature_id": feature_id},
            status_code=404,
        )
        self.feature_id = feature_id
