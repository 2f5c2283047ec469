"""Type-safe exception hierarchy and error codes.

Provides structured error handling with:
- Domain-specific exception taxonomy
- HTTP-style status code mapping for embedding layers
- Structured error details
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Type-safe error codes."""

    # Validation errors (400)
    MISSING_ARGUMENT = "missing_argument"
    INVALID_CULTURE = "invalid_culture"

    # Resource errors (404)
    CULTURE_NOT_FOUND = "culture_not_found"

    # Conflicts (409)
    DUPLICATE_CULTURE = "duplicate_culture"
    ORIGINAL_CULTURE_PROTECTED = "original_culture_protected"
    PROVENANCE_CYCLE = "provenance_cycle"


class ErrorDetail(BaseModel):
    """Structured error information for callers embedding the library."""

    code: ErrorCode
    message: str
    field: Optional[str] = None
    context: dict = Field(default_factory=dict)


class LineageError(Exception):
    """Base exception for all library errors.

    Provides structured error information and status mapping.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        field: Optional[str] = None,
        status_code: int = 500,
        **context
    ):
        self.code = code
        self.message = message
        self.field = field
        self.status_code = status_code
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def to_detail(self) -> ErrorDetail:
        """Convert to error detail."""
        return ErrorDetail(
            code=self.code,
            message=self.message,
            field=self.field,
            context={key: str(value) for key, value in self.context.items()}
        )


# ═════════════════════════════════════════════════════════════════════════════
# Validation Errors (400)
# ═════════════════════════════════════════════════════════════════════════════

class ValidationError(LineageError):
    """Invalid input data."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.MISSING_ARGUMENT,
        field: Optional[str] = None,
        **context
    ):
        super().__init__(
            code=code,
            message=message,
            field=field,
            status_code=400,
            **context
        )


class ArgumentError(ValidationError):
    """A required argument was None."""

    def __init__(self, argument: str):
        super().__init__(
            message=f"Argument must not be None: {argument}",
            code=ErrorCode.MISSING_ARGUMENT,
            field=argument
        )


class InvalidCultureError(ValidationError):
    """Culture tag is malformed."""

    def __init__(self, tag: str):
        super().__init__(
            message=f"Invalid culture tag: {tag!r}",
            code=ErrorCode.INVALID_CULTURE,
            field="culture",
            tag=tag
        )


# ═════════════════════════════════════════════════════════════════════════════
# Resource Errors (404)
# ═════════════════════════════════════════════════════════════════════════════

class ResourceNotFoundError(LineageError):
    """Requested resource does not exist."""

    def __init__(
        self,
        resource_type: str,
        identifier: object,
        code: ErrorCode = ErrorCode.CULTURE_NOT_FOUND
    ):
        super().__init__(
            code=code,
            message=f"{resource_type} not found: {identifier}",
            status_code=404,
            resource_type=resource_type,
            identifier=identifier
        )


class KeyNotFoundError(ResourceNotFoundError, KeyError):
    """No version is stored for the requested culture."""

    def __init__(self, culture: object):
        super().__init__(
            resource_type="Localized version",
            identifier=culture,
            code=ErrorCode.CULTURE_NOT_FOUND
        )
        self.culture = culture


# ═════════════════════════════════════════════════════════════════════════════
# Conflicts (409)
# ═════════════════════════════════════════════════════════════════════════════

class ConflictError(LineageError):
    """Operation conflicts with the current state of the lineage."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        field: Optional[str] = None,
        **context
    ):
        super().__init__(
            code=code,
            message=message,
            field=field,
            status_code=409,
            **context
        )


class DuplicateKeyError(ConflictError):
    """A version already exists for the culture."""

    def __init__(self, culture: object):
        super().__init__(
            message=f"A version already exists for culture {culture}; use update_translation to replace it",
            code=ErrorCode.DUPLICATE_CULTURE,
            field="culture",
            culture=culture
        )
        self.culture = culture


class OriginalCultureError(ConflictError):
    """The original culture cannot be removed or treated as a translation."""

    def __init__(self, culture: object, operation: str):
        super().__init__(
            message=f"Cannot {operation} the original culture {culture}",
            code=ErrorCode.ORIGINAL_CULTURE_PROTECTED,
            field="culture",
            culture=culture,
            operation=operation
        )
        self.culture = culture


class ProvenanceCycleError(ConflictError):
    """Recording the provenance edge would make the lineage cyclic."""

    def __init__(self, culture: object, translated_from: object):
        super().__init__(
            message=(
                f"Culture {culture} cannot be translated from {translated_from}: "
                f"{translated_from} is already derived from {culture}"
            ),
            code=ErrorCode.PROVENANCE_CYCLE,
            field="translated_from",
            culture=culture,
            translated_from=translated_from
        )
        self.culture = culture
        self.translated_from = translated_from
