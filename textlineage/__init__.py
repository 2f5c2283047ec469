"""textlineage - localized text with translation provenance.

Tracks a text together with its translations, who made each one and what
it was translated from, and flags translations as obsolete when their
source changes materially.
"""

__version__ = "0.1.0"

# Observability exports for convenience
from textlineage.observ import (
    configure_logging,
    get_logger,
    timer,
    acting_as,
    set_actor_id,
    clear_context,
)
from textlineage.errors import (
    LineageError,
    ErrorCode,
    ErrorDetail,
    ValidationError,
    ArgumentError,
    InvalidCultureError,
    ResourceNotFoundError,
    KeyNotFoundError,
    ConflictError,
    DuplicateKeyError,
    OriginalCultureError,
    ProvenanceCycleError,
)
from textlineage.core import (
    Culture,
    UserId,
    LocalizedVersion,
    VersionSummary,
    TranslationLineage,
    LocalizableText,
    describe,
)

__all__ = [
    # Version
    "__version__",
    # Logging
    "configure_logging",
    "get_logger",
    "acting_as",
    "timer",
    "set_actor_id",
    "clear_context",
    # Errors
    "LineageError",
    "ErrorCode",
    "ErrorDetail",
    "ValidationError",
    "ArgumentError",
    "InvalidCultureError",
    "ResourceNotFoundError",
    "KeyNotFoundError",
    "ConflictError",
    "DuplicateKeyError",
    "OriginalCultureError",
    "ProvenanceCycleError",
    # Domain
    "Culture",
    "UserId",
    "LocalizedVersion",
    "VersionSummary",
    "TranslationLineage",
    "LocalizableText",
    "describe",
]
