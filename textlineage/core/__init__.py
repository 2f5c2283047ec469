"""Core domain models and the translation lineage aggregate.

Barrel export for clean imports across the package.
"""

from .types import (
    Culture,
    UserId,
    LocalizedVersion,
    VersionSummary,
)
from .contracts import ICulture, IUserId, ILineage, describe
from .lineage import TranslationLineage, LocalizableText

__all__ = [
    "Culture",
    "UserId",
    "LocalizedVersion",
    "VersionSummary",
    "ICulture",
    "IUserId",
    "ILineage",
    "describe",
    "TranslationLineage",
    "LocalizableText",
]
