"""Collaborator contracts and interfaces.

Defines protocols for the opaque identifier types and the lineage surface.
"""

from typing import Hashable, Iterator, Optional, Protocol, TypeVar, runtime_checkable
from .types import LocalizedVersion, VersionSummary


T = TypeVar('T')


@runtime_checkable
class ICulture(Protocol):
    """Contract for culture identifiers.

    Only equality and hashing are ever used.
    """

    def __eq__(self, other: object) -> bool:
        ...

    def __hash__(self) -> int:
        ...


@runtime_checkable
class IUserId(Protocol):
    """Contract for user identifiers.

    Only equality and hashing are ever used.
    """

    def __eq__(self, other: object) -> bool:
        ...

    def __hash__(self) -> int:
        ...


class ILineage(Protocol[T]):
    """Contract for a text tracked together with its translations."""

    @property
    def original_culture(self) -> ICulture:
        """Culture the text was authored in."""
        ...

    @property
    def maintain_material_integrity(self) -> bool:
        """Whether material edits make derived translations obsolete."""
        ...

    def add_translation(
        self,
        culture: ICulture,
        text: T,
        translated_by_user_id: IUserId,
        translated_from: ICulture,
    ) -> None:
        """Insert a translation for a culture not yet present."""
        ...

    def remove_translation(
        self,
        culture: ICulture,
        remove_all_descendants: bool = False,
    ) -> list[Hashable]:
        """Remove a translation, optionally with everything derived from it."""
        ...

    def update_original(self, text: T, is_material: bool) -> list[Hashable]:
        """Replace the original text."""
        ...

    def update_translation(
        self,
        text: T,
        culture: ICulture,
        translated_by_user_id: IUserId,
        translated_from: ICulture,
        is_material: bool,
    ) -> list[Hashable]:
        """Replace or insert a translation."""
        ...

    def get_version(self, culture: ICulture) -> LocalizedVersion[T]:
        """Look up the version stored for a culture."""
        ...

    def summaries(self) -> list[VersionSummary]:
        """Inspect every stored version."""
        ...

    def __contains__(self, culture: object) -> bool:
        ...

    def __iter__(self) -> Iterator[Hashable]:
        ...

    def __len__(self) -> int:
        ...


def describe(lineage: ILineage, culture: Hashable) -> Optional[str]:
    """Human-readable provenance of one culture, or None if absent."""
    if culture not in lineage:
        return None
    version = lineage.get_version(culture)
    if version.translated_from is None:
        origin = "original"
    else:
        origin = f"translated from {version.translated_from} by {version.translated_by_user_id}"
    state = "obsolete" if version.is_obsolete else "current"
    return f"{culture}: {origin} ({state})"
