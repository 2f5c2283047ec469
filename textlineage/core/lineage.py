"""Translation lineage: a text, its translations, and where each came from.

Every non-original version records the culture it was translated from.
Those records form directed edges (child -> parent) over the cultures in
the lineage, which two graph walks operate on:

- Obsolescence propagation: after a material edit of culture C, every
  version derived from C, directly or transitively, is marked obsolete.
- Cascading removal: removing C may also remove everything derived from it.

Provenance is a plain identifier relation. An edge may point at a culture
that is not (or no longer) present; such edges never match during a walk.
Both walks carry a visited set, so a cyclic provenance cannot make them
loop forever.
"""

import threading
import uuid
from typing import Generic, Hashable, Iterator, Optional, TypeVar

from textlineage.config import get_settings
from textlineage.errors import (
    ArgumentError,
    DuplicateKeyError,
    KeyNotFoundError,
    OriginalCultureError,
    ProvenanceCycleError,
)
from textlineage.observ import acting_as, get_logger, timer
from .contracts import ICulture, IUserId
from .types import LocalizedVersion, VersionSummary

logger = get_logger(__name__)

T = TypeVar("T")


def _require(**arguments) -> None:
    for name, value in arguments.items():
        if value is None:
            raise ArgumentError(name)


class TranslationLineage(Generic[T]):
    """A text in its original culture together with its translations.

    Args:
        original_culture: Culture the text was authored in. Fixed for the
            lifetime of the lineage.
        original: The original text.
        maintain_material_integrity: True if translations must be revisited
            whenever the meaning of their source changes. Immaterial changes
            (spelling, style) never affect translations. Defaults to the
            ``maintain_material_integrity`` setting.

    Mutating calls on one instance are serialized by an internal lock.
    Validation always happens before mutation, so a call that raises leaves
    the lineage unchanged.
    """

    def __init__(
        self,
        original_culture: ICulture,
        original: T,
        maintain_material_integrity: Optional[bool] = None,
    ):
        _require(original_culture=original_culture, original=original)

        settings = get_settings()
        if maintain_material_integrity is None:
            maintain_material_integrity = settings.maintain_material_integrity

        self._original_culture = original_culture
        self._maintain_material_integrity = maintain_material_integrity
        self._reject_cycles = settings.reject_provenance_cycles
        self._lock = threading.RLock()
        self._versions: dict[Hashable, LocalizedVersion[T]] = {
            original_culture: LocalizedVersion.create(original)
        }

        self.lineage_id = uuid.uuid4().hex
        self._log = logger.bind(lineage_id=self.lineage_id)
        self._log.debug(
            "lineage_created",
            original_culture=str(original_culture),
            maintain_material_integrity=maintain_material_integrity,
        )

    @property
    def original_culture(self) -> ICulture:
        return self._original_culture

    @property
    def maintain_material_integrity(self) -> bool:
        return self._maintain_material_integrity

    @property
    def original(self) -> LocalizedVersion[T]:
        return self._versions[self._original_culture]

    # ─────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────

    def add_translation(
        self,
        culture: ICulture,
        text: T,
        translated_by_user_id: IUserId,
        translated_from: ICulture,
    ) -> None:
        """Insert a translation for a culture that has none yet.

        ``translated_from`` need not be present in the lineage.

        Raises:
            ArgumentError: If any argument is None.
            DuplicateKeyError: If ``culture`` already has a version; use
                :meth:`update_translation` to replace it.
            ProvenanceCycleError: If ``translated_from`` is already derived
                from ``culture``.
        """
        _require(
            culture=culture,
            text=text,
            translated_by_user_id=translated_by_user_id,
            translated_from=translated_from,
        )
        with acting_as(str(translated_by_user_id)):
            with self._lock:
                if culture in self._versions:
                    raise DuplicateKeyError(culture)
                self._check_provenance(culture, translated_from)

                self._versions[culture] = LocalizedVersion.create(
                    text, translated_by_user_id, translated_from
                )

            self._log.info(
                "translation_added",
                culture=str(culture),
                translated_from=str(translated_from),
            )

    def remove_translation(
        self,
        culture: ICulture,
        remove_all_descendants: bool = False,
    ) -> list[Hashable]:
        """Remove the translation for ``culture``, if any.

        With ``remove_all_descendants`` every translation derived from it,
        directly or transitively, is removed as well.

        Returns:
            Removed cultures in removal order; empty when nothing was stored.

        Raises:
            ArgumentError: If ``culture`` is None.
            OriginalCultureError: If ``culture`` is the original culture.
        """
        _require(culture=culture)
        if culture == self._original_culture:
            raise OriginalCultureError(culture, "remove")

        with self._lock:
            if not remove_all_descendants:
                removed = [culture] if self._versions.pop(culture, None) is not None else []
            else:
                with timer(self._log, "cascade_removal", culture=str(culture)):
                    removed = []
                    self._remove_subtree(culture, removed, visited=set())

        if removed:
            self._log.info(
                "translation_removed",
                culture=str(culture),
                cascade=remove_all_descendants,
                removed=[str(c) for c in removed],
            )
        return removed

    def update_original(self, text: T, is_material: bool) -> list[Hashable]:
        """Replace the original text with a fresh, current version.

        Returns:
            Cultures marked obsolete by this edit.

        Raises:
            ArgumentError: If ``text`` is None.
        """
        _require(text=text)
        with self._lock:
            self._versions[self._original_culture] = LocalizedVersion.create(text)
            obsoleted = self._after_edit(self._original_culture, is_material)

        self._log.info(
            "original_updated",
            culture=str(self._original_culture),
            is_material=is_material,
            obsoleted=len(obsoleted),
        )
        return obsoleted

    def update_translation(
        self,
        text: T,
        culture: ICulture,
        translated_by_user_id: IUserId,
        translated_from: ICulture,
        is_material: bool,
    ) -> list[Hashable]:
        """Replace (or insert) the translation for ``culture``.

        Returns:
            Cultures marked obsolete by this edit.

        Raises:
            ArgumentError: If any of text, culture, translator or source is None.
            OriginalCultureError: If ``culture`` is the original culture.
            ProvenanceCycleError: If ``translated_from`` is already derived
                from ``culture``.
        """
        _require(
            text=text,
            culture=culture,
            translated_by_user_id=translated_by_user_id,
            translated_from=translated_from,
        )
        if culture == self._original_culture:
            raise OriginalCultureError(culture, "update as a translation")

        with acting_as(str(translated_by_user_id)):
            with self._lock:
                self._check_provenance(culture, translated_from)
                self._versions[culture] = LocalizedVersion.create(
                    text, translated_by_user_id, translated_from
                )
                obsoleted = self._after_edit(culture, is_material)

            self._log.info(
                "translation_updated",
                culture=str(culture),
                translated_from=str(translated_from),
                is_material=is_material,
                obsoleted=len(obsoleted),
            )
        return obsoleted

    # ─────────────────────────────────────────────────────────────────────
    # Lookups
    # ─────────────────────────────────────────────────────────────────────

    def get_version(self, culture: ICulture) -> LocalizedVersion[T]:
        """Version stored for ``culture``.

        Raises:
            KeyNotFoundError: If no version is stored for ``culture``.
        """
        try:
            return self._versions[culture]
        except KeyError:
            raise KeyNotFoundError(culture) from None

    def get_text(self, culture: ICulture) -> T:
        return self.get_version(culture).text

    def __getitem__(self, culture: ICulture) -> LocalizedVersion[T]:
        return self.get_version(culture)

    def __contains__(self, culture: object) -> bool:
        return culture in self._versions

    def __iter__(self) -> Iterator[Hashable]:
        with self._lock:
            return iter(list(self._versions))

    def __len__(self) -> int:
        return len(self._versions)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(original_culture={self._original_culture!r}, "
            f"cultures={len(self._versions)})"
        )

    @property
    def cultures(self) -> tuple[Hashable, ...]:
        with self._lock:
            return tuple(self._versions)

    def translations_from(self, culture: ICulture) -> list[Hashable]:
        """Cultures translated directly from ``culture``."""
        with self._lock:
            return self._children_of(culture)

    def descendants_of(self, culture: ICulture) -> list[Hashable]:
        """Every culture derived from ``culture``, depth-first."""
        with self._lock:
            found: list[Hashable] = []
            self._walk_descendants(culture, found.append, visited={culture})
            return found

    def obsolete_cultures(self) -> list[Hashable]:
        with self._lock:
            return [c for c, v in self._versions.items() if v.is_obsolete]

    def dangling_cultures(self) -> list[Hashable]:
        """Cultures whose source culture is not in the lineage."""
        with self._lock:
            return [
                c for c, v in self._versions.items()
                if v.translated_from is not None and v.translated_from not in self._versions
            ]

    def summaries(self) -> list[VersionSummary]:
        with self._lock:
            return [
                VersionSummary(
                    culture=culture,
                    text=version.text,
                    translated_from=version.translated_from,
                    translated_by_user_id=version.translated_by_user_id,
                    is_obsolete=version.is_obsolete,
                )
                for culture, version in self._versions.items()
            ]

    # ─────────────────────────────────────────────────────────────────────
    # Graph walks
    # ─────────────────────────────────────────────────────────────────────

    def _children_of(self, culture: Hashable) -> list[Hashable]:
        # Snapshot: callers mutate the map while walking these keys.
        return [c for c, v in self._versions.items() if v.translated_from == culture]

    def _walk_descendants(self, culture, visit, visited: set) -> None:
        # Explicit stack: provenance chains may be deeper than the recursion limit.
        stack = [(child, culture) for child in reversed(self._children_of(culture))]
        while stack:
            child, parent = stack.pop()
            if child in visited:
                self._log.warning(
                    "provenance_cycle_skipped",
                    culture=str(child),
                    translated_from=str(parent),
                )
                continue
            visited.add(child)
            visit(child)
            stack.extend((grandchild, child) for grandchild in reversed(self._children_of(child)))

    def _after_edit(self, culture: Hashable, is_material: bool) -> list[Hashable]:
        if not (self._maintain_material_integrity and is_material):
            return []
        with timer(self._log, "obsolescence_propagation", culture=str(culture)):
            obsoleted = self._propagate_obsolescence(culture)
        if obsoleted:
            self._log.info(
                "versions_marked_obsolete",
                source=str(culture),
                cultures=[str(c) for c in obsoleted],
            )
        return obsoleted

    def _propagate_obsolescence(self, culture: Hashable) -> list[Hashable]:
        obsoleted: list[Hashable] = []

        def mark(child: Hashable) -> None:
            self._versions[child].mark_obsolete()
            obsoleted.append(child)

        # The edited culture itself was just replaced and stays current.
        self._walk_descendants(culture, mark, visited={culture})
        return obsoleted

    def _remove_subtree(self, culture: Hashable, removed: list, visited: set) -> None:
        stack = [culture]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            children = self._children_of(current)
            if self._versions.pop(current, None) is not None:
                removed.append(current)
            stack.extend(child for child in reversed(children) if child not in visited)

    def _check_provenance(self, culture: Hashable, translated_from: Hashable) -> None:
        if not self._reject_cycles:
            return
        if translated_from == culture:
            raise ProvenanceCycleError(culture, translated_from)
        found: list[Hashable] = []
        self._walk_descendants(culture, found.append, visited={culture})
        if translated_from in found:
            raise ProvenanceCycleError(culture, translated_from)


class LocalizableText(TranslationLineage[str]):
    """Lineage of a plain string.

    Use this instead of ``str`` for any text that needs to be localized.
    """
