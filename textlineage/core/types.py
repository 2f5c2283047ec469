"""Core type definitions for localized text lineage.

Provides immutable domain models with strict typing.
All entities are Pydantic models for validation and serialization.
"""

import re
from typing import Any, Generic, Hashable, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic import ValidationError as PydanticValidationError

from textlineage.errors import ArgumentError, InvalidCultureError


T = TypeVar("T")

# Language subtag followed by script/region/variant subtags: en, fr-CA, zh-Hant-TW
CULTURE_TAG = re.compile(r"^[A-Za-z]{2,8}(-[A-Za-z0-9]{1,8})*$")


class Culture(BaseModel):
    """Locale identifier such as ``en`` or ``fr-CA``.

    The lineage only needs equality and hashing from its culture keys, so
    any hashable value can be used instead of this model.
    """
    model_config = ConfigDict(frozen=True)

    code: str

    @field_validator("code")
    @classmethod
    def check_tag(cls, value: str) -> str:
        if not CULTURE_TAG.match(value):
            raise ValueError(f"not a culture tag: {value!r}")
        return value

    @classmethod
    def of(cls, value: "Culture | str") -> "Culture":
        """Coerce a tag string (or an existing culture) to a Culture."""
        if isinstance(value, Culture):
            return value
        try:
            return cls(code=value)
        except PydanticValidationError:
            raise InvalidCultureError(str(value)) from None

    @property
    def language(self) -> str:
        """Primary language subtag, lowercased."""
        return self.code.split("-", 1)[0].lower()

    def __str__(self) -> str:
        return self.code


class UserId(BaseModel):
    """Identifier of the user who produced a translation."""
    model_config = ConfigDict(frozen=True)

    value: str = Field(min_length=1)

    def __str__(self) -> str:
        return self.value


class LocalizedVersion(BaseModel, Generic[T]):
    """One culture's text plus its provenance.

    Everything but the obsolete flag is frozen: a change of text replaces
    the version wholesale. The flag only ever moves from False to True.
    """
    model_config = ConfigDict(frozen=True)

    text: T
    translated_from: Optional[Hashable] = None
    translated_by_user_id: Optional[Hashable] = None

    _is_obsolete: bool = PrivateAttr(default=False)

    @classmethod
    def create(
        cls,
        text: T,
        translated_by_user_id: Optional[Hashable] = None,
        translated_from: Optional[Hashable] = None,
    ) -> "LocalizedVersion[T]":
        """Build a current (non-obsolete) version.

        Raises:
            ArgumentError: If ``text`` is None.
        """
        if text is None:
            raise ArgumentError("text")
        return cls(
            text=text,
            translated_from=translated_from,
            translated_by_user_id=translated_by_user_id,
        )

    @property
    def is_obsolete(self) -> bool:
        return self._is_obsolete

    @property
    def is_original(self) -> bool:
        return self.translated_from is None

    def mark_obsolete(self) -> None:
        """Flag this version as stale. Idempotent."""
        self._is_obsolete = True


class VersionSummary(BaseModel):
    """Read-only view of one entry of a lineage, for inspection."""
    model_config = ConfigDict(frozen=True)

    culture: Hashable
    text: Any
    translated_from: Optional[Hashable] = None
    translated_by_user_id: Optional[Hashable] = None
    is_obsolete: bool = False
