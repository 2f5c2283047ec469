"""Shared fixtures for the lineage test suite."""

import pytest

from textlineage.config import get_settings
from textlineage.observ import configure_logging
from textlineage.core import Culture, UserId, LocalizableText


@pytest.fixture(scope="session", autouse=True)
def structured_logging():
    """Route library events through the package's structlog chain."""
    configure_logging()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings for every test so env overrides apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def en():
    return Culture(code="en")


@pytest.fixture
def fr():
    return Culture(code="fr")


@pytest.fixture
def fr_ca():
    return Culture(code="fr-CA")


@pytest.fixture
def de():
    return Culture(code="de")


@pytest.fixture
def u1():
    return UserId(value="u1")


@pytest.fixture
def u2():
    return UserId(value="u2")


@pytest.fixture
def hello(en, fr, fr_ca, u1, u2):
    """en "Hello" -> fr (by u1) -> fr-CA (by u2), integrity maintained."""
    text = LocalizableText(en, "Hello", maintain_material_integrity=True)
    text.add_translation(fr, "Bonjour", u1, en)
    text.add_translation(fr_ca, "Allô", u2, fr)
    return text
