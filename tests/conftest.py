"""
Global pytest configuration and fixtures.
"""

import pytest

from fieldcheck.config import CONFIG_ENV_VAR
from fieldcheck.validator import SchemaRegistry, TypeValidator, default_registry, get_default_validator


@pytest.fixture
def registry() -> SchemaRegistry:
    """A fresh registry, isolated from the process-wide one."""
    return SchemaRegistry()


@pytest.fixture
def validator(registry) -> TypeValidator:
    """Validator with default settings over the test registry."""
    return TypeValidator(registry)


@pytest.fixture(autouse=True)
def reset_defaults(monkeypatch):
    """Keep the default registry and validator from leaking between tests.

    The default validator is cached with whatever FIELDCHECK_CONFIG pointed
    to at first use, so the cache is dropped around every test.
    """
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    get_default_validator.cache_clear()
    yield
    default_registry.clear()
    get_default_validator.cache_clear()
