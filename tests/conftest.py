"""
Pytest configuration and fixtures for apiversioning tests.
"""

from __future__ import annotations

import os
from typing import Dict, Generator

import pytest

from apiversioning.config import reset_config
from apiversioning.graph.elements import Enum, Model, Namespace
from apiversioning.manifest.loader import ManifestLoader
from apiversioning.versioning import annotations
from apiversioning.versioning.context import VersioningContext


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def test_env() -> Dict[str, str]:
    """Test environment variables."""
    return {
        "APIVERSIONING_LOG_LEVEL": "debug",
        "APIVERSIONING_LOG_FORMAT": "text",
    }


@pytest.fixture(autouse=True)
def set_test_env(test_env: Dict[str, str]) -> Generator[None, None, None]:
    """Set test environment variables and start each test from fresh config."""
    original = {}
    for key, value in test_env.items():
        original[key] = os.environ.get(key)
        os.environ[key] = value
    reset_config()
    ManifestLoader.clear_cache()

    yield

    reset_config()
    ManifestLoader.clear_cache()
    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


# ============================================================================
# Graph Fixtures
# ============================================================================


def make_versions_enum(namespace: Namespace, *names: str, enum_name: str = "Versions") -> Enum:
    """Create a version enum with *names* as members, declared in *namespace*."""
    enum = Enum(enum_name, namespace=namespace)
    for name in names:
        enum.add_member(name)
    return enum


@pytest.fixture
def context() -> VersioningContext:
    """A fresh, isolated versioning context."""
    return VersioningContext()


@pytest.fixture
def contoso(context: VersioningContext):
    """Versioned namespace ``Contoso`` with axis [v1, v2, v3, v4, v5, v6]."""
    ns = Namespace("Contoso")
    versions = make_versions_enum(ns, "v1", "v2", "v3", "v4", "v5", "v6")
    annotations.versioned(context, ns, versions)
    return ns, versions


@pytest.fixture
def widget(contoso) -> Model:
    """Model ``Contoso.Widget`` with ``color`` and ``size`` properties."""
    ns, _ = contoso
    model = Model("Widget", namespace=ns)
    model.add_property("color")
    model.add_property("size", optional=True)
    return model
