"""Shared pytest fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _no_env_overrides(monkeypatch):
    """Keep VTPOOL_* variables of the developer's shell out of the tests."""
    import os

    for name in list(os.environ):
        if name.startswith("VTPOOL_"):
            monkeypatch.delenv(name)


@pytest.fixture
def basic_pool():
    """Working set 0 showing data mask 1000."""
    from tests.pool_test_helpers import basic_pool

    return basic_pool()


@pytest.fixture
def full_pool():
    """One object of every type."""
    from tests.pool_test_helpers import full_pool

    return full_pool()


@pytest.fixture
def project(basic_pool):
    """EditorProject around the basic pool."""
    from vtpool.document import EditorProject

    return EditorProject.from_pool(basic_pool)


@pytest.fixture
def button_project(basic_pool):
    """Basic pool plus button 6000, with the button selected."""
    from tests.pool_test_helpers import make_object
    from vtpool.document import EditorProject
    from vtpool.pool import ObjectType

    basic_pool.add(make_object(ObjectType.BUTTON, 6000, width=80, height=40))
    project = EditorProject.from_pool(basic_pool)
    project.select(6000)
    project.update_selected()
    return project
