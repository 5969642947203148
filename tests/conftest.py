"""Pytest configuration and fixtures."""

import os

import pytest

from pagebuilder.components import ComponentRegistry, register_base_components
from pagebuilder.core.config import Settings
from pagebuilder.core.events import BuilderEvents
from pagebuilder.editor import EditorSession, PageLocks
from pagebuilder.monitoring import MetricsCollector
from pagebuilder.rendering import RenderEngine
from pagebuilder.storage import FilePageStore
from pagebuilder.tree import TreeModel


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["PAGEBUILDER_LOG_LEVEL"] = "DEBUG"
    os.environ["PAGEBUILDER_ENABLE_RENDER_CACHE"] = "false"


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings(tmp_path):
    """Test settings writing under a temporary directory."""
    return Settings(
        storage_dir=str(tmp_path / "pages"),
        upload_dir=str(tmp_path / "uploads"),
        enable_render_cache=False,
    )


@pytest.fixture
def events():
    return BuilderEvents()


@pytest.fixture
def metrics():
    """Metrics collector with a private Prometheus registry."""
    return MetricsCollector()


@pytest.fixture
def registry(events):
    """Registry with the built-in component types."""
    registry = ComponentRegistry(events)
    register_base_components(registry)
    return registry


@pytest.fixture
def tree(registry, events, metrics):
    return TreeModel(registry, events=events, metrics=metrics)


@pytest.fixture
def engine(registry, metrics):
    """Render engine without caching."""
    return RenderEngine(registry, cache_enabled=False, metrics=metrics)


# ============================================================================
# Page Fixtures
# ============================================================================

@pytest.fixture
def page(tree):
    """Unsaved page with a container holding a text and an image."""
    page = tree.new_page("Test Page")
    container = tree.create_node("container")
    container.children.append(tree.create_node("text", {"content": "Hello"}))
    container.children.append(tree.create_node("image"))
    page.root.children.append(container)
    return page


@pytest.fixture
def file_store(tmp_path, registry, metrics):
    return FilePageStore(tmp_path / "pages", registry=registry, metrics=metrics)


@pytest.fixture
def editor(registry, tree, file_store, engine, events):
    """Editor session backed by a file store."""
    return EditorSession(registry, tree, file_store, engine, locks=PageLocks(), events=events)
