"""Dependency Injection Container."""

from pathlib import Path
from typing import Optional

from injector import Injector, Module, provider, singleton

from ..components.builtin import register_base_components
from ..components.registry import ComponentRegistry
from ..editor.locks import PageLocks
from ..editor.session import EditorSession
from ..monitoring import MetricsCollector
from ..plugins.manager import BuilderContext, PluginManager
from ..rendering.engine import RenderEngine
from ..storage.assets import AssetStore
from ..storage.base import PageStore
from ..storage.file_store import FilePageStore
from ..storage.http_store import HttpPageStore
from ..tree.builder import TreeModel
from .config import Settings, get_settings
from .events import BuilderEvents


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_events(self) -> BuilderEvents:
        return BuilderEvents()

    @singleton
    @provider
    def provide_metrics(self) -> MetricsCollector:
        """Provide a metrics collector with its own Prometheus registry."""
        return MetricsCollector()

    @singleton
    @provider
    def provide_registry(self, events: BuilderEvents) -> ComponentRegistry:
        """Provide component registry with the built-in types registered."""
        registry = ComponentRegistry(events)
        register_base_components(registry)
        return registry

    @singleton
    @provider
    def provide_tree_model(
        self, registry: ComponentRegistry, events: BuilderEvents, metrics: MetricsCollector
    ) -> TreeModel:
        return TreeModel(registry, events=events, metrics=metrics)

    @singleton
    @provider
    def provide_render_engine(self, registry: ComponentRegistry, metrics: MetricsCollector) -> RenderEngine:
        return RenderEngine(
            registry,
            lang=self.settings.html_lang,
            cache_enabled=self.settings.enable_render_cache,
            cache_size=self.settings.render_cache_size,
            metrics=metrics,
        )

    @singleton
    @provider
    def provide_page_store(self, registry: ComponentRegistry, metrics: MetricsCollector) -> PageStore:
        """Provide the page store selected by ``storage_backend``."""
        if self.settings.storage_backend == "http":
            return HttpPageStore(
                self.settings.api_url,
                timeout=self.settings.request_timeout,
                registry=registry,
                temp_prefix=self.settings.temp_page_prefix,
                metrics=metrics,
            )
        return FilePageStore(
            Path(self.settings.storage_dir),
            registry=registry,
            temp_prefix=self.settings.temp_page_prefix,
            metrics=metrics,
        )

    @singleton
    @provider
    def provide_asset_store(self, metrics: MetricsCollector) -> AssetStore:
        return AssetStore(
            self.settings.upload_dir,
            public_base_url=self.settings.public_base_url,
            max_size=self.settings.max_upload_size,
            metrics=metrics,
        )

    @singleton
    @provider
    def provide_locks(self) -> PageLocks:
        return PageLocks()

    @singleton
    @provider
    def provide_editor_session(
        self,
        registry: ComponentRegistry,
        tree: TreeModel,
        store: PageStore,
        renderer: RenderEngine,
        locks: PageLocks,
        events: BuilderEvents,
    ) -> EditorSession:
        return EditorSession(
            registry,
            tree,
            store,
            renderer,
            locks=locks,
            events=events,
            temp_prefix=self.settings.temp_page_prefix,
        )

    @singleton
    @provider
    def provide_plugin_manager(
        self,
        registry: ComponentRegistry,
        tree: TreeModel,
        events: BuilderEvents,
        session: EditorSession,
    ) -> PluginManager:
        """Provide plugin manager whose context sees the editor's open page."""
        context = BuilderContext(registry, tree, events, current_page=lambda: session.page)
        return PluginManager(context)


def create_container(settings: Optional[Settings] = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings or get_settings())])
