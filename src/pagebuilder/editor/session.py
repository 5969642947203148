"""
Editor Session
The page open in the editor, its selection and unsaved-changes state.

Every structural edit and property commit runs under the page's lock.
Rendering and saving work on deep-copied snapshots taken under that lock.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from returns.result import Failure, Result

from ..components.registry import ComponentRegistry
from ..components.types import EditorKind
from ..core.events import BuilderEvents
from ..core.logging_config import LogContext, get_logger
from ..core.validate import ValidationResult
from ..editing.session import PropertyEditSession
from ..rendering.context import RenderOptions
from ..rendering.engine import RenderEngine
from ..storage.base import PageStore, PersistenceError
from ..tree.builder import TreeModel, find_node, find_parent
from ..tree.models import ComponentNode, Page
from ..tree.operations import add_child, delete_child, duplicate_child, move_down, move_up
from .locks import PageLocks

logger = get_logger(__name__)

PREVIEW_OPTIONS = RenderOptions(include_editor_metadata=True, add_scripts=False)


class EditorSession:
    """Single-user editing session over one page at a time"""

    def __init__(
        self,
        registry: ComponentRegistry,
        tree: TreeModel,
        store: PageStore,
        renderer: RenderEngine,
        locks: Optional[PageLocks] = None,
        events: Optional[BuilderEvents] = None,
        temp_prefix: str = "page_",
        owner_id: Optional[str] = None,
    ) -> None:
        self.registry = registry
        self.tree = tree
        self.store = store
        self.renderer = renderer
        self.locks = locks or PageLocks()
        self.events = events or BuilderEvents()
        self.temp_prefix = temp_prefix
        self.owner_id = owner_id
        self.metrics = tree.metrics

        self.page: Optional[Page] = None
        self.selected_id: Optional[str] = None
        self.has_unsaved_changes = False

    # ------------------------------------------------------------------
    # Page lifecycle
    # ------------------------------------------------------------------

    def require_page(self) -> Page:
        """
        The open page.

        Raises:
            LookupError: If no page is open
        """
        if self.page is None:
            raise LookupError("No page is open")
        return self.page

    def _open(self, page: Page) -> Page:
        self.page = page
        self.selected_id = None
        self.has_unsaved_changes = False
        self.events.page_changed.publish(page)
        return page

    @contextmanager
    def _editing(self, page: Page, **context: Any) -> Iterator[None]:
        """Hold the page lock with the page and edit target bound to the log context"""
        with LogContext(page_id=page.id, **context), self.locks.hold(page.id):
            yield

    def new_page(self, title: str = "New Page") -> Page:
        """Open a fresh unsaved draft"""
        return self._open(self.tree.new_page(title, temp_prefix=self.temp_prefix, owner_id=self.owner_id))

    def load_page(self, page_id: str) -> Page:
        """
        Open a stored page.

        Raises:
            PersistenceError: If the store cannot provide the page; the
                currently open page stays open
        """
        with LogContext(page_id=page_id):
            try:
                page = self.store.load_page(page_id)
            except PersistenceError as e:
                logger.error("load_failed", error=str(e))
                raise
            logger.info("page_opened", title=page.title)
        return self._open(page)

    def rename(self, title: str) -> None:
        page = self.require_page()
        with self._editing(page):
            page.rename(title)
            self.has_unsaved_changes = True
        self.events.page_changed.publish(page)

    def save(self) -> Page:
        """
        Persist the open page.

        On success the session adopts the stored page, including the durable
        id assigned to a previously unsaved page. On failure the in-memory
        page and the unsaved flag are left exactly as they were.

        Raises:
            PersistenceError: If the store fails
        """
        page = self.require_page()
        return self._persist(page, publish=False)

    def publish(self) -> Page:
        """Mark the page published and persist it"""
        page = self.require_page()
        return self._persist(page, publish=True)

    def _persist(self, page: Page, publish: bool) -> Page:
        operation = "publish" if publish else "save"
        with LogContext(page_id=page.id), self.locks.hold(page.id):
            snapshot = page.snapshot()
            if publish:
                snapshot.publish()

            try:
                stored = self.store.save_page(snapshot)
            except PersistenceError as e:
                logger.error(f"{operation}_failed", error=str(e))
                raise

            self.page = stored
            self.has_unsaved_changes = False
            logger.info(f"{operation}_succeeded", stored_id=stored.id)

        if stored.id != page.id:
            self.locks.discard(page.id)
        self.events.page_changed.publish(stored)
        return stored

    # ------------------------------------------------------------------
    # Selection and structure
    # ------------------------------------------------------------------

    def select(self, node_id: Optional[str]) -> Optional[ComponentNode]:
        """Select a node by id; unknown ids clear the selection"""
        page = self.require_page()
        node = find_node(page.root, node_id) if node_id else None
        self.selected_id = node.id if node else None
        return node

    @property
    def selected(self) -> Optional[ComponentNode]:
        if self.page is None or self.selected_id is None:
            return None
        return find_node(self.page.root, self.selected_id)

    def _changed(self, parent: ComponentNode) -> None:
        self.has_unsaved_changes = True
        self.events.tree_changed.publish(parent)

    def add_component(
        self,
        parent_id: Optional[str],
        type_name: str,
        override_props: Optional[dict[str, Any]] = None,
    ) -> Optional[ComponentNode]:
        """
        Create a node and append it to a parent (the root when parent_id is None).

        Returns:
            The added node, or None when the parent or type is unknown or the
            parent does not accept children
        """
        page = self.require_page()
        with self._editing(page, parent_id=parent_id, component_type=type_name):
            parent = find_node(page.root, parent_id) if parent_id else page.root
            if parent is None:
                return None

            node = self.tree.create_node(type_name, override_props)
            if node is None:
                return None

            if not add_child(self.registry, parent, node, on_change=self._changed, metrics=self.metrics):
                return None

        self.selected_id = node.id
        return node

    def delete(self, node_id: str) -> bool:
        """Delete a node; the root cannot be deleted"""
        page = self.require_page()
        with self._editing(page, node_id=node_id):
            parent = find_parent(page.root, node_id)
            target = find_node(page.root, node_id) if parent else None
            removed_ids = {n.id for n in target.walk()} if target else set()
            deleted = delete_child(parent, node_id, on_change=self._changed, metrics=self.metrics)

        if deleted and self.selected_id in removed_ids:
            self.selected_id = None
        return deleted

    def duplicate(self, node_id: str) -> Optional[ComponentNode]:
        """Duplicate a node next to itself and select the copy"""
        page = self.require_page()
        with self._editing(page, node_id=node_id):
            parent = find_parent(page.root, node_id)
            clone = duplicate_child(
                parent,
                node_id,
                on_change=self._changed,
                metrics=self.metrics,
                id_factory=self.tree.id_factory,
            )

        if clone is not None:
            self.selected_id = clone.id
        return clone

    def move_up(self, node_id: str) -> bool:
        page = self.require_page()
        with self._editing(page, node_id=node_id):
            return move_up(
                find_parent(page.root, node_id), node_id, on_change=self._changed, metrics=self.metrics
            )

    def move_down(self, node_id: str) -> bool:
        page = self.require_page()
        with self._editing(page, node_id=node_id):
            return move_down(
                find_parent(page.root, node_id), node_id, on_change=self._changed, metrics=self.metrics
            )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def edit_session(self, node_id: str) -> Optional[PropertyEditSession]:
        """Properties-panel session for a node, committing through this editor"""
        page = self.require_page()
        node = find_node(page.root, node_id)
        if node is None:
            return None
        return PropertyEditSession(node, self.registry, on_commit=self._changed, metrics=self.metrics)

    def update_property(
        self,
        node_id: str,
        path: str,
        value: Any,
        editor: EditorKind | str | None = None,
    ) -> Result[dict[str, Any], ValidationResult]:
        """
        Validate and commit one property value.

        Returns:
            Success with the node's new properties, or Failure when the node
            is unknown or the value is invalid
        """
        page = self.require_page()
        with self._editing(page, node_id=node_id, path=path):
            session = self.edit_session(node_id)
            if session is None:
                return Failure(ValidationResult(message="Component not found", field=path, value=node_id))
            return session.commit(path, value, editor)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def snapshot(self) -> Page:
        """Deep copy of the open page, taken under its lock"""
        page = self.require_page()
        with self.locks.hold(page.id):
            return page.snapshot()

    def render(self, options: Optional[RenderOptions] = None) -> str:
        return self.renderer.render_page(self.snapshot(), options)

    def preview(self) -> str:
        """Render with editor metadata for the live preview"""
        return self.render(PREVIEW_OPTIONS)
