"""Transient edit state for a node's properties panel."""

from typing import Any, Callable, Dict, List, Optional

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from ..components.registry import ComponentRegistry
from ..components.types import EditorKind, PropertyFieldDefinition
from ..core.logging_config import get_logger
from ..core.validate import ValidationError, ValidationResult
from ..monitoring import MetricsCollector, metrics_collector
from ..tree.models import ComponentNode
from .properties import current_value, editable_fields_for, group_fields, set_value
from .validators import check_value

logger = get_logger(__name__)


class PropertyEditSession:
    """
    Holds in-progress values for one node.

    ``change`` runs on every keystroke and only touches the transient values
    and error messages. ``commit`` runs on blur/submit and writes a valid
    value back onto the node; invalid values never reach it.
    """

    def __init__(
        self,
        node: ComponentNode,
        registry: ComponentRegistry,
        on_commit: Optional[Callable[[ComponentNode], None]] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self.node = node
        self.registry = registry
        self.on_commit = on_commit
        self.metrics = metrics or metrics_collector
        self.values: Dict[str, Any] = dict(node.props)
        self.errors: Dict[str, str] = {}

    @property
    def fields(self) -> List[PropertyFieldDefinition]:
        return editable_fields_for(self.registry, self.node) or []

    @property
    def groups(self) -> Dict[str, List[PropertyFieldDefinition]]:
        return group_fields(self.fields)

    def field(self, path: str) -> Optional[PropertyFieldDefinition]:
        for field in self.fields:
            if field.path == path:
                return field
        return None

    def value(self, path: str) -> Any:
        """Current transient value at the path."""
        return current_value(self.values, path)

    def reset(self) -> None:
        """Drop transient state and resync from the node."""
        self.values = dict(self.node.props)
        self.errors = {}
    def _editor_for(self, path: str, editor: EditorKind | str | None) -> EditorKind | str:
        if editor is not None:
            return editor
        field = self.field(path)
        return field.editor if field else EditorKind.TEXT

    def _fail(self, path: str, error: ValidationResult, editor: str) -> Result[Any, ValidationResult]:
        self.errors[path] = error.message
        self.metrics.record_validation_failure(editor)
        return Failure(error)

    def _validate(self, path: str, value: Any, editor: EditorKind | str) -> Result[Any, ValidationResult]:
        result = check_value(path, value, editor)
        if not is_successful(result):
            return self._fail(path, result.failure(), getattr(editor, "value", str(editor)))
        self.errors[path] = ""
        return result

    def _write(self, props: Dict[str, Any], path: str, value: Any) -> Result[Dict[str, Any], ValidationResult]:
        """set_value as a Result; unsupported paths become field errors."""
        try:
            return Success(set_value(props, path, value))
        except ValidationError as e:
            return self._fail(path, ValidationResult(str(e), field=path, value=value), "path")

    def change(self, path: str, value: Any, editor: EditorKind | str | None = None) -> bool:
        """
        Record an intermediate value.

        Returns:
            Whether the value is currently valid
        """
        written = self._write(self.values, path, value)
        if not is_successful(written):
            return False

        self.values = written.unwrap()
        return is_successful(self._validate(path, value, self._editor_for(path, editor)))

    def commit(
        self, path: str, value: Any, editor: EditorKind | str | None = None
    ) -> Result[Dict[str, Any], ValidationResult]:
        """
        Validate and, if valid, write the value onto the node.

        Returns:
            Success with the node's new properties, or Failure with the field error
        """
        result = self._validate(path, value, self._editor_for(path, editor)).bind(
            lambda checked: self._write(self.node.props, path, checked)
        )
        if not is_successful(result):
            logger.info("commit_rejected", node=self.node.id, path=path)
            return result

        self.node.props = result.unwrap()
        self.values = set_value(self.values, path, value)
        logger.debug("property_committed", node=self.node.id, path=path)

        if self.on_commit:
            self.on_commit(self.node)
        return Success(self.node.props)
