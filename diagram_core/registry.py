"""
Plugin registry - resolves a diagram type tag to its plugin.

Also owns the tagged-union parsing of raw payloads: the `type` field
selects the family model, and anything that does not match raises
DiagramParseError instead of being cast.
"""

from typing import Annotated, Any, Optional, Union

from loguru import logger
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .families import BUILTIN_PLUGINS
from .families.mindmap.models import MindMapData
from .families.network.models import NetworkData
from .families.swimlane.models import SwimlaneData
from .models import AIAnalysis, AISuggestion, Bounds, ExportFormat, PluginDescriptor, RenderConfig
from .plugin import DiagramPlugin, RenderResult
from .validation import ValidationResult

DiagramData = Annotated[
    Union[MindMapData, NetworkData, SwimlaneData],
    Field(discriminator="type"),
]

_diagram_adapter: TypeAdapter = TypeAdapter(DiagramData)


class DiagramEngineError(Exception):
    """Base class for engine errors raised to callers."""


class PluginNotFoundError(DiagramEngineError):
    """No plugin is registered for the requested diagram type."""

    def __init__(self, diagram_type: str):
        self.diagram_type = diagram_type
        super().__init__(f'No plugin registered for diagram type "{diagram_type}"')


class DiagramParseError(DiagramEngineError):
    """A payload does not match any diagram family's shape."""

    def __init__(self, message: str, errors: Optional[list] = None):
        self.errors = errors or []
        super().__init__(message)

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "DiagramParseError":
        return cls(
            f"Invalid diagram payload: {exc.error_count()} error(s)",
            errors=exc.errors(include_url=False, include_context=False),
        )


def parse_diagram(payload: Any):
    """Parse a raw payload into the family model selected by its `type`."""
    if isinstance(payload, (MindMapData, NetworkData, SwimlaneData)):
        return payload
    try:
        return _diagram_adapter.validate_python(payload)
    except ValidationError as exc:
        raise DiagramParseError.from_validation_error(exc) from exc


class PluginRegistry:
    """
    Type tag -> plugin table.

    Populated once at startup; read-only afterwards. Dispatch methods
    accept a parsed family model or a raw dict carrying a `type` tag.
    """

    def __init__(self, plugins: Optional[list[DiagramPlugin]] = None):
        self._plugins: dict[str, DiagramPlugin] = {}
        for plugin in plugins or []:
            self.register(plugin)

    def register(self, plugin: DiagramPlugin) -> bool:
        """Add a plugin; returns False (and warns) if its id or type is taken."""
        if plugin.type in self._plugins or self.get_by_id(plugin.descriptor.id) is not None:
            logger.warning(
                f"Plugin {plugin.descriptor.id} ({plugin.type}) is already registered, ignoring"
            )
            return False
        self._plugins[plugin.type] = plugin
        logger.debug(f"Registered diagram plugin {plugin.descriptor.id} v{plugin.descriptor.version}")
        return True

    def unregister(self, diagram_type: str) -> bool:
        plugin = self._plugins.pop(diagram_type, None)
        if plugin is None:
            return False
        logger.debug(f"Unregistered diagram plugin {plugin.descriptor.id}")
        return True

    def get(self, diagram_type: str) -> DiagramPlugin:
        plugin = self._plugins.get(diagram_type)
        if plugin is None:
            raise PluginNotFoundError(diagram_type)
        return plugin

    def get_by_id(self, plugin_id: str) -> Optional[DiagramPlugin]:
        for plugin in self._plugins.values():
            if plugin.descriptor.id == plugin_id:
                return plugin
        return None

    def all(self) -> list[DiagramPlugin]:
        return list(self._plugins.values())

    def supports(self, diagram_type: str) -> bool:
        return diagram_type in self._plugins

    def supported_formats(self, diagram_type: str) -> list[ExportFormat]:
        return list(self.get(diagram_type).descriptor.supported_formats)

    def metadata(self) -> list[PluginDescriptor]:
        return [plugin.descriptor for plugin in self._plugins.values()]

    # --- Dispatch ---

    def resolve(self, data: Any) -> tuple[DiagramPlugin, BaseModel]:
        """Find the plugin for `data` and parse it into that plugin's model."""
        if isinstance(data, BaseModel):
            diagram_type = getattr(data, "type", None)
        elif isinstance(data, dict):
            diagram_type = data.get("type")
        else:
            raise DiagramParseError(f"Expected a diagram object, got {type(data).__name__}")

        if not diagram_type:
            raise DiagramParseError('Diagram payload has no "type" field')

        plugin = self.get(str(diagram_type))
        try:
            return plugin, plugin.coerce(data)
        except ValidationError as exc:
            raise DiagramParseError.from_validation_error(exc) from exc

    def render(self, data: Any, config: Optional[RenderConfig] = None) -> RenderResult:
        plugin, model = self.resolve(data)
        return plugin.render(model, config)

    def validate(self, data: Any) -> ValidationResult:
        plugin, model = self.resolve(data)
        return plugin.validate(model)

    def analyze(self, data: Any) -> AIAnalysis:
        plugin, model = self.resolve(data)
        return plugin.analyze(model)

    def optimize(self, data: Any) -> BaseModel:
        plugin, model = self.resolve(data)
        return plugin.optimize(model)

    def suggest(self, data: Any) -> list[AISuggestion]:
        plugin, model = self.resolve(data)
        return plugin.suggest(model)

    def get_bounds(self, data: Any, config: Optional[RenderConfig] = None) -> Bounds:
        plugin, model = self.resolve(data)
        return plugin.get_bounds(model, config)

    def get_schema(self, diagram_type: str) -> dict:
        return self.get(diagram_type).get_schema(diagram_type)


default_registry = PluginRegistry(BUILTIN_PLUGINS)
