"""
Plugin contract - the uniform render / validate / analyze facade.

A DiagramPlugin composes exactly one validator, one layout-backed
renderer and one structural analyzer for a single diagram family. The
registry resolves a diagram type tag to its plugin.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from loguru import logger
from pydantic import BaseModel, Field

from .models import (
    AIAnalysis,
    AISuggestion,
    Bounds,
    DiagramModel,
    PluginDescriptor,
    RenderConfig,
    rank_suggestions,
)
from .scene import SceneElement
from .validation import IssueSeverity, ValidationResult, error

DataT = TypeVar("DataT", bound=BaseModel)


class RenderMetadata(DiagramModel):
    """Bookkeeping attached to every render."""
    render_time: float  # milliseconds spent building the scene
    node_count: int
    edge_count: int
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


@dataclass
class RenderResult:
    """Scene tree plus its markup, canvas bounds and metadata."""
    scene: SceneElement
    scene_markup: str
    bounds: Bounds
    metadata: RenderMetadata

    def to_json_dict(self) -> dict:
        return {
            "sceneMarkup": self.scene_markup,
            "bounds": self.bounds.to_json_dict(),
            "metadata": self.metadata.to_json_dict(),
        }


class DiagramValidator(ABC, Generic[DataT]):
    """Structural/referential checks for one family."""

    @abstractmethod
    def validate(self, data: DataT) -> ValidationResult:
        ...


class DiagramRenderer(ABC, Generic[DataT]):
    """Turns layout geometry into a scene."""

    @abstractmethod
    def build_scene(self, data: DataT, config: RenderConfig) -> SceneElement:
        ...


class StructuralAnalyzer(ABC, Generic[DataT]):
    """Heuristic metrics and suggestions for one family."""

    @abstractmethod
    def analyze(self, data: DataT) -> AIAnalysis:
        ...

    @abstractmethod
    def optimize(self, data: DataT) -> DataT:
        ...

    def extra_suggestions(self, data: DataT) -> list[AISuggestion]:
        """Suggestions offered by suggest() on top of analyze()."""
        return []

    def suggest(self, data: DataT) -> list[AISuggestion]:
        suggestions = list(self.analyze(data).suggestions)
        suggestions.extend(self.extra_suggestions(data))
        return rank_suggestions(suggestions)


class DiagramPlugin(Generic[DataT]):
    """
    Uniform contract over one diagram family.

    Every method accepts either a parsed family model or a raw dict, and
    never mutates its input.
    """

    def __init__(
        self,
        descriptor: PluginDescriptor,
        data_model: type[DataT],
        validator: DiagramValidator[DataT],
        renderer: DiagramRenderer[DataT],
        analyzer: StructuralAnalyzer[DataT],
    ):
        self.descriptor = descriptor
        self.data_model = data_model
        self.validator = validator
        self.renderer = renderer
        self.analyzer = analyzer

    @property
    def type(self) -> str:
        return self.descriptor.type.value

    def coerce(self, data: Any) -> DataT:
        """Accept a model instance or a raw payload."""
        if isinstance(data, self.data_model):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True)
        return self.data_model.model_validate(data)

    # --- Rendering ---

    def render(self, data: Any, config: Optional[RenderConfig] = None) -> RenderResult:
        """
        Validate, lay out and build the scene.

        Validation findings are recorded in the metadata; rendering goes
        ahead regardless, since every layout engine tolerates dangling
        references. Hosts that must block on errors call validate() first.
        """
        config = config or RenderConfig()
        model = self.coerce(data)
        validation = self.validator.validate(model)

        started = time.perf_counter()
        scene = self.renderer.build_scene(model, config)
        markup = scene.to_markup()
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.debug(
            f"Rendered {self.type} diagram: {len(model.nodes)} nodes, "
            f"{len(model.edges)} edges in {elapsed_ms:.2f}ms"
        )

        return RenderResult(
            scene=scene,
            scene_markup=markup,
            bounds=self.get_bounds(model, config),
            metadata=RenderMetadata(
                render_time=elapsed_ms,
                node_count=len(model.nodes),
                edge_count=len(model.edges),
                warnings=validation.messages(IssueSeverity.WARNING),
                errors=validation.messages(IssueSeverity.ERROR),
            ),
        )

    def update(self, scene: SceneElement, data: Any, config: Optional[RenderConfig] = None) -> None:
        """Replace a previously rendered scene's content in place."""
        fresh = self.render(data, config).scene
        scene.tag = fresh.tag
        scene.attrs = dict(fresh.attrs)
        scene.children[:] = fresh.children
        scene.text = fresh.text

    def destroy(self, scene: SceneElement) -> None:
        """Release everything a rendered scene holds."""
        scene.children.clear()
        scene.text = None

    def get_bounds(self, data: Any, config: Optional[RenderConfig] = None) -> Bounds:
        config = config or RenderConfig()
        return Bounds(x=0, y=0, width=config.width, height=config.height)

    # --- Validation ---

    def validate(self, data: Any, type_tag: Optional[str] = None) -> ValidationResult:
        result = self.validator.validate(self.coerce(data))
        if type_tag is not None and type_tag != self.type:
            mismatch = error(f'Diagram type "{type_tag}" is not handled by the {self.type} plugin')
            result = ValidationResult(
                is_valid=False,
                errors=[mismatch, *result.errors],
                warnings=result.warnings,
            )
        if not result.is_valid:
            logger.debug(f"{self.type} diagram failed validation with {len(result.errors)} error(s)")
        return result

    def get_schema(self, type_tag: Optional[str] = None) -> dict:
        """JSON schema of the family's data shape (documentation only)."""
        return self.data_model.model_json_schema(by_alias=True)

    # --- Analysis ---

    def analyze(self, data: Any) -> AIAnalysis:
        return self.analyzer.analyze(self.coerce(data))

    def optimize(self, data: Any) -> DataT:
        return self.analyzer.optimize(self.coerce(data))

    def suggest(self, data: Any) -> list[AISuggestion]:
        return self.analyzer.suggest(self.coerce(data))
