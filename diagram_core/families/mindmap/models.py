"""Mind map data models: nodes linked to their parent, one declared root."""

from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from ...models import BaseEdge, BaseNode, DiagramMetadata, DiagramModel


class MindMapAlgorithm(str, Enum):
    TREE = "tree"
    FORCE = "force"
    CIRCULAR = "circular"


class MindMapDirection(str, Enum):
    CENTER = "center"
    RADIAL = "radial"


class MindMapLayout(DiagramModel):
    """Layout hints; depth_limit turns on the depth warning."""
    algorithm: MindMapAlgorithm = MindMapAlgorithm.TREE
    direction: MindMapDirection = MindMapDirection.RADIAL
    spacing: float = 200
    depth_limit: Optional[int] = Field(default=None, ge=1)


class MindMapNode(BaseNode):
    """A mind map node; `parent` is absent on top-level nodes."""
    parent: Optional[str] = None


class MindMapEdge(BaseEdge):
    pass


class MindMapData(DiagramModel):
    """A radial hierarchy rooted at `root_node`."""
    type: Literal["mindmap"] = "mindmap"
    version: str = "1.0"
    metadata: DiagramMetadata = Field(default_factory=DiagramMetadata)
    root_node: str = ""
    nodes: list[MindMapNode] = Field(default_factory=list)
    edges: list[MindMapEdge] = Field(default_factory=list)
    layout: Optional[MindMapLayout] = None

    def get_node(self, node_id: str) -> Optional[MindMapNode]:
        """Get a node by ID (first match wins on duplicate ids)."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def children_index(self) -> dict[str, list[str]]:
        """parent id -> unique child ids, in diagram order."""
        index: dict[str, list[str]] = {}
        seen: set[tuple[str, str]] = set()
        for node in self.nodes:
            if node.parent and (node.parent, node.id) not in seen:
                seen.add((node.parent, node.id))
                index.setdefault(node.parent, []).append(node.id)
        return index
