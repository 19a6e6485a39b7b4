"""Network data models: typed nodes with canvas positions, typed links."""

from enum import Enum
from typing import Literal, Optional

from pydantic import Field

from ...models import BaseEdge, BaseNode, DiagramMetadata, DiagramModel, Position, Size

DEFAULT_NODE_SIZE = 40


class NetworkNodeType(str, Enum):
    SERVER = "server"
    CLIENT = "client"
    ROUTER = "router"
    SWITCH = "switch"
    DATABASE = "database"
    USER = "user"
    CUSTOM = "custom"


class NetworkEdgeType(str, Enum):
    WIRED = "wired"
    WIRELESS = "wireless"
    LOGICAL = "logical"
    PHYSICAL = "physical"


class NetworkLayout(str, Enum):
    FORCE = "force"
    HIERARCHICAL = "hierarchical"
    CIRCULAR = "circular"
    GRID = "grid"


class NetworkNode(BaseNode):
    """A network entity; a (0, 0) position means "not placed yet"."""
    type: NetworkNodeType = NetworkNodeType.CUSTOM
    position: Position = Field(default_factory=Position)
    size: Size = Field(default_factory=lambda: Size(width=DEFAULT_NODE_SIZE, height=DEFAULT_NODE_SIZE))

    @property
    def extent(self) -> float:
        """Drawn size of the node's shape."""
        return self.size.width or DEFAULT_NODE_SIZE


class NetworkEdge(BaseEdge):
    type: NetworkEdgeType = NetworkEdgeType.WIRED


class NetworkData(DiagramModel):
    """
    An entity/relationship network.

    `layout` is optional; an unset layout is laid out as FORCE.
    """
    type: Literal["network"] = "network"
    version: str = "1.0"
    metadata: DiagramMetadata = Field(default_factory=DiagramMetadata)
    nodes: list[NetworkNode] = Field(default_factory=list)
    edges: list[NetworkEdge] = Field(default_factory=list)
    layout: Optional[NetworkLayout] = None

    @property
    def effective_layout(self) -> NetworkLayout:
        return self.layout or NetworkLayout.FORCE

    def get_node(self, node_id: str) -> Optional[NetworkNode]:
        """Get a node by ID (first match wins on duplicate ids)."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]
