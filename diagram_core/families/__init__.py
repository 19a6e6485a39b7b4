"""
Built-in diagram families.

Each family package holds models, a layout engine, a validator, a
structural analyzer and the plugin record that composes them.
"""

from .mindmap import MindMapDiagramPlugin
from .network import NetworkDiagramPlugin
from .swimlane import SwimlaneDiagramPlugin

BUILTIN_PLUGINS = [
    MindMapDiagramPlugin,
    NetworkDiagramPlugin,
    SwimlaneDiagramPlugin,
]

__all__ = [
    "MindMapDiagramPlugin",
    "NetworkDiagramPlugin",
    "SwimlaneDiagramPlugin",
    "BUILTIN_PLUGINS",
]
