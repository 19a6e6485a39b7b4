#!/usr/bin/env python3
"""
Diagram Engine MCP Server

Provides MCP tools for AI agents to lay out, validate and critique
mind map, network and swimlane diagrams. Every tool forwards to the
diagram engine HTTP API, which must be running.
"""

import json
import os
from typing import Optional

import httpx
from loguru import logger
from mcp.server.fastmcp import FastMCP

# Backend API URL
API_BASE = os.environ.get("DIAGRAM_ENGINE_API_BASE", "http://127.0.0.1:8765/api")

# Create MCP server
mcp = FastMCP("diagram-engine")


class DiagramAPIError(Exception):
    """The backend rejected a request."""


# --- HTTP Client Helper ---

def api_request(method: str, endpoint: str, **kwargs) -> dict:
    """Make a request to the diagram engine backend."""
    url = f"{API_BASE}{endpoint}"
    with httpx.Client(timeout=30.0) as client:
        if method == "GET":
            response = client.get(url, params=kwargs.get("params"))
        elif method == "POST":
            response = client.post(url, json=kwargs.get("json"), params=kwargs.get("params"))
        else:
            raise ValueError(f"Unknown method: {method}")

        if response.status_code >= 400:
            try:
                error = response.json().get("detail", "Unknown error")
            except ValueError:
                error = response.text
            logger.warning(f"{method} {endpoint} failed with {response.status_code}: {error}")
            raise DiagramAPIError(f"API error ({response.status_code}): {error}")

        return response.json()


def _diagram_body(diagram_json: str, width: Optional[float] = None, height: Optional[float] = None) -> dict:
    """Request body from a diagram JSON string and optional canvas size."""
    try:
        diagram = json.loads(diagram_json)
    except json.JSONDecodeError as e:
        raise DiagramAPIError(f"diagram_json is not valid JSON: {e}") from e

    body = {"diagram": diagram}
    config = {k: v for k, v in (("width", width), ("height", height)) if v is not None}
    if config:
        body["config"] = config
    return body


# ============================================================================
# DISCOVERY
# ============================================================================

@mcp.tool()
def diagram_list_plugins() -> str:
    """
    List the diagram types the engine supports.

    Returns each plugin's id, name, version, type tag and export formats.
    Use the type tag as the "type" field of diagram_json in other tools.
    """
    result = api_request("GET", "/plugins")
    return json.dumps(result, indent=2)


# ============================================================================
# VALIDATION & ANALYSIS
# ============================================================================

@mcp.tool()
def diagram_validate(diagram_json: str) -> str:
    """
    Check a diagram for structural problems.

    Args:
        diagram_json: The diagram as a JSON object string with a "type" field
            ("mindmap", "network" or "swimlane")

    Returns isValid plus lists of errors (block rendering) and warnings.
    """
    result = api_request("POST", "/validate", json=_diagram_body(diagram_json))
    return json.dumps(result, indent=2)


@mcp.tool()
def diagram_analyze(diagram_json: str) -> str:
    """
    Score a diagram's complexity, readability and completeness (0-1).

    Args:
        diagram_json: The diagram as a JSON object string with a "type" field

    Returns the scores with structural suggestions and optimizations.
    """
    result = api_request("POST", "/analyze", json=_diagram_body(diagram_json))
    return json.dumps(result, indent=2)


@mcp.tool()
def diagram_suggest(diagram_json: str) -> str:
    """
    Get improvement suggestions, highest priority first.

    Args:
        diagram_json: The diagram as a JSON object string with a "type" field
    """
    result = api_request("POST", "/suggest", json=_diagram_body(diagram_json))
    return json.dumps(result, indent=2)


@mcp.tool()
def diagram_optimize(diagram_json: str) -> str:
    """
    Return an optimized copy of a diagram.

    Mind maps get layout settings, networks a layout choice, swimlanes
    lane-local node positions. The input is never changed.

    Args:
        diagram_json: The diagram as a JSON object string with a "type" field
    """
    result = api_request("POST", "/optimize", json=_diagram_body(diagram_json))
    return json.dumps(result, indent=2)


# ============================================================================
# RENDERING
# ============================================================================

@mcp.tool()
def diagram_render(
    diagram_json: str,
    width: Optional[float] = None,
    height: Optional[float] = None,
    strict: bool = False,
) -> str:
    """
    Lay out a diagram and render it as SVG markup.

    Args:
        diagram_json: The diagram as a JSON object string with a "type" field
        width: Canvas width (engine default if omitted)
        height: Canvas height (engine default if omitted)
        strict: Refuse to render a diagram that fails validation

    Returns sceneMarkup (SVG), bounds and render metadata including any
    validation warnings/errors.
    """
    result = api_request(
        "POST", "/render",
        json=_diagram_body(diagram_json, width, height),
        params={"strict": str(strict).lower()},
    )
    return json.dumps(result, indent=2)


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    mcp.run()
