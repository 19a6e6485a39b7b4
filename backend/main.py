"""
Diagram Engine Backend - FastAPI Application

Exposes the plugin registry over HTTP:
- Plugin discovery and per-type JSON schemas
- Render, validate, analyze, optimize and suggest for any registered type
- CORS configuration for local frontend development

Unknown diagram types map to 404, payloads that do not parse to 422.
"""
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from diagram_core import __version__
from diagram_core.config import API_HOST, API_PORT, configure_logging
from diagram_core.registry import DiagramParseError, PluginNotFoundError, default_registry

from .models import DiagramRequest, ErrorResponse

registry = default_registry


# --- FastAPI App ---

app = FastAPI(
    title="Diagram Engine API",
    description="Layout, validation and analysis for mind map, network and swimlane diagrams",
    version=__version__,
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PluginNotFoundError)
async def plugin_not_found_handler(request: Request, exc: PluginNotFoundError):
    logger.info(f"{request.method} {request.url.path}: unknown diagram type {exc.diagram_type!r}")
    return JSONResponse(
        status_code=404,
        content=jsonable_encoder(ErrorResponse(detail=str(exc))),
    )


@app.exception_handler(DiagramParseError)
async def parse_error_handler(request: Request, exc: DiagramParseError):
    logger.info(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder(ErrorResponse(detail=str(exc), errors=exc.errors)),
    )


# --- Health Check ---

@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "plugins": len(registry.all())}


# --- Plugins ---

@app.get("/api/plugins")
async def list_plugins():
    """List registered diagram plugins."""
    return {
        "success": True,
        "plugins": [descriptor.to_json_dict() for descriptor in registry.metadata()],
    }


@app.get("/api/plugins/{diagram_type}/schema")
async def get_schema(diagram_type: str):
    """JSON schema of a diagram type's data."""
    return registry.get_schema(diagram_type)


# --- Diagram Operations ---

@app.post("/api/render")
async def render_diagram(
    request: DiagramRequest,
    strict: bool = Query(default=False),
):
    """Render a diagram; with strict=true an invalid diagram is rejected."""
    plugin, model = registry.resolve(request.diagram)

    if strict:
        validation = plugin.validate(model)
        if not validation.is_valid:
            raise HTTPException(
                status_code=422,
                detail={
                    "message": "Diagram failed validation",
                    "errors": [issue.to_json_dict() for issue in validation.errors],
                },
            )

    result = plugin.render(model, request.config)
    return {"success": True, **result.to_json_dict()}


@app.post("/api/validate")
async def validate_diagram(request: DiagramRequest):
    """Validate a diagram's structure."""
    plugin, model = registry.resolve(request.diagram)
    return {"success": True, **plugin.validate(model).to_json_dict()}


@app.post("/api/analyze")
async def analyze_diagram(request: DiagramRequest):
    """Quality metrics and structural suggestions."""
    plugin, model = registry.resolve(request.diagram)
    return {"success": True, "analysis": plugin.analyze(model).to_json_dict()}


@app.post("/api/optimize")
async def optimize_diagram(request: DiagramRequest):
    """Return an optimized copy of the diagram."""
    plugin, model = registry.resolve(request.diagram)
    return {"success": True, "diagram": plugin.optimize(model).to_json_dict()}


@app.post("/api/suggest")
async def suggest_improvements(request: DiagramRequest):
    """Ranked improvement suggestions."""
    plugin, model = registry.resolve(request.diagram)
    return {
        "success": True,
        "suggestions": [s.to_json_dict() for s in plugin.suggest(model)],
    }


@app.post("/api/bounds")
async def diagram_bounds(request: DiagramRequest):
    """Canvas bounds the diagram renders into."""
    plugin, model = registry.resolve(request.diagram)
    return {"success": True, "bounds": plugin.get_bounds(model, request.config).to_json_dict()}


# --- Run with uvicorn ---

def run(host: Optional[str] = None, port: Optional[int] = None):
    import uvicorn

    configure_logging()
    logger.info(f"Starting diagram engine API on {host or API_HOST}:{port or API_PORT}")
    uvicorn.run(app, host=host or API_HOST, port=port or API_PORT)


if __name__ == "__main__":
    run()
