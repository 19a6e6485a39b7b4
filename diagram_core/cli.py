#!/usr/bin/env python3
"""Diagram engine CLI - render, validate and analyze diagram JSON files."""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from .config import DEFAULT_HEIGHT, DEFAULT_WIDTH, configure_logging
from .models import RenderConfig
from .registry import DiagramEngineError, default_registry
from .validation import validation_summary

EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def _json_out(data, code=0):
    print(json.dumps(data, indent=2))
    sys.exit(code)


def _error_out(message, code=EXIT_UNREADABLE, **extra):
    _json_out({"status": "error", "error": message, **extra}, code)


def _load_diagram(file_path):
    """Read a diagram JSON file; exits with code 2 if it cannot be read."""
    path = Path(file_path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        _error_out(f"File not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        _error_out(f"Could not read {path}: {e}")
    except json.JSONDecodeError as e:
        _error_out(f"Invalid JSON in {path}: {e}")

    try:
        plugin, model = default_registry.resolve(payload)
    except DiagramEngineError as e:
        _error_out(str(e), errors=getattr(e, "errors", []))
    logger.debug(f"Loaded {plugin.type} diagram from {path}")
    return plugin, model


# ── Commands ─────────────────────────────────────────────────────────────────

def cmd_plugins(args):
    _json_out({
        "success": True,
        "plugins": [d.to_json_dict() for d in default_registry.metadata()],
    })


def cmd_schema(args):
    try:
        schema = default_registry.get_schema(args.type)
    except DiagramEngineError as e:
        _error_out(str(e))
    _json_out(schema)


def cmd_validate(args):
    plugin, model = _load_diagram(args.file)
    result = plugin.validate(model)
    _json_out({
        "success": True,
        "type": plugin.type,
        "summary": validation_summary(result),
        **result.to_json_dict(),
    }, 0 if result.is_valid else EXIT_INVALID)


def cmd_render(args):
    plugin, model = _load_diagram(args.file)
    try:
        config = RenderConfig(width=args.width, height=args.height)
    except ValidationError as e:
        _error_out(f"Invalid canvas size: {e.errors()[0]['msg']}")
    result = plugin.render(model, config)

    if args.out:
        Path(args.out).write_text(result.scene_markup, encoding="utf-8")
        logger.info(f"Wrote {args.out}")
        _json_out({
            "success": True,
            "file": args.out,
            "bounds": result.bounds.to_json_dict(),
            "metadata": result.metadata.to_json_dict(),
        })
    _json_out({"success": True, **result.to_json_dict()})


def cmd_analyze(args):
    plugin, model = _load_diagram(args.file)
    _json_out({"success": True, "analysis": plugin.analyze(model).to_json_dict()})


def cmd_optimize(args):
    plugin, model = _load_diagram(args.file)
    _json_out(plugin.optimize(model).to_json_dict())


def cmd_suggest(args):
    plugin, model = _load_diagram(args.file)
    _json_out({
        "success": True,
        "suggestions": [s.to_json_dict() for s in plugin.suggest(model)],
    })


# ── Main ─────────────────────────────────────────────────────────────────────

def build_parser():
    parser = argparse.ArgumentParser(prog="diagram-engine", description="Diagram engine CLI")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("plugins")

    p = sub.add_parser("schema")
    p.add_argument("type")

    p = sub.add_parser("validate")
    p.add_argument("file")

    p = sub.add_parser("render")
    p.add_argument("file")
    p.add_argument("--width", type=float, default=DEFAULT_WIDTH)
    p.add_argument("--height", type=float, default=DEFAULT_HEIGHT)
    p.add_argument("--out", default=None)

    for name in ("analyze", "optimize", "suggest"):
        p = sub.add_parser(name)
        p.add_argument("file")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    cmd_map = {
        "plugins": cmd_plugins,
        "schema": cmd_schema,
        "validate": cmd_validate,
        "render": cmd_render,
        "analyze": cmd_analyze,
        "optimize": cmd_optimize,
        "suggest": cmd_suggest,
    }
    cmd_map[args.command](args)


if __name__ == "__main__":
    main()
