from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .api import extract_file, translate, translate_sources
from .config import FencemapConfig, load_config
from .errors import FencemapError, TranslationError
from .registry import MapRegistry


def _read_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _by_source(payload: list[Any]) -> dict[str, Any] | None:
    # `eslint -f json` output: [{"filePath": ".../0.js", "messages": [...]}, ...]
    if payload and all(isinstance(x, dict) and "messages" in x for x in payload):
        return {Path(x.get("filePath", "")).name: x["messages"] for x in payload}
    return None


def _extract(args: argparse.Namespace, config: FencemapConfig) -> int:
    registry = MapRegistry()
    payload: dict[str, list[dict[str, str]]] = {}
    for f in args.files:
        identifier, sources = extract_file(f, registry, config=config)
        for failure in registry.failures(identifier):
            print(f"{failure.span.format(identifier)}: {failure.message}", file=sys.stderr)
        if args.json:
            payload[identifier] = [{"identifier": s.identifier, "text": s.text} for s in sources]
            continue
        for s in sources:
            print(f"--- {identifier} :: {s.identifier}")
            print(s.text)
    if args.json:
        print(json.dumps(payload, indent=2, sort_keys=True))
    return 0


def _translate(args: argparse.Namespace, config: FencemapConfig) -> int:
    registry = MapRegistry()
    identifier, _ = extract_file(args.file, registry, config=config)
    payload = _read_json(args.diagnostics)
    if isinstance(payload, dict):
        messages = translate_sources(payload, identifier, registry, config=config)
    elif isinstance(payload, list):
        keyed = _by_source(payload)
        if keyed is not None:
            messages = translate_sources(keyed, identifier, registry, config=config)
        else:
            messages = translate(payload, identifier, registry, config=config)
    else:
        raise TranslationError("diagnostics must be a JSON array or object")
    print(json.dumps(messages, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="fencemap",
        description="Extract fenced code from Markdown and map lint results back",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    ap.add_argument("--config", help="pyproject.toml holding a [tool.fencemap] table")
    sub = ap.add_subparsers(dest="command", required=True)

    ex = sub.add_parser("extract", help="Print the synthesized source of every fragment")
    ex.add_argument("files", nargs="+", help="Markdown files")
    ex.add_argument("--json", action="store_true", help="Print sources as JSON")

    tr = sub.add_parser("translate", help="Map diagnostics for a file's fragments back onto it")
    tr.add_argument("file", help="Markdown file the diagnostics were produced for")
    tr.add_argument(
        "--diagnostics",
        required=True,
        help="JSON: one message array per fragment, an object keyed by source, or eslint -f json output ('-' for stdin)",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config_path=Path(args.config)) if args.config else load_config()
        if args.command == "extract":
            return _extract(args, config)
        return _translate(args, config)
    except FencemapError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
