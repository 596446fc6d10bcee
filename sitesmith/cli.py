"""Command line entry point: run the API server or generate a site once."""

from __future__ import annotations

import argparse
import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .config import get_settings
from .exceptions import ConfigError, GatewayError
from .log import setup_logging
from .schemas.generation import CodeBundle, GenerationRequest
from .utils.html import extract_body, wrap_document

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"
STYLES_FILE = "styles.css"
SCRIPT_FILE = "script.js"


def _image_data_uri(path: Path) -> str:
    mime, _ = mimetypes.guess_type(path.name)
    if not mime or not mime.startswith("image/"):
        raise SystemExit(f"Not an image file: {path}")
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def read_bundle(directory: Path) -> CodeBundle:
    """Load a previously generated site from ``directory``."""
    index = directory / INDEX_FILE
    if not index.is_file():
        raise SystemExit(f"File not found: {index}")
    styles = directory / STYLES_FILE
    script = directory / SCRIPT_FILE
    return CodeBundle(
        html=extract_body(index.read_text(encoding="utf-8")),
        css=styles.read_text(encoding="utf-8") if styles.is_file() else "",
        js=script.read_text(encoding="utf-8") if script.is_file() else "",
    )


def write_bundle(bundle: CodeBundle, directory: Path, *, title: str = "Generated site") -> list[Path]:
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for name, content in (
        (INDEX_FILE, wrap_document(bundle.html, title=title, stylesheet=STYLES_FILE, script=SCRIPT_FILE)),
        (STYLES_FILE, bundle.css),
        (SCRIPT_FILE, bundle.js),
    ):
        target = directory / name
        target.write_text(content, encoding="utf-8")
        written.append(target)
    return written


async def _generate(request: GenerationRequest) -> CodeBundle:
    from .generation import GenerationPipeline
    from .llm.gateway import GatewayClient

    settings = get_settings()
    async with GatewayClient.from_settings(settings) as gateway:
        pipeline = GenerationPipeline(gateway, gateway, settings)
        return await pipeline.run(request)


def _cmd_generate(args: argparse.Namespace) -> int:
    out_dir = Path(args.out)
    existing: Optional[CodeBundle] = None
    if args.revise:
        existing = read_bundle(out_dir)
    reference = _image_data_uri(Path(args.image)) if args.image else None

    try:
        request = GenerationRequest(prompt=args.prompt, existing_code=existing, reference_image=reference)
    except ValidationError as exc:
        print(f"Error: {exc.errors()[0].get('msg', 'invalid request')}")
        return 2

    try:
        bundle = asyncio.run(_generate(request))
    except (GatewayError, ConfigError) as exc:
        logger.error("Generation failed: %s", exc.with_trace())
        print(f"Error: {exc.message}")
        return 1

    for path in write_bundle(bundle, out_dir, title=args.title):
        print(f"Wrote {path}")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("sitesmith.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitesmith",
        description="Generate runnable websites from natural-language descriptions.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(handler=_cmd_serve)

    generate = subparsers.add_parser("generate", help="Generate (or revise) a site into a directory")
    generate.add_argument("prompt", help="Description of the site, or the change to make")
    generate.add_argument("--out", "-o", default="site", help="Output directory (default: ./site)")
    generate.add_argument(
        "--revise",
        action="store_true",
        help="Revise the site already in --out instead of starting from scratch",
    )
    generate.add_argument("--image", "-i", help="Reference image used as design inspiration")
    generate.add_argument("--title", default="Generated site", help="Page title for index.html")
    generate.set_defaults(handler=_cmd_generate)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
