from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Iterator, List

import uvicorn

from .config import Settings
from .loader import MpxPartialLoader
from .source_type import SourceType


log = logging.getLogger("mpxscan")


def _load_env_file(path: str | None) -> None:
    if not path:
        return
    p = Path(path)
    if not p.exists():
        return
    try:
        lines = p.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        log.warning("could not read %s: %s", p, exc)
        return
    for line in lines:
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        if "=" not in s:
            continue
        k, v = s.split("=", 1)
        os.environ[k.strip()] = v.strip()


def _iter_files(paths: Iterable[str], extensions: List[str]) -> Iterator[Path]:
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            for child in sorted(p.rglob("*")):
                if child.is_file() and child.suffix.lower() in extensions:
                    yield child
        else:
            yield p


def _lang_label(source_type: SourceType) -> str:
    label = source_type.language
    if source_type.is_jsx:
        label += "+jsx"
    return f"{label}/{source_type.module_kind}"


def cmd_extract(args: argparse.Namespace, settings: Settings) -> int:
    status = 0
    report = {}
    for path in _iter_files(args.paths, settings.extensions):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"{path}: {exc}", file=sys.stderr)
            status = 1
            continue
        scripts = MpxPartialLoader(text).parse()
        log.debug("%s: %d script block(s)", path, len(scripts))
        if args.json:
            report[str(path)] = [s.to_dict() for s in scripts]
            continue
        for s in scripts:
            print(f"{path}:{s.start}-{s.end} {_lang_label(s.source_type)}")
    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
    return status


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    uvicorn.run("mpxscan.app:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mpxscan", description="Extract <script> blocks from MPX components"
    )
    parser.add_argument(
        "--env-file", default=os.getenv("ENV_FILE", ".env"), help="Path to .env file"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="List script blocks found in files")
    extract.add_argument("paths", nargs="+", help="Files or directories to scan")
    extract.add_argument("--json", action="store_true", help="Emit JSON")
    extract.set_defaults(func=cmd_extract)

    serve = sub.add_parser("serve", help="Run the HTTP extraction service")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve.set_defaults(func=cmd_serve)
    return parser


def main(argv: List[str] | None = None) -> int:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--env-file", default=os.getenv("ENV_FILE", ".env"))
    known, _ = pre.parse_known_args(argv)
    _load_env_file(known.env_file)

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level, format="%(levelname)s %(name)s: %(message)s"
    )
    args = build_parser(settings).parse_args(argv)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
