from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from collections.abc import Sequence

import httpx
from dotenv import load_dotenv

from castnotes.client import DEFAULT_BASE_URL, PipelineClient, PipelineError
from castnotes.core.logging import setup_logging
from castnotes.rendering import SECTION_KEYS, copy_text, render_markdown

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="castnotes", description="Turn podcast audio into notes and social copy.")
    subcommands = parser.add_subparsers(dest="command", required=True)

    process = subcommands.add_parser("process", help="Transcribe and summarize one episode.")
    process.add_argument("--file", type=pathlib.Path, help="Local audio file to upload.")
    process.add_argument("--url", help="Direct audio URL (mp3, m4a).")
    process.add_argument("--base-url", default=DEFAULT_BASE_URL, help="castnotes server address.")
    process.add_argument("--format", choices=("markdown", "json"), default="markdown")
    process.add_argument("--section", choices=SECTION_KEYS, help="Print a single section as plain text.")
    return parser


def _run_process(args: argparse.Namespace) -> int:
    try:
        with PipelineClient.connect(args.base_url) as client:
            result = client.process(file=args.file, url=args.url)
    except PipelineError as exc:
        if exc.transcript:
            sys.stdout.write(render_markdown(exc.transcript, None))
        print(exc.message, file=sys.stderr)
        return 1
    except (httpx.HTTPError, OSError) as exc:
        logger.debug("Request failed", exc_info=exc)
        print(str(exc) or "Something went wrong", file=sys.stderr)
        return 1

    if args.section:
        print(copy_text(result.summary, args.section))
    elif args.format == "json":
        print(json.dumps({"transcript": result.transcript, "summary": result.raw_summary}, indent=2, ensure_ascii=False))
    else:
        sys.stdout.write(render_markdown(result.transcript, result.summary))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    setup_logging(log_level="WARNING", stream=sys.stderr)
    args = _build_parser().parse_args(argv)
    if args.command == "process":
        return _run_process(args)
    return 2


if __name__ == "__main__":
    sys.exit(main())
