"""Command-line entry point that writes an AIBOM for one model."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from aibom import config
from aibom.errors import AIBOMError
from aibom.logging_config import configure_logging
from aibom.services.document import (DocumentIdentity, assemble_document,
                                     render_json)
from aibom.services.graph_resolver import generate

_LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aibom-generate",
        description=(
            "Generate an AI Bill of Materials (AIBOM) for a Hugging Face "
            "model."
        ),
    )
    parser.add_argument(
        "model_id",
        metavar="MODEL_ID",
        help="Model to analyze, e.g. microsoft/DialoGPT-medium",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("aibom.json"),
        metavar="FILE",
        help="Output file for the generated AIBOM (default: aibom.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress and the generated document",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {config.GENERATOR_VERSION}",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.verbose:
        print(f"Generating AIBOM for model: {args.model_id}")
        print(f"Output file: {args.output}")

    try:
        graph = generate(args.model_id)
    except (AIBOMError, ValueError) as exc:
        _LOGGER.error("AIBOM generation failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    document = assemble_document(graph, DocumentIdentity.new())
    content = render_json(document)

    if args.verbose:
        print("Generated AIBOM:")
        print(content)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(content, encoding="utf-8")
    print(f"AIBOM saved to {args.output}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
