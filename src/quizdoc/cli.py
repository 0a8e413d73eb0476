"""
Command-line entry point.

    quizdoc worksheet.docx quiz.pdf -o questions.jsonl --images-dir images/
    quizdoc notes.docx --raw-text

Questions from all input files are written as JSONL (stdout when no
--output is given). Extraction failures are reported on stderr and make
the command exit with status 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from quizdoc import __version__
from quizdoc.common.topics import DEFAULT_TAXONOMY, TopicTaxonomy
from quizdoc.core.utils.serialization import save_images, save_questions_jsonl, serialize_question
from quizdoc.extractor.config import ExtractionConfig
from quizdoc.extractor.errors import ExtractionError
from quizdoc.pipeline import DEFAULT_MAX_WORKERS, extract_raw_text, parse_documents

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizdoc",
        description="Extract quiz questions from DOCX, PDF and TXT documents",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Documents to parse")
    parser.add_argument("--output", "-o", type=Path, help="Write questions to this JSONL file")
    parser.add_argument("--images-dir", type=Path, help="Write extracted images into this directory")
    parser.add_argument("--raw-text", action="store_true", help="Print extracted text instead of questions")
    parser.add_argument("--topics", type=Path, help="JSON file with a custom topic taxonomy")
    parser.add_argument("--plain-math", action="store_true", help="Emit equations as plain text, not LaTeX")
    parser.add_argument("--keep-empty", action="store_true", help="Keep questions with empty text")
    parser.add_argument("--workers", type=int, default=DEFAULT_MAX_WORKERS, help="Parallel files (default: %(default)s)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _print_raw_text(files: List[Path], config: ExtractionConfig) -> int:
    for path in files:
        try:
            text = extract_raw_text(path.name, path.read_bytes(), config)
        except (ExtractionError, OSError) as e:
            print(f"Error: {path.name}: {e}", file=sys.stderr)
            return 1
        print(text)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    config = ExtractionConfig(
        math_as_latex=not args.plain_math,
        drop_empty_questions=not args.keep_empty,
    )

    if args.raw_text:
        return _print_raw_text(args.files, config)

    taxonomy = DEFAULT_TAXONOMY
    if args.topics:
        try:
            taxonomy = TopicTaxonomy.from_json(args.topics)
        except (OSError, ValueError) as e:
            print(f"Error: cannot load topics: {e}", file=sys.stderr)
            return 1

    results = parse_documents(args.files, config=config, taxonomy=taxonomy, max_workers=args.workers)

    questions = []
    failed = False
    for result in results.values():
        if result.error:
            print(f"Error: {result.error}", file=sys.stderr)
            failed = True
            continue
        for warning in result.warnings:
            logger.warning(warning)
        questions.extend(result.questions)
        if args.images_dir and result.images:
            save_images(result.images, args.images_dir)

    if args.output:
        save_questions_jsonl(questions, args.output)
        logger.info(f"Wrote {len(questions)} questions to {args.output}")
    else:
        for question in questions:
            print(json.dumps(serialize_question(question), ensure_ascii=False))

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
