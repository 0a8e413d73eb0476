"""
Module: pipeline

Purpose:
    End-to-end orchestration: uploaded file -> text -> raw questions ->
    finalized questions -> deduplicated question set, paired with the
    images whose ``[IMAGE:...]`` placeholders appear in the text.

Key Functions:
    - parse_document(): One file (name + bytes) -> ParseResult
    - extract_raw_text(): One file -> text only (no question parsing)
    - parse_documents(): Many files in parallel worker threads
    - placeholder_ids(): Relationship ids referenced in a text

Key Classes:
    - ParseResult: Questions, images and review warnings

Dependencies:
    - quizdoc.extractor: Text extraction (raises ExtractionError)
    - quizdoc.parsing: Parser, finalizer, deduplicator

Used By:
    - cli: quizdoc command
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from quizdoc.common.topics import DEFAULT_TAXONOMY, TopicTaxonomy
from quizdoc.core.models.images import ExtractedImage
from quizdoc.core.models.questions import FinalizedQuestion
from quizdoc.extractor.config import ExtractionConfig
from quizdoc.extractor.document import extract_document
from quizdoc.extractor.errors import ExtractionError
from quizdoc.parsing.dedupe import dedupe_questions
from quizdoc.parsing.finalizer import BARE_LETTER_RE, finalize_question
from quizdoc.parsing.parser import QuestionBlockParser

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\[IMAGE:\s*([^\].\s]+)\.([A-Za-z0-9]+)\s*\]")

DEFAULT_MAX_WORKERS = 4


@dataclass
class ParseResult:
    """
    Result of parsing one document.

    Attributes:
        questions: Finalized, deduplicated questions in document order.
        images: Images extracted from the document (DOCX only).
        warnings: Human-readable notes on questions that need review.
        error: Extraction failure message (parse_documents only).
    """
    questions: List[FinalizedQuestion] = field(default_factory=list)
    images: List[ExtractedImage] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def question_count(self) -> int:
        return len(self.questions)


def placeholder_ids(text: str) -> List[str]:
    """
    List image relationship ids referenced in text, in order, once each.

    Example:
        >>> placeholder_ids("See [IMAGE:rId7.png] and [IMAGE:rId9.jpeg]")
        ['rId7', 'rId9']
    """
    ids: List[str] = []
    for match in PLACEHOLDER_RE.finditer(text):
        if match.group(1) not in ids:
            ids.append(match.group(1))
    return ids


def _review_warnings(questions: Iterable[FinalizedQuestion]) -> List[str]:
    warnings = []
    for number, question in enumerate(questions, start=1):
        preview = question.question[:60]
        if question.needs_review:
            warnings.append(
                f"Question {number} reads like a multiple-choice question but has no options: {preview!r}"
            )
        if question.is_mcq and BARE_LETTER_RE.match(question.correct_answer):
            index = ord(question.correct_answer.upper()) - ord("A")
            if index >= len(question.options):
                warnings.append(
                    f"Question {number} answer {question.correct_answer} does not match any of its "
                    f"{len(question.options)} options: {preview!r}"
                )
    return warnings


def parse_document(
    filename: str,
    data: bytes,
    *,
    config: Optional[ExtractionConfig] = None,
    taxonomy: Optional[TopicTaxonomy] = None,
) -> ParseResult:
    """
    Parse an uploaded document into quiz questions.

    Pipeline:
    1. Extract text (and DOCX images) by file extension
    2. Segment text into raw questions
    3. Finalize each question (type, answer, level, subject)
    4. Drop duplicates

    Args:
        filename: Original file name (extension selects the format).
        data: File contents.
        config: Optional extraction configuration.
        taxonomy: Topic labels (defaults to the SAT taxonomy).

    Returns:
        ParseResult. Questions may be empty; that is not an error.

    Raises:
        ExtractionError: If text cannot be extracted from the file.

    Example:
        >>> result = parse_document("quiz.txt", b"1. 2+2?\\nA) 3 B) 4\\nAnswer: B")
        >>> result.questions[0].correct_answer
        'B'
    """
    config = config or ExtractionConfig()
    parser = QuestionBlockParser(taxonomy or DEFAULT_TAXONOMY)

    document = extract_document(filename, data, config)
    raw_questions = parser.parse(document.text)
    finalized = [finalize_question(raw, config.default_level) for raw in raw_questions]
    questions = dedupe_questions(finalized, drop_empty=config.drop_empty_questions)

    result = ParseResult(
        questions=questions,
        images=list(document.images),
        warnings=_review_warnings(questions),
    )
    logger.info(
        f"Parsed {filename}: {len(questions)} questions "
        f"({len(finalized) - len(questions)} dropped), {len(result.images)} images"
    )
    return result


def extract_raw_text(
    filename: str,
    data: bytes,
    config: Optional[ExtractionConfig] = None,
) -> str:
    """
    Extract a document's text without parsing questions.

    Raises:
        ExtractionError: If text cannot be extracted from the file.
    """
    return extract_document(filename, data, config).text


def _parse_path(path: Path, config: Optional[ExtractionConfig], taxonomy: Optional[TopicTaxonomy]) -> ParseResult:
    return parse_document(path.name, path.read_bytes(), config=config, taxonomy=taxonomy)


def parse_documents(
    paths: Iterable[Path],
    *,
    config: Optional[ExtractionConfig] = None,
    taxonomy: Optional[TopicTaxonomy] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Dict[Path, ParseResult]:
    """
    Parse several files concurrently.

    Documents share no state, so each runs on its own worker thread. A
    file that fails extraction (or cannot be read) yields an empty
    ParseResult with error set; it does not stop the other files.

    Args:
        paths: Files to parse.
        config: Optional extraction configuration shared by all files.
        taxonomy: Optional topic taxonomy shared by all files.
        max_workers: Thread pool size.

    Returns:
        Mapping of path -> ParseResult, in the order paths were given.
    """
    paths = list(paths)
    results: Dict[Path, ParseResult] = {}
    if not paths:
        return results

    logger.info(f"Processing {len(paths)} files with {max_workers} threads")
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_path = {
            executor.submit(_parse_path, path, config, taxonomy): path
            for path in paths
        }
        for future in as_completed(future_to_path):
            path = future_to_path[future]
            try:
                results[path] = future.result()
            except (ExtractionError, OSError) as e:
                logger.warning(f"{path.name}: {e}")
                results[path] = ParseResult(error=f"{path.name}: {e}")

    return {path: results[path] for path in paths}
