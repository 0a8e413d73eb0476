"""Top-level package for quizdoc.

Provides subpackages:
- quizdoc.extractor – DOCX / PDF / TXT text and image extraction
- quizdoc.parsing – line parser, finalizer and deduplicator
- quizdoc.common – topic taxonomy and heuristic thresholds
- quizdoc.core – data models and serialization
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.1"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("quizdoc")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from .pipeline import ParseResult, extract_raw_text, parse_document, parse_documents

__all__: list[str] = [
    "__version__",
    "ParseResult",
    "extract_raw_text",
    "parse_document",
    "parse_documents",
]
