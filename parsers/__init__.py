"""parsers/ — PDF and EPUB text extraction package."""

from pathlib import Path

from errors import UnsupportedFormat
from models import Document, WordSequence
from parsers.base import ParseResult, tokenize

SUPPORTED_FORMATS = {"epub", "pdf"}


def normalize_format(fmt: str) -> str:
    """'PDF', '.pdf' and 'pdf' all become 'pdf'. Raises UnsupportedFormat otherwise."""
    tag = (fmt or "").strip().lower().lstrip(".")
    if tag not in SUPPORTED_FORMATS:
        raise UnsupportedFormat(
            f"Unsupported file format: '{fmt}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_FORMATS))}"
        )
    return tag


def detect_format(file_path: Path) -> str:
    """Derive the format tag from the file extension."""
    return normalize_format(Path(file_path).suffix)


def resolve_document(file_path: Path, fmt: str | None = None) -> Document:
    """Pair a path with its declared or detected format. Never touches the file."""
    file_path = Path(file_path)
    fmt = normalize_format(fmt) if fmt else detect_format(file_path)
    return Document(path=file_path, format=fmt)


def parse_file(file_path: Path, fmt: str | None = None) -> ParseResult:
    """Dispatch to the appropriate parser based on the document format."""
    document = resolve_document(file_path, fmt)

    if document.format == "epub":
        from parsers.epub_parser import parse_epub
        return parse_epub(document.path)
    from parsers.pdf_parser import parse_pdf
    return parse_pdf(document.path)


def extract(file_path: Path, fmt: str | None = None) -> WordSequence:
    """Extract a document into its word sequence."""
    return tokenize(parse_file(file_path, fmt).text)
