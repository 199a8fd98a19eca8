"""parsers/pdf_parser.py — Extract PDF text word by word using pymupdf."""

from pathlib import Path

from errors import ExtractionError
from models import DocumentMetadata
from parsers.base import ParseResult, join_parts, title_from_path


def _page_words(page) -> str:
    """Words of one page in reading order: block, then line, then word number."""
    words = page.get_text("words")  # (x0, y0, x1, y1, word, block_no, line_no, word_no)
    words.sort(key=lambda w: (w[5], w[6], w[7]))
    return " ".join(w[4] for w in words)


def parse_pdf(file_path: Path) -> ParseResult:
    """Parse a PDF into one flat text, pages in order."""
    import fitz  # pymupdf

    file_path = Path(file_path)
    try:
        with fitz.open(str(file_path)) as doc:
            if doc.needs_pass:
                raise ExtractionError(f"PDF is password protected: {file_path}")

            pdf_meta = doc.metadata or {}
            title = (pdf_meta.get("title") or "").strip() or title_from_path(file_path)
            author = (pdf_meta.get("author") or "").strip() or "Unknown"

            text = join_parts(_page_words(page) for page in doc)
    except (OSError, RuntimeError, ValueError) as e:
        raise ExtractionError(f"Cannot read PDF {file_path}: {e}") from e

    metadata = DocumentMetadata(title=title, author=author, source_format="pdf")
    return ParseResult(text=text, metadata=metadata)
