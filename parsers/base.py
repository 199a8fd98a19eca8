"""parsers/base.py — Shared parser utilities and types."""

from dataclasses import dataclass

from models import DocumentMetadata, WordSequence


@dataclass
class ParseResult:
    """Standard return type for all parsers."""
    text: str
    metadata: DocumentMetadata


def clean_text(text: str) -> str:
    """Drop soft hyphens and collapse all whitespace to single spaces. Text is kept literal."""
    text = text.replace("\u00ad", "")
    return " ".join(text.split())


def join_parts(parts) -> str:
    """Concatenate page/section texts with single-space separators, skipping empty ones."""
    return " ".join(p for p in (clean_text(part) for part in parts) if p)


def tokenize(text: str) -> WordSequence:
    """Split on whitespace, discarding empty tokens and keeping order."""
    return tuple(text.split())


def title_from_path(file_path) -> str:
    return file_path.stem.replace("_", " ").replace("-", " ").title()
