"""parsers/epub_parser.py — Extract EPUB (packed or directory) text in spine order."""

import posixpath
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path
from urllib.parse import unquote

from bs4 import BeautifulSoup

from errors import ExtractionError
from models import DocumentMetadata
from parsers.base import ParseResult, join_parts, title_from_path

CONTAINER_NS = "urn:oasis:names:tc:opendocument:xmlns:container"
OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"

CONTAINER_PATH = "META-INF/container.xml"
TEXT_MEDIA_TYPES = {"application/xhtml+xml", "text/html"}


class _EpubSource:
    """Read members by their archive name from a packed .epub or an unpacked directory."""

    def __init__(self, epub_path: Path):
        self.path = epub_path
        self._zip = None if epub_path.is_dir() else zipfile.ZipFile(epub_path)

    def read(self, name: str) -> bytes:
        if self._zip is not None:
            return self._zip.read(name)
        return (self.path / name).read_bytes()

    def close(self):
        if self._zip is not None:
            self._zip.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def _find_opf(source: _EpubSource) -> str:
    """Return the archive path of the package document named in container.xml."""
    root = ET.fromstring(source.read(CONTAINER_PATH))
    rootfile = root.find(f".//{{{CONTAINER_NS}}}rootfile")
    if rootfile is None or not rootfile.get("full-path"):
        raise ExtractionError("No rootfile declared in META-INF/container.xml")
    return rootfile.get("full-path")


def _reading_order(opf_root: ET.Element, opf_dir: str) -> list[str]:
    """Resolve spine itemrefs through the manifest into archive paths."""
    manifest = {}
    for item in opf_root.findall(f"{{{OPF_NS}}}manifest/{{{OPF_NS}}}item"):
        manifest[item.get("id")] = item

    spine = opf_root.find(f"{{{OPF_NS}}}spine")
    if spine is None:
        raise ExtractionError("No spine found in package document")

    paths = []
    for itemref in spine.findall(f"{{{OPF_NS}}}itemref"):
        item = manifest.get(itemref.get("idref"))
        if item is None:
            raise ExtractionError(f"Spine references unknown item '{itemref.get('idref')}'")
        if item.get("media-type") not in TEXT_MEDIA_TYPES:
            continue
        href = unquote(item.get("href", "").split("#")[0])
        paths.append(posixpath.normpath(posixpath.join(opf_dir, href)))
    return paths


def _extract_metadata(opf_root: ET.Element, epub_path: Path) -> DocumentMetadata:
    """Read title and author from the OPF Dublin Core block."""
    title, author = title_from_path(epub_path), "Unknown"
    t = opf_root.find(f".//{{{DC_NS}}}title")
    if t is not None and t.text and t.text.strip():
        title = t.text.strip()
    a = opf_root.find(f".//{{{DC_NS}}}creator")
    if a is not None and a.text and a.text.strip():
        author = a.text.strip()
    return DocumentMetadata(title=title, author=author, source_format="epub")


def _extract_document_text(content: bytes) -> str:
    """Textual content of one XHTML document, scripts and styles removed."""
    soup = BeautifulSoup(content, features="lxml-xml")
    for tag in soup.find_all(["script", "style"]):
        tag.decompose()
    body = soup.find("body") or soup
    return body.get_text(separator=" ", strip=True)


def parse_epub(epub_path: Path) -> ParseResult:
    """Main entry point. Returns the spine documents' text joined in reading order."""
    epub_path = Path(epub_path)
    try:
        with _EpubSource(epub_path) as source:
            opf_path = _find_opf(source)
            opf_root = ET.fromstring(source.read(opf_path))
            metadata = _extract_metadata(opf_root, epub_path)
            order = _reading_order(opf_root, posixpath.dirname(opf_path))
            text = join_parts(_extract_document_text(source.read(name)) for name in order)
    except (OSError, LookupError, ValueError, RuntimeError,
            zipfile.BadZipFile, ET.ParseError) as e:
        raise ExtractionError(f"Cannot read EPUB {epub_path}: {e}") from e

    return ParseResult(text=text, metadata=metadata)
