import zipfile

import pytest

from settings import WPM_KEY

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

CONTENT_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:uuid:1234</dc:identifier>
    <dc:title>The Sample Book</dc:title>
    <dc:creator>Ann Author</dc:creator>
  </metadata>
  <manifest>
    <item id="chapter" href="text/chapter%201.xhtml" media-type="application/xhtml+xml"/>
    <item id="intro" href="text/intro.xhtml" media-type="application/xhtml+xml"/>
    <item id="css" href="style.css" media-type="text/css"/>
  </manifest>
  <spine>
    <itemref idref="intro"/>
    <itemref idref="chapter"/>
  </spine>
</package>
"""

INTRO_XHTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Ignored head title</title><style>p { color: red; }</style></head>
<body>
  <h1>Introduction</h1>
  <p>Fish &amp;   chips</p>
</body>
</html>
"""

CHAPTER_XHTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Chapter</title></head>
<body>
  <p>The end<br/>of   the
  story.</p>
  <script>var hidden = 1;</script>
</body>
</html>
"""

EPUB_FILES = {
    "META-INF/container.xml": CONTAINER_XML,
    "OEBPS/content.opf": CONTENT_OPF,
    "OEBPS/text/intro.xhtml": INTRO_XHTML,
    "OEBPS/text/chapter 1.xhtml": CHAPTER_XHTML,
    "OEBPS/style.css": "p { margin: 0; }",
}

EPUB_WORDS = ("Introduction", "Fish", "&", "chips", "The", "end", "of", "the", "story.")


@pytest.fixture
def epub_file(tmp_path):
    path = tmp_path / "sample.epub"
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        for name, content in EPUB_FILES.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def epub_dir(tmp_path):
    root = tmp_path / "unpacked.epub"
    for name, content in EPUB_FILES.items():
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_pdf(tmp_path):
    """Build a PDF with one entry per page; each entry is a list of text lines."""
    import fitz

    def _make(pages, name="sample.pdf", metadata=None, **save_kwargs):
        path = tmp_path / name
        doc = fitz.open()
        for lines in pages:
            page = doc.new_page()
            for i, line in enumerate(lines):
                page.insert_text((72, 72 + i * 24), line, fontsize=12)
        if metadata:
            doc.set_metadata(metadata)
        doc.save(str(path), **save_kwargs)
        doc.close()
        return path

    return _make


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with SPEEDREAD_WPM unset, restored afterwards."""
    # setenv first so monkeypatch remembers to remove whatever load_dotenv adds
    monkeypatch.setenv(WPM_KEY, "")
    monkeypatch.delenv(WPM_KEY)
    monkeypatch.chdir(tmp_path)
    return tmp_path
