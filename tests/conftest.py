"""
Shared test fixtures for the resume pipeline test suite.

Sets environment variables before any resume_pipeline imports so settings
resolve to local, non-durable storage, then provides sample resumes,
in-memory document builders and a ready pipeline.
"""

import io
import os
import struct

# === Set environment BEFORE any resume_pipeline imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("STORAGE_PROVIDER", "local")
os.environ.setdefault("DB_NAME", "resume_pipeline_test")

import pytest
from docx import Document
from pypdf import PdfWriter

from resume_pipeline.core.pipeline import ResumeParsingPipeline
from resume_pipeline.nlp.ruleset import Ruleset
from resume_pipeline.services.storage import LocalDocumentStorage
from resume_pipeline.utils.config import AppSettings


SAMPLE_RESUME = (
    "Jane Doe\n"
    "jane.doe@example.com\n"
    "555-123-4567\n"
    "EXPERIENCE\n"
    "Senior Engineer at Acme Corp\n"
    "Jan 2020 - Present\n"
    "Built backend systems...\n"
    "EDUCATION\n"
    "State University\n"
    "Bachelor of Science in Computer Science\n"
    "2016-2020\n"
    "SKILLS\n"
    "Python, React, AWS, Docker"
)

DETAILED_RESUME = """John Smith
john.smith@gmail.com | (512) 555-0199 | Austin, TX
linkedin.com/in/johnsmith | github.com/jsmith

SUMMARY
Backend engineer with eight years of experience building distributed systems.

EXPERIENCE
Staff Engineer at Globex
Mar 2019 - Present
Led the platform team building payment services in Go and Python.

Software Engineer - Initech
Jun 2015 - Feb 2019
Maintained billing systems on PostgreSQL and Redis.

EDUCATION
University of Texas at Austin
Master of Science in Computer Science, GPA 3.8
2013 - 2015

CERTIFICATIONS
Certified ScrumMaster
AWS Certified Solutions Architect - Associate

SKILLS
Python, Go, Java, PostgreSQL, Redis, Docker, Kubernetes, AWS, Terraform, Git
"""


@pytest.fixture
def sample_resume_text() -> str:
    """The clean single-page text resume."""
    return SAMPLE_RESUME


@pytest.fixture
def detailed_resume_text() -> str:
    """A complete resume with every section populated."""
    return DETAILED_RESUME


@pytest.fixture
def make_docx():
    """Factory building DOCX bytes from paragraphs and optional table rows."""

    def _make(paragraphs: list[str], table_rows: list[list[str]] | None = None) -> bytes:
        doc = Document()
        for paragraph in paragraphs:
            doc.add_paragraph(paragraph)
        if table_rows:
            table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
            for r, row in enumerate(table_rows):
                for c, value in enumerate(row):
                    table.cell(r, c).text = value
        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    return _make


@pytest.fixture
def blank_pdf() -> bytes:
    """A valid one-page PDF with no text layer."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_text_pdf():
    """Factory building a one-page Helvetica PDF, one text line per entry."""

    def _make(lines: list[str]) -> bytes:
        content = "BT /F1 12 Tf 14 TL 72 720 Td " + " ".join(f"({line}) Tj T*" for line in lines) + " ET"
        objects = [
            "<< /Type /Catalog /Pages 2 0 R >>",
            "<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
            "/Resources << /Font << /F1 5 0 R >> >> >>",
            f"<< /Length {len(content)} >>\nstream\n{content}\nendstream",
            "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        ]

        pdf = b"%PDF-1.4\n"
        offsets = []
        for number, body in enumerate(objects, start=1):
            offsets.append(len(pdf))
            pdf += f"{number} 0 obj\n{body}\nendobj\n".encode("latin-1")

        xref_at = len(pdf)
        pdf += f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode("latin-1")
        for offset in offsets:
            pdf += f"{offset:010d} 00000 n \n".encode("latin-1")
        pdf += (
            f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
            f"startxref\n{xref_at}\n%%EOF\n"
        ).encode("latin-1")
        return pdf

    return _make


SECTOR_SIZE = 512
MINI_STREAM_CUTOFF = 4096
FREE_SECTOR = 0xFFFFFFFF
END_OF_CHAIN = 0xFFFFFFFE
FAT_SECTOR = 0xFFFFFFFD
NO_STREAM = 0xFFFFFFFF


def _directory_entry(name: str, entry_type: int, right=NO_STREAM, child=NO_STREAM, start=END_OF_CHAIN, size=0):
    encoded = (name + "\0").encode("utf-16-le") if name else b""
    return struct.pack(
        "<64sHBBIII16sIQQIQ",
        encoded, len(encoded), entry_type, 1, NO_STREAM, right, child,
        bytes(16), 0, 0, 0, start, size,
    )


def build_compound_file(streams: dict[str, bytes]) -> bytes:
    """
    OLE compound file (version 3) holding the given top-level streams.

    Streams are padded to the mini stream cutoff so every one lives in
    regular sectors; sector 0 is the FAT and sector 1 the directory.
    """
    names = list(streams)
    payloads = [streams[name].ljust(MINI_STREAM_CUTOFF, b"\0") for name in names]
    payloads = [p.ljust(-(-len(p) // SECTOR_SIZE) * SECTOR_SIZE, b"\0") for p in payloads]

    fat = [FAT_SECTOR, END_OF_CHAIN]
    starts = []
    for payload in payloads:
        count = len(payload) // SECTOR_SIZE
        first = len(fat)
        starts.append(first)
        fat.extend(first + i + 1 for i in range(count - 1))
        fat.append(END_OF_CHAIN)
    fat.extend([FREE_SECTOR] * (SECTOR_SIZE // 4 - len(fat)))

    entries = [_directory_entry("Root Entry", 5, child=1)]
    for i, (name, payload) in enumerate(zip(names, payloads)):
        right = i + 2 if i + 1 < len(names) else NO_STREAM
        entries.append(_directory_entry(name, 2, right=right, start=starts[i], size=len(payload)))
    while len(entries) < SECTOR_SIZE // 128:
        entries.append(_directory_entry("", 0))

    header = struct.pack(
        "<8s16sHHHHHHLLLLLLLLLL",
        b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", bytes(16),
        0x003E, 3, 0xFFFE, 9, 6, 0, 0,
        0, 1, 1, 0, MINI_STREAM_CUTOFF, END_OF_CHAIN, 0, END_OF_CHAIN, 0,
    )
    header += struct.pack("<109I", 0, *([FREE_SECTOR] * 108))

    return header + struct.pack(f"<{len(fat)}I", *fat) + b"".join(entries) + b"".join(payloads)


@pytest.fixture
def make_compound_file():
    return build_compound_file


@pytest.fixture
def make_word97():
    """
    Factory building a Word 97-2003 document whose text is one piece.

    ``trailing`` is stored in the same piece but past the main document
    length, where Word keeps headers and footnotes.
    """

    def _make(text: str, compressed: bool = True, trailing: str = "") -> bytes:
        text_offset = 2048
        stored = text + trailing
        encoded = stored.encode("cp1252") if compressed else stored.encode("utf-16-le")

        word_document = bytearray(MINI_STREAM_CUTOFF)
        struct.pack_into("<H", word_document, 0x000A, 0x0200)
        struct.pack_into("<I", word_document, 0x004C, len(text))
        word_document[text_offset:text_offset + len(encoded)] = encoded

        fc = (text_offset * 2) | 0x40000000 if compressed else text_offset
        plc = struct.pack("<II", 0, len(stored)) + struct.pack("<HIH", 0, fc, 0)
        clx = b"\x02" + struct.pack("<I", len(plc)) + plc
        struct.pack_into("<II", word_document, 0x01A2, 0, len(clx))

        return build_compound_file({"WordDocument": bytes(word_document), "1Table": clx})

    return _make


@pytest.fixture
def local_storage() -> LocalDocumentStorage:
    return LocalDocumentStorage()


@pytest.fixture
def pipeline(local_storage) -> ResumeParsingPipeline:
    """Pipeline with built-in rules and in-memory storage."""
    return ResumeParsingPipeline(
        storage=local_storage,
        ruleset=Ruleset(),
        settings=AppSettings(),
    )
