"""
Word document text extraction.

``.docx`` files are read with python-docx: body paragraphs first, then each
table row as one ``" | "``-joined line. Legacy binary ``.doc`` files have
their main text read from the Word 97 piece table through olefile; a
printable-run scan of the raw bytes is the last resort.
"""

import io
import re
import struct
from typing import Any, Iterator

import olefile
from docx import Document

from resume_pipeline.errors import ExtractionFailedError
from resume_pipeline.utils.constants import MediaType
from resume_pipeline.utils.logger import get_logger

from .base import BaseExtractor, ExtractedText

logger = get_logger(__name__)

# Runs of printable characters shorter than this are treated as binary noise
_PRINTABLE_RUN = re.compile(r"[\x20-\x7e\t]{4,}")

CELL_SEPARATOR = " | "

# Word 97-2003 File Information Block offsets inside the WordDocument stream
_FIB_FLAGS = 0x000A
_FIB_WHICH_TABLE = 0x0200
_FIB_CCP_TEXT = 0x004C
_FIB_FC_CLX = 0x01A2
_PIECE_COMPRESSED = 0x40000000

# Field instructions sit between 0x13 and 0x14; the shown result ends at 0x15
_FIELD_CODE = re.compile(r"\x13[^\x14\x15]*(?:\x14|(?=\x15))")
_WORD_CONTROL = str.maketrans({"\r": "\n", "\x0b": "\n", "\x0c": "\n", "\x07": "\t", "\x15": None})


def read_word97_text(content: bytes) -> str:
    """
    Main document text of a Word 97-2003 file.

    The WordDocument stream holds the characters; the piece table in the
    0Table or 1Table stream says where each run starts and whether it is
    stored as cp1252 or UTF-16LE.

    Raises:
        OSError: The content is not an OLE compound file or lacks a stream
        ValueError: The piece table is missing or malformed
    """
    with olefile.OleFileIO(io.BytesIO(content)) as ole:
        word_document = ole.openstream("WordDocument").read()
        if len(word_document) < _FIB_FC_CLX + 8:
            raise ValueError("Truncated File Information Block")
        (flags,) = struct.unpack_from("<H", word_document, _FIB_FLAGS)
        table_name = "1Table" if flags & _FIB_WHICH_TABLE else "0Table"
        table = ole.openstream(table_name).read()

    (ccp_text,) = struct.unpack_from("<I", word_document, _FIB_CCP_TEXT)
    fc_clx, lcb_clx = struct.unpack_from("<II", word_document, _FIB_FC_CLX)

    pieces = []
    for start, length, compressed in _piece_table(table[fc_clx:fc_clx + lcb_clx]):
        if compressed:
            pieces.append(word_document[start:start + length].decode("cp1252", errors="replace"))
        else:
            pieces.append(word_document[start:start + 2 * length].decode("utf-16-le", errors="replace"))

    text = "".join(pieces)[:ccp_text]
    return _FIELD_CODE.sub("", text).translate(_WORD_CONTROL)


def _piece_table(clx: bytes) -> Iterator[tuple[int, int, bool]]:
    """(byte offset, character count, 8-bit) for each text piece."""
    try:
        pos = 0
        # Property modifiers precede the piece table
        while pos < len(clx) and clx[pos] == 0x01:
            (cb_grpprl,) = struct.unpack_from("<H", clx, pos + 1)
            pos += 3 + cb_grpprl
        if pos >= len(clx) or clx[pos] != 0x02:
            raise ValueError("Piece table not found")

        (lcb,) = struct.unpack_from("<I", clx, pos + 1)
        plc = clx[pos + 5:pos + 5 + lcb]
        count = (lcb - 4) // 12
        cps = struct.unpack_from(f"<{count + 1}I", plc, 0)
        for i in range(count):
            (fc,) = struct.unpack_from("<I", plc, 4 * (count + 1) + 8 * i + 2)
            length = cps[i + 1] - cps[i]
            if fc & _PIECE_COMPRESSED:
                yield (fc & ~_PIECE_COMPRESSED) // 2, length, True
            else:
                yield fc, length, False
    except struct.error as e:
        raise ValueError(f"Malformed piece table: {e}") from e


def _document_lines(doc: Any) -> Iterator[str]:
    for paragraph in doc.paragraphs:
        if paragraph.text.strip():
            yield paragraph.text.strip()
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            line = CELL_SEPARATOR.join(cell for cell in cells if cell)
            if line:
                yield line


def _core_properties(doc: Any) -> dict[str, Any]:
    props = doc.core_properties
    return {
        "author": props.author,
        "title": props.title,
        "created": props.created.isoformat() if props.created else None,
        "modified": props.modified.isoformat() if props.modified else None,
    }


class DOCXExtractor(BaseExtractor):
    """Extractor for Microsoft Word documents (.docx, .doc)."""

    media_types = (MediaType.DOCX.value, MediaType.DOC.value)

    def extract_from_bytes(
        self, content: bytes, media_type: str = MediaType.DOCX.value, filename: str = "document.docx"
    ) -> ExtractedText:
        if media_type == MediaType.DOC.value:
            return self._extract_doc(content, filename)

        try:
            doc = Document(io.BytesIO(content))
        except Exception as e:
            logger.error(f"DOCX extraction failed for {filename}: {e}")
            raise ExtractionFailedError(f"Failed to extract text from DOCX: {e}") from e

        text = "\n".join(_document_lines(doc))
        warnings = () if text else ("Document appears to be empty or contains only images",)

        logger.debug(f"Extracted {len(text)} characters from {filename}")
        return ExtractedText(
            text=text,
            # Word has no stored page count; sections are the closest stand-in
            page_count=len(doc.sections) or 1,
            metadata={"extractor": "python-docx", "document_properties": _core_properties(doc)},
            warnings=warnings,
        )

    def _extract_doc(self, content: bytes, filename: str) -> ExtractedText:
        """
        Extract text from a legacy .doc file.

        The piece table is read through olefile. When the file is not a
        readable Word 97-2003 document, printable runs are scanned out of
        the raw bytes instead.
        """
        warnings = ["Legacy .doc format - extraction may be incomplete"]
        try:
            text = read_word97_text(content)
        except (OSError, ValueError) as e:
            logger.debug(f"olefile could not read {filename}: {e}")
            text = ""

        if text.strip():
            logger.debug(f"Read {len(text)} characters from Word 97 document {filename}")
            return ExtractedText(
                text=text,
                page_count=None,
                metadata={"extractor": "olefile"},
                warnings=tuple(warnings),
            )

        # Word 97-2003 stores text either as 8-bit or UTF-16LE runs; the
        # richer decoding wins
        candidates = [
            self._printable_runs(content.decode("latin-1")),
            self._printable_runs(content.decode("utf-16-le", errors="ignore")),
        ]
        text = max(candidates, key=len)

        if not text:
            raise ExtractionFailedError(
                "Could not extract text from .doc file. Convert to .docx for better results."
            )

        logger.debug(f"Recovered {len(text)} characters from legacy DOC {filename}")
        warnings.append("Used basic extraction - formatting may be lost")
        return ExtractedText(
            text=text,
            page_count=None,
            metadata={"extractor": "basic"},
            warnings=tuple(warnings),
        )

    @staticmethod
    def _printable_runs(decoded: str) -> str:
        runs = (run.strip() for run in _PRINTABLE_RUN.findall(decoded))
        # Keep runs with at least one letter; pure digits and symbols are OLE noise
        return "\n".join(run for run in runs if any(c.isalpha() for c in run))
