"""
Content Extraction Module

Turns a source file into plain text for indexing. Text-like files (TXT, MD,
CSV, JSON) are read directly; PDFs go through pdfplumber.

Failures are reported as an ExtractionResult with status 'error' instead of
an exception, because the index builder treats an unreadable file as an
empty document rather than a fatal condition. Callers that want an
exception use extract_or_raise().
"""

from dataclasses import dataclass
from pathlib import Path

import pdfplumber

from voltai.config import DEBUG_MODE
from voltai.errors import ExtractionError
from voltai.logging_config import debug_log

TEXT_EXTENSIONS = frozenset({'.txt', '.md', '.csv', '.json'})
PDF_EXTENSIONS = frozenset({'.pdf'})


@dataclass(frozen=True)
class ExtractionResult:
    """
    Outcome of extracting one file.

    Attributes:
        path: Source file path
        text: Extracted text ('' on error)
        method: 'direct_read', 'pdf_text', or None on error
        status: 'success' or 'error'
        error_message: Error description (if status is 'error')
        page_count: Number of pages (PDFs only)
    """

    path: str
    text: str = ""
    method: str | None = None
    status: str = "success"
    error_message: str | None = None
    page_count: int | None = None

    @property
    def success(self) -> bool:
        return self.status == "success"


class ContentExtractor:
    """
    Extracts raw text from supported files.

    Example:
        extractor = ContentExtractor()
        result = extractor.extract("notes/kubernetes.md")
        if result.success:
            print(result.text[:80])
    """

    def supports(self, file_path: str | Path) -> bool:
        ext = Path(file_path).suffix.lower()
        return ext in TEXT_EXTENSIONS or ext in PDF_EXTENSIONS

    def extract(self, file_path: str | Path) -> ExtractionResult:
        """
        Extract text from a single file.

        Args:
            file_path: Path to the file

        Returns:
            ExtractionResult; never raises for I/O or parse failures
        """
        path = Path(file_path)
        ext = path.suffix.lower()

        if ext in TEXT_EXTENSIONS:
            return self._read_text_file(path)
        if ext in PDF_EXTENSIONS:
            return self._read_pdf(path)

        return ExtractionResult(
            path=str(path),
            status="error",
            error_message=f"Unsupported file type: {ext or '(none)'}",
        )

    def extract_or_raise(self, file_path: str | Path) -> str:
        """
        Extract text, raising ExtractionError on failure.

        Raises:
            ExtractionError: If the file is unsupported or unreadable
        """
        result = self.extract(file_path)
        if not result.success:
            raise ExtractionError(file_path, result.error_message)
        return result.text

    def _read_text_file(self, path: Path) -> ExtractionResult:
        """Read a text-like file as UTF-8, dropping undecodable bytes."""
        try:
            with open(path, 'r', encoding='utf-8', errors='ignore') as f:
                text = f.read()
        except OSError as e:
            return ExtractionResult(
                path=str(path),
                status="error",
                error_message=f"Failed to read text file: {e}",
            )

        if DEBUG_MODE:
            debug_log(f"[EXTRACT] {path.name}: {len(text)} chars (direct read)")
        return ExtractionResult(path=str(path), text=text, method="direct_read")

    def _read_pdf(self, path: Path) -> ExtractionResult:
        """Extract digital text from every page of a PDF."""
        try:
            parts = []
            with pdfplumber.open(path) as pdf:
                page_count = len(pdf.pages)
                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        parts.append(page_text)
        except Exception as e:
            # pdfplumber surfaces encrypted/corrupt files as assorted exception types
            error_msg = str(e).lower()
            if 'password' in error_msg or 'encrypted' in error_msg:
                message = "PDF is password-protected"
            else:
                message = f"PDF extraction failed: {e}"
            return ExtractionResult(path=str(path), status="error", error_message=message)

        text = "\n".join(parts)
        if DEBUG_MODE:
            debug_log(f"[EXTRACT] {path.name}: {page_count} pages, {len(text)} chars")
        return ExtractionResult(
            path=str(path),
            text=text,
            method="pdf_text",
            page_count=page_count,
        )
