"""
PDF inspection utilities for exported resumes.

Reads finished PDFs back for verification; nothing in the export path imports
it. Its libraries (pdfplumber, PyPDF2) come with the `test` extra.

Main class:
    PDFDocument: Parsed PDF with column-based, font-size-aware text extraction.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_stream_text: Raw content-stream text (includes near-invisible runs).
    normalize_for_matching: Text normalization for fuzzy matching.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
    find_section_header: Find header text in a list of lines.
"""

from io import BytesIO
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

import pdfplumber
from PyPDF2 import PdfReader

PdfSource = Union[str, Path, bytes]


def _open_source(source: PdfSource):
    """Return something pdfplumber and PyPDF2 can both read."""
    if isinstance(source, bytes):
        return BytesIO(source)
    return str(source)


def page_count(source: PdfSource) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(_open_source(source))
        return len(reader.pages)
    except Exception:
        return None


def extract_stream_text(source: PdfSource) -> str:
    """
    Extract text in content-stream order for every page.

    Unlike PDFDocument (which clusters characters by position), this keeps
    text runs intact regardless of font size, which is what ATS scanners see.
    """
    reader = PdfReader(_open_source(source))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    if current_line:
        lines.append(current_line)

    return lines


def find_section_header(section_name: str, lines: List[str]) -> Optional[int]:
    """Find index of section header in lines using normalized exact match, or None."""
    section_norm = normalize_for_matching(section_name)

    for i, text in enumerate(lines):
        # Exact match prevents "Projects" matching "Projects (continued)"
        if section_norm == normalize_for_matching(text):
            return i

    return None


class PDFDocument:
    """
    Parsed PDF with column-based text extraction.

    Provides character-level extraction with support for:
    - Arbitrary column layouts via configurable split points
    - Minimum font size filtering, so near-invisible ATS text is excluded
      from what a human reader would see
    - Y-coordinate clustering to handle baseline variations between fonts

    Page data is lazily loaded and cached on first access.

    Args:
        source: Path to PDF file or PDF bytes
        column_splits: X-coordinate ratios (0.0-1.0) defining column boundaries.
                      [0.5] creates 2 columns. None (default) = single column.
        min_font_size: Characters smaller than this (points) are ignored.
        y_tolerance: Max Y-distance (points) to group characters as same line.

    Example:
        >>> pdf = PDFDocument(Path("Jane_Doe_Resume.pdf"), column_splits=[0.5])
        >>> for line in pdf.get_lines(page=1, column=1):
        ...     print(line)
    """

    def __init__(
        self,
        source: PdfSource,
        column_splits: Optional[List[float]] = None,
        min_font_size: float = 1.0,
        y_tolerance: float = 1.5,
    ):
        if isinstance(source, str):
            source = Path(source)
        if isinstance(source, Path) and not source.exists():
            raise FileNotFoundError(f"PDF not found: {source}")

        self.source = source
        self.column_splits = sorted(column_splits or [])
        self.num_columns = len(self.column_splits) + 1
        self.min_font_size = min_font_size
        self.y_tolerance = y_tolerance
        self._pages_cache: Optional[Dict[int, List[List[str]]]] = None
        self._page_count: Optional[int] = None

    @property
    def page_count(self) -> int:
        if self._page_count is None:
            self._page_count = page_count(self.source) or 0
        return self._page_count

    def _extract_pages(self, max_pages: int = 100) -> Dict[int, List[List[str]]]:
        """
        Extract text lines from all pages, grouped by column.

        Returns:
            Dict mapping page_num (1-indexed) to list of columns,
            where each column is a list of text lines.
        """
        pages_data: Dict[int, List[List[str]]] = {}

        with pdfplumber.open(_open_source(self.source)) as pdf:
            for page_num, page in enumerate(pdf.pages[:max_pages], start=1):
                page_width = page.width
                chars = [c for c in page.chars if c.get("size", 0) >= self.min_font_size]

                # e.g., splits=[0.5] on 595pt page -> boundaries=[0, 297.5, 595]
                boundaries = (
                    [0.0] + [page_width * ratio for ratio in self.column_splits] + [page_width]
                )

                column_chars: List[List] = [[] for _ in range(self.num_columns)]
                for char in chars:
                    x = char["x0"]
                    for col_idx in range(self.num_columns):
                        if boundaries[col_idx] <= x < boundaries[col_idx + 1]:
                            column_chars[col_idx].append(char)
                            break

                pages_data[page_num] = [self._chars_to_lines(col) for col in column_chars]

        return pages_data

    def _chars_to_lines(self, chars: List) -> List[str]:
        """Convert character list to text lines with Y-clustering."""
        text_lines = []
        for char_objs in cluster_by_y_tolerance(chars, tolerance=self.y_tolerance):
            char_objs.sort(key=lambda c: c["x0"])
            text_lines.append("".join(c["text"] for c in char_objs))
        return text_lines

    def _ensure_loaded(self) -> None:
        if self._pages_cache is None:
            self._pages_cache = self._extract_pages()

    def get_lines(self, page: int, column: int = 0) -> List[str]:
        """
        Get text lines for a specific page and column.

        Returns:
            List of text lines, top-to-bottom order.
            Empty list if page/column doesn't exist.
        """
        self._ensure_loaded()
        page_data = self._pages_cache.get(page)
        if page_data is None or column >= len(page_data):
            return []
        return page_data[column]

    def full_text(self) -> str:
        """All visible lines of all pages and columns joined by newlines."""
        self._ensure_loaded()
        lines = []
        for page_num in sorted(self._pages_cache):
            for column_lines in self._pages_cache[page_num]:
                lines.extend(column_lines)
        return "\n".join(lines)

    def find(
        self, text: str, whole_line: bool = False, column: Optional[int] = None
    ) -> Optional[Tuple[int, int, int]]:
        """
        Find first occurrence of text in the document.

        Returns:
            Tuple of (page, column, line_index) for first match, or None.
        """
        result = self.find_all(text, whole_line=whole_line, column=column, limit=1)
        return result[0] if result else None

    def find_all(
        self,
        text: str,
        whole_line: bool = False,
        column: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Tuple[int, int, int]]:
        """
        Find all occurrences of text in the document.

        Args:
            text: Text to search for (normalized: lowercase, alphanumeric only)
            whole_line: If True, text must match entire line. If False, substring match.
            column: Limit search to specific column (None = all columns)
            limit: Maximum number of results to return (None = all)

        Returns:
            List of (page, column, line_index) tuples for each match.
        """
        self._ensure_loaded()

        results: List[Tuple[int, int, int]] = []
        text_norm = normalize_for_matching(text)

        for page_num in sorted(self._pages_cache.keys()):
            page_data = self._pages_cache[page_num]
            columns_to_search = [column] if column is not None else range(len(page_data))

            for col_idx in columns_to_search:
                if col_idx >= len(page_data):
                    continue

                for line_idx, line in enumerate(page_data[col_idx]):
                    line_norm = normalize_for_matching(line)
                    match = (text_norm == line_norm) if whole_line else (text_norm in line_norm)
                    if match:
                        results.append((page_num, col_idx, line_idx))
                        if limit and len(results) >= limit:
                            return results

        return results

    def iter_pages(self) -> Iterator[int]:
        """Iterate over page numbers (1-indexed)."""
        self._ensure_loaded()
        return iter(sorted(self._pages_cache.keys()))
