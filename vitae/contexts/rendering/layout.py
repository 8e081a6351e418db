"""
Pagination / flow engine for PDF export.

Everything is laid out top-down in millimetres with a single vertical cursor
(LayoutState.y). PdfSurface translates those coordinates to reportlab points
with a bottom-left origin, so section code never deals with points.

One LayoutState is created per export; there is no module-level layout state.
"""

from io import BytesIO
from typing import Callable, List, Optional, Sequence

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from vitae.contexts.rendering.config import RGB, LayoutConfig
from vitae.contexts.rendering.sanitizer import clean, strip_leading_bullet, to_printable

# Standard (non-embedded) PDF fonts by family and style
FONT_FACES = {
    "Times": {
        "normal": "Times-Roman",
        "bold": "Times-Bold",
        "italic": "Times-Italic",
        "bolditalic": "Times-BoldItalic",
    },
    "Helvetica": {
        "normal": "Helvetica",
        "bold": "Helvetica-Bold",
        "italic": "Helvetica-Oblique",
        "bolditalic": "Helvetica-BoldOblique",
    },
    "Courier": {
        "normal": "Courier",
        "bold": "Courier-Bold",
        "italic": "Courier-Oblique",
        "bolditalic": "Courier-BoldOblique",
    },
}

BULLET = "•"
BULLET_GUTTER = 4


def _rgb(color: RGB) -> tuple:
    return tuple(channel / 255 for channel in color)


class PdfSurface:
    """
    Drawing surface over a reportlab Canvas.

    Coordinates are millimetres from the top-left corner; text is placed by
    its baseline. Font, colors and line width are sticky like a pen and are
    re-applied after every page break.
    """

    def __init__(self, config: LayoutConfig, title: str = "", author: str = ""):
        if config.font_family not in FONT_FACES:
            raise ValueError(
                f"Unsupported font family '{config.font_family}'. Use one of {sorted(FONT_FACES)}"
            )
        self.faces = FONT_FACES[config.font_family]
        self.page_width = config.page_width
        self.page_height = config.page_height
        self.page_count = 1

        self._buffer = BytesIO()
        self.canvas = canvas.Canvas(
            self._buffer, pagesize=(config.page_width * mm, config.page_height * mm)
        )
        if title:
            self.canvas.setTitle(title)
        if author:
            self.canvas.setAuthor(author)

        self.font_name = self.faces["normal"]
        self.font_size = 10.0
        self.text_color: RGB = config.colors.text
        self.draw_color: RGB = config.colors.black
        self.fill_color: RGB = config.colors.black
        self.line_width = 0.2

    def _y(self, y: float) -> float:
        return (self.page_height - y) * mm

    # --- Pen state ---

    def set_font(self, style: str = "normal", size: Optional[float] = None) -> None:
        self.font_name = self.faces[style]
        if size is not None:
            self.font_size = size

    def set_font_size(self, size: float) -> None:
        self.font_size = size

    def set_text_color(self, color: RGB) -> None:
        self.text_color = tuple(color)

    def set_draw_color(self, color: RGB) -> None:
        self.draw_color = tuple(color)

    def set_fill_color(self, color: RGB) -> None:
        self.fill_color = tuple(color)

    def set_line_width(self, width: float) -> None:
        self.line_width = width

    # --- Drawing ---

    def text_width(self, text: str) -> float:
        """Width of text in the current font, in millimetres."""
        return pdfmetrics.stringWidth(text, self.font_name, self.font_size) / mm

    def text(self, text: str, x: float, y: float) -> None:
        self.canvas.setFont(self.font_name, self.font_size)
        self.canvas.setFillColorRGB(*_rgb(self.text_color))
        self.canvas.drawString(x * mm, self._y(y), text)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.canvas.setStrokeColorRGB(*_rgb(self.draw_color))
        self.canvas.setLineWidth(self.line_width * mm)
        self.canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def circle(self, x: float, y: float, radius: float) -> None:
        """Filled circle centred on (x, y)."""
        self.canvas.setFillColorRGB(*_rgb(self.fill_color))
        self.canvas.circle(x * mm, self._y(y), radius * mm, stroke=0, fill=1)

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        """Filled rectangle whose top-left corner is (x, y)."""
        self.canvas.setFillColorRGB(*_rgb(self.fill_color))
        self.canvas.rect(x * mm, self._y(y + height), width * mm, height * mm, stroke=0, fill=1)

    def new_page(self) -> None:
        self.canvas.showPage()
        self.page_count += 1

    def finish(self) -> bytes:
        """Close the document and return the PDF bytes."""
        self.canvas.save()
        return self._buffer.getvalue()


class LayoutState:
    """
    Cursor and page bookkeeping for one export.

    Attributes:
        y: Baseline of the next line, in mm from the top of the current page
        config: Layout settings
        surface: Drawing surface
    """

    def __init__(self, config: LayoutConfig, surface: Optional[PdfSurface] = None):
        self.config = config
        self.surface = surface or PdfSurface(config)
        self.y = config.margin

    @property
    def margin(self) -> float:
        return self.config.margin

    @property
    def page_width(self) -> float:
        return self.config.page_width

    @property
    def content_width(self) -> float:
        return self.config.content_width

    @property
    def right_edge(self) -> float:
        return self.config.page_width - self.config.margin

    @property
    def page_count(self) -> int:
        return self.surface.page_count

    def check_page_break(self, required: float) -> bool:
        """
        Start a new page if `required` mm no longer fit below the cursor.

        Returns:
            True if a page was added (cursor reset to the top margin)
        """
        if self.y + required > self.config.bottom_limit:
            self.surface.new_page()
            self.y = self.config.margin
            return True
        return False

    def fits_on_fresh_page(self, required: float) -> bool:
        return self.config.margin + required <= self.config.bottom_limit

    def advance(self, dy: float) -> None:
        self.y += dy


def _fit_prefix(word: str, width: float, surface: PdfSurface) -> int:
    """Length of the longest prefix of word that fits width (at least 1)."""
    for end in range(len(word), 0, -1):
        if surface.text_width(word[:end]) <= width:
            return end
    return 1


def wrap_text(text: str, width: float, surface: PdfSurface) -> List[str]:
    """
    Greedy word wrap in the surface's current font.

    Newlines are hard breaks. Words wider than the column are split by
    characters.
    """
    lines = []
    for paragraph in (text or "").split("\n"):
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if surface.text_width(candidate) <= width:
                current = candidate
                continue

            if current:
                lines.append(current)
            while len(word) > 1 and surface.text_width(word) > width:
                cut = _fit_prefix(word, width, surface)
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        if current:
            lines.append(current)
    return lines


def section_header(state: LayoutState, title: str) -> None:
    """Upper-cased section title over a full-width rule."""
    surface, colors = state.surface, state.config.colors

    state.check_page_break(12)
    surface.set_font("bold", 13)
    surface.set_text_color(colors.primary)
    surface.text(title.upper(), state.margin, state.y)
    state.advance(3)

    surface.set_draw_color(colors.primary)
    surface.set_line_width(0.6)
    surface.line(state.margin, state.y, state.right_edge, state.y)
    state.advance(5)


def add_text(
    state: LayoutState,
    text: str,
    size: float = 10,
    style: str = "normal",
    indent: float = 0,
    color: Optional[RGB] = None,
) -> None:
    """Cleaned, wrapped paragraph; each line advances half the font size."""
    if not text:
        return
    surface = state.surface
    surface.set_font(style, size)
    surface.set_text_color(color or state.config.colors.text)

    step = size * 0.5
    for line in wrap_text(clean(text, state.config.debug), state.content_width - indent, surface):
        state.check_page_break(step)
        surface.text(line, state.margin + indent, state.y)
        state.advance(step)
    state.advance(1)


def add_bullet_points(
    state: LayoutState, text: str, indent: float = 10, show_bullets: bool = True
) -> None:
    """
    One bullet per non-empty line of text.

    Existing bullet or dash glyphs at the start of a line are replaced by a
    uniform bullet; continuation lines align under the text, not the bullet.
    """
    if not text:
        return
    surface, colors = state.surface, state.config.colors
    line_height = 4

    for raw_line in text.split("\n"):
        if not raw_line.strip():
            continue
        state.check_page_break(5)
        item = to_printable(strip_leading_bullet(raw_line))
        if not item:
            continue

        if show_bullets:
            surface.set_font("bold", 9)
            surface.set_text_color(colors.bullet)
            surface.text(BULLET, state.margin + indent, state.y)
            text_x = state.margin + indent + BULLET_GUTTER
            width = state.content_width - indent - BULLET_GUTTER
        else:
            text_x = state.margin + indent
            width = state.content_width - indent

        surface.set_font("normal", 9)
        surface.set_text_color(colors.text)
        for index, line in enumerate(wrap_text(item, width, surface)):
            # The first line shares the bullet's page check
            if index or not show_bullets:
                state.check_page_break(line_height)
            surface.text(line, text_x, state.y)
            state.advance(line_height)


def draw_columns(
    state: LayoutState,
    columns: Sequence[Sequence[str]],
    xs: Sequence[float],
    width: float,
    line_height: float,
    continuation_height: Optional[float] = None,
    max_lines: Optional[int] = None,
    marker: Optional[Callable[[float, float], None]] = None,
    text_offset: float = 0,
) -> None:
    """
    Draw side-by-side columns of items, each column with its own cursor.

    All columns start at the same y. The whole block is kept on one page when
    it fits a page; otherwise items are drawn row by row (each row on a
    shared cursor) so nothing overflows the bottom margin. Afterwards the
    cursor sits at the end of the longest column.

    Args:
        columns: Item texts per column, in the surface's current font
        xs: Left x of each column
        width: Wrap width of an item
        line_height: Advance after each item
        continuation_height: Advance between wrapped lines of one item
            (default: line_height)
        max_lines: Keep only this many wrapped lines per item
        marker: Called with (x, y) before each item is drawn
        text_offset: Horizontal offset of the text from the column x
    """
    surface = state.surface
    if continuation_height is None:
        continuation_height = line_height

    wrapped = [
        [(wrap_text(item, width, surface) or [""])[:max_lines] for item in column]
        for column in columns
    ]

    def item_height(lines: List[str]) -> float:
        return (len(lines) - 1) * continuation_height + line_height

    def draw_item(lines: List[str], x: float, y: float) -> None:
        if marker:
            marker(x, y)
        for index, line in enumerate(lines):
            surface.text(line, x + text_offset, y)
            if index < len(lines) - 1:
                y += continuation_height

    heights = [sum(item_height(lines) for lines in column) for column in wrapped]
    block_height = max(heights, default=0)

    if state.fits_on_fresh_page(block_height):
        state.check_page_break(block_height)
        start_y = state.y
        for column, x in zip(wrapped, xs):
            y = start_y
            for lines in column:
                draw_item(lines, x, y)
                y += item_height(lines)
        state.y = start_y + block_height
        return

    row_count = max((len(column) for column in wrapped), default=0)
    for row in range(row_count):
        cells = [(column[row], x) for column, x in zip(wrapped, xs) if row < len(column)]
        row_height = max(item_height(lines) for lines, _ in cells)
        state.check_page_break(row_height)
        for lines, x in cells:
            draw_item(lines, x, state.y)
        state.advance(row_height)
