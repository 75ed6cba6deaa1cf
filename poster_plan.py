"""Tile planning: which pixels go on which page, and where.

Everything here is a pure function of the image size and the options.
Page-space values are millimetres measured from the top-left corner of the
page; source-space values are pixels measured from the top-left corner of
the image.  Nothing is rounded, the renderer decides how to snap crops to
whole pixels.
"""

from dataclasses import dataclass, replace
from typing import NamedTuple, Optional, Tuple

from poster_errors import (DegenerateImageError, InvalidGridError,
                           InvalidMarginError, InvalidOverlapError)
from poster_format import Orientation, PageFormat, resolve_page_size

MIN_GRID = 1
MAX_GRID = 10
MAX_OVERLAP_MM = 50.0

PAGE_MARGIN_MM = 10.0
FOOTER_RESERVE_MM = 15.0

SUMMARY_MARGIN_MM = 20.0
TITLE_RESERVE_MM = 20.0
CAPTION_RESERVE_MM = 15.0

MARK_LENGTH_MM = 5.0
MARK_OFFSET_MM = 3.0


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height


class Line(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float


class CellLabel(NamedTuple):
    code: str
    x: float
    y: float


@dataclass(frozen=True)
class PrintOptions:
    columns: int = 2
    rows: int = 2
    page_format: PageFormat = PageFormat.A4
    orientation: Orientation = Orientation.PORTRAIT
    overlap_mm: float = 10.0

    @property
    def page_count(self):
        return self.columns * self.rows

    @property
    def page_size(self):
        return resolve_page_size(self.page_format, self.orientation)


@dataclass(frozen=True)
class PageStyle:
    """Which decorations end up on the printed pages."""
    border: bool = True
    crop_marks: bool = True
    guide_lines: bool = False
    corner_marks: bool = False
    captions: bool = True
    line_color: str = "black"
    grid_color: str = "red"


DEFAULT_STYLE = PageStyle()


@dataclass(frozen=True)
class CellPlan:
    col: int
    row: int
    index: int
    cell_code: str
    source_crop: Rect
    dest_rect: Rect
    has_left: bool
    has_right: bool
    has_top: bool
    has_bottom: bool
    overlap_mm_x: float
    overlap_mm_y: float
    border: Optional[Rect] = None
    crop_marks: Tuple[Line, ...] = ()
    guide_lines: Tuple[Line, ...] = ()
    corner_marks: Tuple[Line, ...] = ()

    @property
    def inner_rect(self):
        """dest_rect without the overlap shared with neighbouring pages."""
        d = self.dest_rect
        left = self.overlap_mm_x if self.has_left else 0.0
        right = self.overlap_mm_x if self.has_right else 0.0
        top = self.overlap_mm_y if self.has_top else 0.0
        bottom = self.overlap_mm_y if self.has_bottom else 0.0
        return Rect(d.x + left, d.y + top,
                    d.width - left - right, d.height - top - bottom)


@dataclass(frozen=True)
class SummaryPlan:
    page_size: Tuple[float, float]
    image_rect: Rect
    column_lines: Tuple[float, ...]
    row_lines: Tuple[float, ...]
    labels: Tuple[CellLabel, ...]
    title_anchor: Tuple[float, float]
    caption_anchor: Tuple[float, float]
    page_count: int = 0


def cell_code(col, row):
    """'A1' for the top-left cell; columns past Z continue with AA, AB, ..."""
    letters = ""
    n = col + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return f"{letters}{row + 1}"


def fit_rect(aspect, avail_width, avail_height):
    """Fit a rectangle of the given aspect into the available area.

    Width first; if that overflows the height, fit the height instead.
    """
    width = avail_width
    height = avail_width / aspect
    if height > avail_height:
        height = avail_height
        width = avail_height * aspect
    return width, height


def _is_count(value):
    return isinstance(value, int) and not isinstance(value, bool)


def validate_image_size(image_width, image_height):
    if not image_width > 0 or not image_height > 0:
        raise DegenerateImageError(
            f"Image must have positive dimensions, got {image_width}x{image_height}")


def validate_options(options):
    for name in ("columns", "rows"):
        value = getattr(options, name)
        if not _is_count(value) or not MIN_GRID <= value <= MAX_GRID:
            raise InvalidGridError(
                f"{name} must be an integer between {MIN_GRID} and {MAX_GRID}, got {value!r}")
    if not 0 <= options.overlap_mm <= MAX_OVERLAP_MM:
        raise InvalidOverlapError(
            f"Overlap must be between 0 and {MAX_OVERLAP_MM:g} mm, got {options.overlap_mm!r}")
    # fails fast on values outside the enumerations
    resolve_page_size(options.page_format, options.orientation)


def _printable_area(page_width, page_height, margin, reserve):
    if margin < 0 or reserve < 0:
        raise InvalidMarginError(
            f"Margins must not be negative, got {margin:g} mm and {reserve:g} mm reserved")
    avail_width = page_width - 2.0 * margin
    avail_height = page_height - 2.0 * margin - reserve
    if avail_width <= 0 or avail_height <= 0:
        raise InvalidMarginError(
            f"Margins of {margin:g} mm leave no printable area on a "
            f"{page_width:g}x{page_height:g} mm page")
    return avail_width, avail_height


def _cross(x, y, length=MARK_LENGTH_MM):
    half = length / 2.0
    return (Line(x - half, y, x + half, y),
            Line(x, y - half, x, y + half))


def _crop_marks(inner, has_left, has_right, has_top, has_bottom):
    x0, y0, x1, y1 = inner.x, inner.y, inner.right, inner.bottom
    corners = []
    if has_left:
        corners += [(x0, y0), (x0, y1)]
    if has_right:
        corners += [(x1, y0), (x1, y1)]
    if has_top:
        corners += [(x0, y0), (x1, y0)]
    if has_bottom:
        corners += [(x0, y1), (x1, y1)]

    marks = []
    seen = set()
    for corner in corners:
        if corner in seen:
            continue
        seen.add(corner)
        marks.extend(_cross(*corner))
    return tuple(marks)


def _guide_lines(dest, inner, has_left, has_right, has_top, has_bottom):
    lines = []
    if has_left:
        lines.append(Line(inner.x, dest.y, inner.x, dest.bottom))
    if has_right:
        lines.append(Line(inner.right, dest.y, inner.right, dest.bottom))
    if has_top:
        lines.append(Line(dest.x, inner.y, dest.right, inner.y))
    if has_bottom:
        lines.append(Line(dest.x, inner.bottom, dest.right, inner.bottom))
    return tuple(lines)


def page_corner_marks(page_width, page_height, margin,
                      length=MARK_LENGTH_MM, offset=MARK_OFFSET_MM):
    """Registration ticks just outside the four corners of the margin box."""
    left, top = margin, margin
    right, bottom = page_width - margin, page_height - margin
    return (
        Line(left - offset - length, top, left - offset, top),
        Line(left, top - offset - length, left, top - offset),
        Line(right + offset, top, right + offset + length, top),
        Line(right, top - offset - length, right, top - offset),
        Line(left - offset - length, bottom, left - offset, bottom),
        Line(left, bottom + offset, left, bottom + offset + length),
        Line(right + offset, bottom, right + offset + length, bottom),
        Line(right, bottom + offset, right, bottom + offset + length),
    )


def plan_cell(col, row, image_width, image_height, options,
              page_margin_mm=PAGE_MARGIN_MM, footer_reserve_mm=FOOTER_RESERVE_MM,
              style=DEFAULT_STYLE):
    """Plan a single cell.  Cells do not depend on each other."""
    columns, rows = options.columns, options.rows
    page_width, page_height = options.page_size
    avail_width, avail_height = _printable_area(
        page_width, page_height, page_margin_mm, footer_reserve_mm)

    base_width = image_width / columns
    base_height = image_height / rows
    base_x = col * base_width
    base_y = row * base_height

    # the unexpanded fit only sets the pixel/mm scale of the overlap
    final_width, final_height = fit_rect(base_width / base_height, avail_width, avail_height)
    overlap = options.overlap_mm
    overlap_px_x = overlap * base_width / final_width
    overlap_px_y = overlap * base_height / final_height

    has_left = col > 0
    has_right = col < columns - 1
    has_top = row > 0
    has_bottom = row < rows - 1

    crop_x = max(0.0, base_x - (overlap_px_x if has_left else 0.0))
    crop_y = max(0.0, base_y - (overlap_px_y if has_top else 0.0))
    crop_width = min(
        base_width + (overlap_px_x if has_left else 0.0) + (overlap_px_x if has_right else 0.0),
        image_width - crop_x)
    crop_height = min(
        base_height + (overlap_px_y if has_top else 0.0) + (overlap_px_y if has_bottom else 0.0),
        image_height - crop_y)
    source_crop = Rect(crop_x, crop_y, crop_width, crop_height)

    dest_width, dest_height = fit_rect(crop_width / crop_height, avail_width, avail_height)
    dest_rect = Rect(page_margin_mm + (avail_width - dest_width) / 2.0,
                     page_margin_mm + (avail_height - dest_height) / 2.0,
                     dest_width, dest_height)

    overlap_mm_x = overlap_px_x / crop_width * dest_width
    overlap_mm_y = overlap_px_y / crop_height * dest_height

    plan = CellPlan(
        col=col, row=row, index=row * columns + col,
        cell_code=cell_code(col, row),
        source_crop=source_crop, dest_rect=dest_rect,
        has_left=has_left, has_right=has_right,
        has_top=has_top, has_bottom=has_bottom,
        overlap_mm_x=overlap_mm_x, overlap_mm_y=overlap_mm_y,
        border=dest_rect if style.border else None,
    )

    crop_marks = guide_lines = corner_marks = ()
    if overlap > 0:
        flags = (has_left, has_right, has_top, has_bottom)
        inner = plan.inner_rect
        if style.crop_marks:
            crop_marks = _crop_marks(inner, *flags)
        if style.guide_lines:
            guide_lines = _guide_lines(dest_rect, inner, *flags)
    if style.corner_marks:
        corner_marks = page_corner_marks(page_width, page_height, page_margin_mm)

    return replace(plan, crop_marks=crop_marks, guide_lines=guide_lines,
                   corner_marks=corner_marks)


def plan_cells(image_width, image_height, options,
               page_margin_mm=PAGE_MARGIN_MM, footer_reserve_mm=FOOTER_RESERVE_MM,
               style=DEFAULT_STYLE):
    """Plan every cell of the grid, row by row."""
    validate_image_size(image_width, image_height)
    validate_options(options)
    return [plan_cell(col, row, image_width, image_height, options,
                      page_margin_mm, footer_reserve_mm, style)
            for row in range(options.rows)
            for col in range(options.columns)]


def plan_summary(image_width, image_height, options,
                 margin_mm=SUMMARY_MARGIN_MM, title_reserve_mm=TITLE_RESERVE_MM,
                 caption_reserve_mm=CAPTION_RESERVE_MM):
    """Place the whole image on one page with the grid drawn over it."""
    validate_image_size(image_width, image_height)
    validate_options(options)
    page_width, page_height = options.page_size
    avail_width, avail_height = _printable_area(
        page_width, page_height, margin_mm, title_reserve_mm + caption_reserve_mm)

    width, height = fit_rect(image_width / image_height, avail_width, avail_height)
    x = margin_mm + (avail_width - width) / 2.0
    y = margin_mm + title_reserve_mm + (avail_height - height) / 2.0
    image_rect = Rect(x, y, width, height)

    cell_width = width / options.columns
    cell_height = height / options.rows
    column_lines = tuple(x + i * cell_width for i in range(options.columns + 1))
    row_lines = tuple(y + i * cell_height for i in range(options.rows + 1))
    labels = tuple(
        CellLabel(cell_code(col, row),
                  x + col * cell_width + cell_width / 2.0,
                  y + row * cell_height + cell_height / 2.0)
        for row in range(options.rows)
        for col in range(options.columns))

    return SummaryPlan(
        page_size=(page_width, page_height),
        image_rect=image_rect,
        column_lines=column_lines,
        row_lines=row_lines,
        labels=labels,
        title_anchor=(page_width / 2.0, margin_mm),
        caption_anchor=(page_width / 2.0, image_rect.bottom + caption_reserve_mm),
        page_count=options.page_count,
    )
