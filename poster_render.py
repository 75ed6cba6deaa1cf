"""Draw planned cells and the assembly guide into a PDF with reportlab."""

from reportlab.lib import colors
from reportlab.lib.colors import Color
from reportlab.pdfgen import canvas

from poster_errors import RenderError
from poster_format import mm_to_pt
from poster_plan import (DEFAULT_STYLE, FOOTER_RESERVE_MM, PAGE_MARGIN_MM,
                         plan_cells, plan_summary)

SUMMARY_TITLE = "Assembly guide"
SUMMARY_CAPTION = "Print all {pages} pages and assemble them following the codes shown."

CAPTION_GREY = Color(0.4, 0.4, 0.4)
FOOTER_BASELINE_MM = 5.0


def parse_color(color_str):
    """Parse color string (e.g., 'red', '#RRGGBB') into a reportlab Color object."""
    if color_str.startswith('#'):
        hex_color = color_str[1:]
        if len(hex_color) == 6:
            try:
                r = int(hex_color[0:2], 16) / 255.0
                g = int(hex_color[2:4], 16) / 255.0
                b = int(hex_color[4:6], 16) / 255.0
            except ValueError as e:
                raise ValueError(f"Invalid hex color format: {color_str}. Use #RRGGBB.") from e
            return Color(r, g, b)
        else:
            raise ValueError(f"Invalid hex color format: {color_str}. Use #RRGGBB.")
    else:
        color = getattr(colors, color_str.lower(), None)
        if isinstance(color, Color):
            return color
        raise ValueError(f"Unknown color name: {color_str}")


def output_filename(options):
    return f"poster-{options.columns}x{options.rows}.pdf"


def pixel_box(crop, image_size):
    """Snap a fractional crop rectangle to a non-empty pixel box inside the image."""
    iw, ih = image_size
    left = min(int(round(crop.x)), iw - 1)
    upper = min(int(round(crop.y)), ih - 1)
    right = min(max(int(round(crop.x + crop.width)), left + 1), iw)
    lower = min(max(int(round(crop.y + crop.height)), upper + 1), ih)
    return left, upper, right, lower


class PageSpace:
    """Maps top-left millimetre coordinates onto reportlab's bottom-left points."""

    def __init__(self, page_width, page_height):
        self.page_width = page_width
        self.page_height = page_height

    @property
    def pagesize(self):
        return mm_to_pt(self.page_width), mm_to_pt(self.page_height)

    def point(self, x, y):
        return mm_to_pt(x), mm_to_pt(self.page_height - y)

    def rect(self, r):
        """(x, y, width, height) in points, y measured to the bottom edge."""
        return (mm_to_pt(r.x), mm_to_pt(self.page_height - r.y - r.height),
                mm_to_pt(r.width), mm_to_pt(r.height))

    def line(self, c, line):
        x1, y1 = self.point(line.x1, line.y1)
        x2, y2 = self.point(line.x2, line.y2)
        c.line(x1, y1, x2, y2)


def drawRectangle(c, minx, miny, maxx, maxy):
    c.line(minx, miny, maxx, miny)
    c.line(minx, maxy, maxx, maxy)
    c.line(minx, miny, minx, maxy)
    c.line(maxx, miny, maxx, maxy)


def draw_cell_page(c, image, plan, space, page_count, style=DEFAULT_STYLE,
                   page_margin_mm=PAGE_MARGIN_MM):
    line_color = parse_color(style.line_color)

    box = pixel_box(plan.source_crop, image.size)
    x, y, w, h = space.rect(plan.dest_rect)
    with image.crop(box) as segment:
        c.drawInlineImage(segment, x, y, width=w, height=h)

    c.setStrokeColor(line_color)

    if plan.border is not None:
        c.setLineWidth(1)
        c.setDash(6, 3)
        bx, by, bw, bh = space.rect(plan.border)
        drawRectangle(c, bx, by, bx + bw, by + bh)

    if plan.guide_lines:
        c.setLineWidth(1)
        c.setDash(1, 8)
        for line in plan.guide_lines:
            space.line(c, line)

    c.setDash()
    c.setLineWidth(0.5)
    for line in plan.crop_marks + plan.corner_marks:
        space.line(c, line)

    if style.captions:
        c.setFillColor(colors.black)
        c.setFont("Helvetica-Bold", 16)
        c.drawCentredString(*space.point(space.page_width / 2.0,
                                         space.page_height - FOOTER_BASELINE_MM),
                            plan.cell_code)
        c.setFillColor(CAPTION_GREY)
        c.setFont("Helvetica", 8)
        c.drawString(*space.point(page_margin_mm, space.page_height - FOOTER_BASELINE_MM),
                     f"Page {plan.index + 1}/{page_count}")

    return box


def draw_summary_page(c, image, summary, space, style=DEFAULT_STYLE):
    grid_color = parse_color(style.grid_color)

    c.setFillColor(colors.black)
    c.setFont("Helvetica-Bold", 16)
    c.drawCentredString(*space.point(*summary.title_anchor), SUMMARY_TITLE)

    x, y, w, h = space.rect(summary.image_rect)
    c.drawInlineImage(image, x, y, width=w, height=h)

    rect = summary.image_rect
    c.setStrokeColor(grid_color)
    c.setLineWidth(0.5)
    c.setDash()
    for gx in summary.column_lines:
        c.line(*space.point(gx, rect.y), *space.point(gx, rect.bottom))
    for gy in summary.row_lines:
        c.line(*space.point(rect.x, gy), *space.point(rect.right, gy))

    # nudge the baseline so the label sits centred on the cell
    c.setFillColor(grid_color)
    c.setFont("Helvetica", 10)
    for label in summary.labels:
        lx, ly = space.point(label.x, label.y)
        c.drawCentredString(lx, ly - 3.5, label.code)

    c.setFillColor(colors.black)
    c.setFont("Helvetica", 10)
    c.drawCentredString(*space.point(*summary.caption_anchor),
                        SUMMARY_CAPTION.format(pages=summary.page_count))


def render_poster(image, options, output, style=DEFAULT_STYLE,
                  page_margin_mm=PAGE_MARGIN_MM, footer_reserve_mm=FOOTER_RESERVE_MM,
                  verbose=True):
    """Write one page per cell plus the assembly guide to output.

    image is a Pillow RGB image; output is a file name or a binary file
    object.  Returns the number of pages written.
    """
    iw, ih = image.size
    plans = plan_cells(iw, ih, options, page_margin_mm, footer_reserve_mm, style)
    summary = plan_summary(iw, ih, options)

    space = PageSpace(*options.page_size)
    if verbose:
        print(f"Image size: {iw}x{ih} px")
        print(f"Page: {options.page_format.value} {options.orientation.value} "
              f"({space.page_width:g} x {space.page_height:g} mm)")
        print(f"Grid: {options.columns} columns x {options.rows} rows, "
              f"overlap {options.overlap_mm:g} mm")

    c = canvas.Canvas(output, pagesize=space.pagesize)
    page_count = len(plans)
    for plan in plans:
        left, upper, right, lower = draw_cell_page(
            c, image, plan, space, page_count, style, page_margin_mm)
        if verbose:
            print(f"Page {plan.index + 1:2d}: cell {plan.cell_code} has size "
                  f"{right - left}x{lower - upper} at ({left},{upper})")
        c.showPage()

    draw_summary_page(c, image, summary, space, style)
    c.showPage()

    try:
        c.save()
    except OSError as e:
        raise RenderError(f"Could not write {output}: {e}") from e

    if verbose:
        print(f"PDF saved as: {output}")
        print(f"Total pages: {page_count} + 1 assembly guide")
    return page_count + 1
