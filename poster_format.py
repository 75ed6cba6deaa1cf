"""Page formats and orientation.

All page geometry is kept in millimetres, portrait first.  The renderer is
the only place that converts to PDF points.
"""

from enum import Enum

from poster_errors import UnsupportedFormatError, UnsupportedOrientationError


class PageFormat(Enum):
    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"

    @classmethod
    def parse(cls, value):
        """Accept a PageFormat or its name ('a4', 'Letter', ...)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise UnsupportedFormatError(
            f"Unsupported page format {value!r}. Use one of: "
            + ", ".join(m.value for m in cls))


class Orientation(Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        raise UnsupportedOrientationError(
            f"Unsupported orientation {value!r}. Use 'portrait' or 'landscape'")


# portrait (width, height) in mm
PAGE_FORMATS = {
    PageFormat.A4: (210.0, 297.0),
    PageFormat.A3: (297.0, 420.0),
    PageFormat.LETTER: (216.0, 279.0),
}


def resolve_page_size(page_format, orientation):
    """Return (width_mm, height_mm) of a page in the given orientation."""
    width, height = PAGE_FORMATS[PageFormat.parse(page_format)]
    if Orientation.parse(orientation) is Orientation.LANDSCAPE:
        return height, width
    return width, height


def mm_to_pt(length):
    return (72.0 * length) / 25.4


def pt_to_mm(length):
    return (25.4 * length) / 72.0
