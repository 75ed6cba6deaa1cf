"""Suggest a grid for an image so every cell nearly fills a page."""

import math
from dataclasses import replace
from typing import NamedTuple

from poster_format import Orientation, PageFormat, resolve_page_size
from poster_plan import MAX_GRID, MIN_GRID, validate_image_size


class GridSuggestion(NamedTuple):
    columns: int
    rows: int
    orientation: Orientation


def _clamp(value, lo=MIN_GRID, hi=MAX_GRID):
    return min(hi, max(lo, value))


def suggest_grid(image_width, image_height, page_format=PageFormat.A4):
    """Pick columns, rows and orientation for an image.

    Wide images get landscape pages.  The grid is chosen so the cell aspect
    ratio approximates the page aspect ratio; this is a heuristic, not an
    optimal packing.
    """
    validate_image_size(image_width, image_height)
    image_aspect = image_width / image_height
    orientation = Orientation.LANDSCAPE if image_aspect > 1 else Orientation.PORTRAIT

    page_width, page_height = resolve_page_size(page_format, orientation)
    page_aspect = page_width / page_height

    if image_aspect > page_aspect:
        columns = math.ceil(image_width / (image_height * page_aspect))
        rows = max(1, math.ceil(columns / image_aspect))
    else:
        rows = math.ceil(image_height / (image_width / page_aspect))
        columns = max(1, math.ceil(rows * image_aspect))

    return GridSuggestion(_clamp(columns), _clamp(rows), orientation)


def apply_suggestion(options, suggestion):
    """Return options with the suggested grid and orientation filled in."""
    return replace(options, columns=suggestion.columns, rows=suggestion.rows,
                   orientation=suggestion.orientation)
