#!/usr/bin/env python

##   _ __  ___ ___| |_ ___ _ _
##  | '_ \/ _ (_-<  _/ -_) '_|
##  | .__/\___/__/\__\___|_|
##  |_|
##
## Split an image, or the first page of a PDF, into a grid of pages that can
## be printed on A4, A3 or Letter paper and taped back together.  Every page
## carries a cell code (A1, B1, ...) and the last page is an assembly guide
## showing the whole image with the grid drawn over it.
##
## Overlap is given in millimetres of the printed page: neighbouring pages
## repeat that much of each other's edge, and crop marks show where the real
## cell boundary lies.
##

import argparse
import sys
from dataclasses import replace

from poster_errors import InputError, PlanError, RenderError
from poster_format import Orientation, PageFormat
from poster_grid import apply_suggestion, suggest_grid
from poster_input import PDF_RASTER_SCALE, PdfRasterizer, load_source
from poster_plan import PAGE_MARGIN_MM, PageStyle, PrintOptions, validate_options
from poster_render import output_filename, parse_color, render_poster


def parse_grid(value):
    """Parse a column or row count for argparse."""
    try:
        count = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"'{value}' is not a whole number") from e
    if count < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {count}")
    return count


def parse_format(value):
    try:
        return PageFormat.parse(value)
    except PlanError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_orientation(value):
    try:
        return Orientation.parse(value)
    except PlanError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser():
    p = argparse.ArgumentParser(
        description="Split an image or the first page of a PDF into printable poster pages",
        epilog="Example: python poster.py -c 3 -r 2 -f A4 --overlap 10 photo.jpg poster.pdf"
    )
    p.add_argument("-c", "--columns", type=parse_grid,
                   help="Number of columns, 1-10 (default: suggested from the image)")
    p.add_argument("-r", "--rows", type=parse_grid,
                   help="Number of rows, 1-10 (default: suggested from the image)")
    p.add_argument("-f", "--format", default=PageFormat.A4, type=parse_format,
                   help="Page format: A4, A3 or Letter (default: A4)")
    p.add_argument("-o", "--orientation", type=parse_orientation,
                   help="portrait or landscape (default: suggested from the image)")
    p.add_argument("--overlap", default=10.0, type=float,
                   help="Overlap between neighbouring pages in mm, 0-50 (default: 10)")
    p.add_argument("--margin", default=PAGE_MARGIN_MM, type=float,
                   help="Page margin in mm (default: 10)")
    p.add_argument("--line-color", default="black", type=str,
                   help="Color of borders and crop marks (default: black)")
    p.add_argument("--grid-color", default="red", type=str,
                   help="Color of the grid on the assembly guide (default: red)")
    p.add_argument("--no-border", action="store_true",
                   help="Do not draw the dashed border around each image")
    p.add_argument("--no-crop-marks", action="store_true",
                   help="Do not draw crop marks at the overlap corners")
    p.add_argument("--guide-lines", action="store_true",
                   help="Draw dotted lines along the cell boundaries inside the overlap")
    p.add_argument("--corner-marks", action="store_true",
                   help="Draw registration marks at the page margin corners")
    p.add_argument("--no-captions", action="store_true",
                   help="Leave out the cell code and page number footer")
    p.add_argument("--pdf-scale", default=PDF_RASTER_SCALE, type=float,
                   help="Upscaling factor used to rasterize PDF input (default: 2.0)")
    p.add_argument("--preview", action="store_true",
                   help="Show the grid and page count without writing a PDF")
    p.add_argument("-q", "--quiet", action="store_true",
                   help="Only print errors")
    p.add_argument("image", help="Input image (JPG, PNG, WEBP) or PDF")
    p.add_argument("output", nargs="?",
                   help="Output PDF file name (default: poster-COLUMNSxROWS.pdf)")
    return p


def resolve_options(args, image_size):
    """Start from the suggested grid and apply whatever was given on the command line."""
    iw, ih = image_size
    suggestion = suggest_grid(iw, ih, args.format)
    options = apply_suggestion(
        PrintOptions(page_format=args.format, overlap_mm=args.overlap), suggestion)
    overrides = {name: getattr(args, name)
                 for name in ("columns", "rows", "orientation")
                 if getattr(args, name) is not None}
    options = replace(options, **overrides)
    validate_options(options)
    return suggestion, options


def build_style(args):
    for color in (args.line_color, args.grid_color):
        parse_color(color)
    return PageStyle(
        border=not args.no_border,
        crop_marks=not args.no_crop_marks,
        guide_lines=args.guide_lines,
        corner_marks=args.corner_marks,
        captions=not args.no_captions,
        line_color=args.line_color,
        grid_color=args.grid_color,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    verbose = not args.quiet

    try:
        style = build_style(args)
        rasterizer = PdfRasterizer(args.pdf_scale)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        image = load_source(args.image, rasterizer)
    except InputError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 1

    try:
        suggestion, options = resolve_options(args, image.size)
    except PlanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if verbose or args.preview:
        print(f"Suggested grid: {suggestion.columns} columns x {suggestion.rows} rows, "
              f"{suggestion.orientation.value}")

    if args.preview:
        print(f"Image size: {image.size[0]}x{image.size[1]} px")
        print(f"Pages needed: {options.columns} columns x {options.rows} rows = "
              f"{options.page_count} total pages + 1 assembly guide")
        print(f"On {options.page_format.value} {options.orientation.value} "
              f"with {options.overlap_mm:g} mm overlap")
        return 0

    output = args.output or output_filename(options)
    try:
        render_poster(image, options, output, style,
                      page_margin_mm=args.margin, verbose=verbose)
    except PlanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except RenderError as e:
        print(f"Output error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
