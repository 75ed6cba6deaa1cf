"""Turn an input file into a Pillow RGB image.

Images are decoded with Pillow.  PDFs are flattened: only the first page is
rendered, at a fixed upscaling factor, with PyMuPDF.
"""

import mimetypes
import os

import fitz
from PIL import Image, ImageOps, UnidentifiedImageError

from poster_errors import (FileTooLargeError, ImageDecodeError, InputError,
                           RasterizeError, UnsupportedFileTypeError)

PDF_MIME = "application/pdf"
IMAGE_MIMES = ("image/jpeg", "image/png", "image/webp")
ACCEPTED_TYPES = IMAGE_MIMES + (PDF_MIME,)

MAX_INPUT_BYTES = 100 * 1024 * 1024
PDF_RASTER_SCALE = 2.0

_EXTENSIONS = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".pdf": PDF_MIME,
}


def detect_mime_type(path):
    ext = os.path.splitext(str(path))[1].lower()
    if ext in _EXTENSIONS:
        return _EXTENSIONS[ext]
    mime, _ = mimetypes.guess_type(str(path))
    return mime


def validate_input_file(path, max_bytes=MAX_INPUT_BYTES):
    """Check that path exists, has an accepted type and is not too large.

    Returns the detected MIME type.
    """
    if not os.path.isfile(path):
        raise InputError(f"Input file not found: {path}")
    mime = detect_mime_type(path)
    if mime not in ACCEPTED_TYPES:
        raise UnsupportedFileTypeError(
            f"Unsupported file type {mime or 'unknown'} for {path}. Use JPG, PNG, WEBP or PDF.")
    size = os.path.getsize(path)
    if size > max_bytes:
        raise FileTooLargeError(
            f"{path} is {size / (1024 * 1024):.1f} MB, the maximum is {max_bytes // (1024 * 1024)} MB")
    return mime


class PdfRasterizer:
    """Renders the first page of a PDF to a raster image.

    Create one at startup and pass it to load_source(); there is no global
    renderer state.
    """

    def __init__(self, scale=PDF_RASTER_SCALE):
        if scale <= 0:
            raise ValueError(f"PDF raster scale must be positive, got {scale}")
        self.scale = scale

    def rasterize_first_page(self, path):
        try:
            with fitz.open(str(path)) as doc:
                if doc.page_count < 1:
                    raise RasterizeError(f"{path} has no pages")
                pix = doc[0].get_pixmap(matrix=fitz.Matrix(self.scale, self.scale), alpha=False)
                return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except RasterizeError:
            raise
        except (RuntimeError, ValueError) as e:
            raise RasterizeError(f"Could not render the first page of {path}: {e}") from e


def load_image(path):
    """Decode an image file, honour its EXIF orientation and convert to RGB."""
    try:
        with Image.open(path) as im:
            im = ImageOps.exif_transpose(im)
            return im.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageDecodeError(f"Could not decode {path}: {e}") from e


def load_source(path, rasterizer=None):
    """Validate path and return its pixels as an RGB image."""
    mime = validate_input_file(path)
    if mime == PDF_MIME:
        if rasterizer is None:
            rasterizer = PdfRasterizer()
        return rasterizer.rasterize_first_page(path)
    return load_image(path)
