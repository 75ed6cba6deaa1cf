"""Exceptions raised while planning, loading and rendering a poster."""


class PosterError(Exception):
    pass


class PlanError(PosterError, ValueError):
    """Options or image dimensions rejected before any planning happens."""


class InvalidGridError(PlanError):
    pass


class DegenerateImageError(PlanError):
    pass


class UnsupportedFormatError(PlanError):
    pass


class UnsupportedOrientationError(PlanError):
    pass


class InvalidOverlapError(PlanError):
    pass


class InvalidMarginError(PlanError):
    pass


class InputError(PosterError):
    """The input file could not be turned into a pixel buffer."""


class UnsupportedFileTypeError(InputError):
    pass


class FileTooLargeError(InputError):
    pass


class ImageDecodeError(InputError):
    pass


class RasterizeError(InputError):
    pass


class RenderError(PosterError):
    """Writing the output document failed."""
