# core/errors.py

class RasterError(Exception):
    """Base class for rasterizer and framebuffer failures."""

class FramebufferConfigError(RasterError, ValueError):
    """Raised for non-positive or non-integer framebuffer dimensions."""

class RasterizerConfigError(RasterError, ValueError):
    """Raised for invalid rasterizer thresholds or an unknown backend."""

class PixelOutOfRangeError(RasterError, IndexError):
    """Raised when a pixel address falls outside the framebuffer."""

class ImageFormatError(RasterError, ValueError):
    """Raised when a PPM image or OBJ scene cannot be parsed."""

class ColorRangeWarning(UserWarning):
    """Issued when unclamped export produces channels outside [0, 255]."""
