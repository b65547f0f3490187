# renderer/framebuffer.py
import os
import warnings
import numpy as np
from PIL import Image
from core.vector import Vector3
from core.errors import (ColorRangeWarning, FramebufferConfigError,
                         ImageFormatError, PixelOutOfRangeError)

MAX_CHANNEL = 255

class Framebuffer:
    """
    A fixed-size grid of RGB colours stored in one flat float32 array.

    Pixel (x, y) lives at index x + y * width; y = 0 is the bottom row.
    Dimensions never change after construction.
    """
    def __init__(self, width: int, height: int, fill: Vector3 = None):
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise FramebufferConfigError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise FramebufferConfigError(f"{name} must be positive, got {value}")
        self.width = int(width)
        self.height = int(height)
        self.buffer = np.empty((self.width * self.height, 3), dtype=np.float32)
        self.clear(fill)

    def clear(self, fill: Vector3 = None):
        """Overwrite every pixel with `fill` (black if omitted)."""
        if fill is None:
            fill = Vector3(0.0, 0.0, 0.0)
        self.buffer[:] = fill.as_tuple()

    def index(self, x: int, y: int) -> int:
        """Flat buffer index of pixel (x, y), bounds-checked."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise PixelOutOfRangeError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        return int(x) + int(y) * self.width

    def set_pixel(self, x: int, y: int, color: Vector3):
        self.buffer[self.index(x, y)] = color.as_tuple()

    def get_pixel(self, x: int, y: int) -> Vector3:
        r, g, b = self.buffer[self.index(x, y)]
        return Vector3(float(r), float(g), float(b))

    def to_array(self) -> np.ndarray:
        """
        Copy of the pixels as a (height, width, 3) array in export order:
        the first row is y = height - 1.
        """
        return self.buffer.reshape(self.height, self.width, 3)[::-1].copy()

    def to_channels(self, clamp: bool = True) -> np.ndarray:
        """
        Integer channel values in export order. Each component is scaled by
        255 and truncated toward zero; with `clamp` the result is limited
        to [0, 255]. NaN maps to 0 and infinities to 0 or 255.
        """
        scaled = self.to_array().astype(np.float64) * MAX_CHANNEL
        channels = np.trunc(np.nan_to_num(scaled, nan=0.0, posinf=MAX_CHANNEL, neginf=0.0))
        if clamp:
            channels = np.clip(channels, 0, MAX_CHANNEL)
        return channels.astype(np.int64)

    def write_ppm(self, destination, clamp: bool = True):
        """
        Write the framebuffer as a plain-text P3 image.

        `destination` is a path or an open text stream. Rows go out top to
        bottom (y = height - 1 first), one pixel triple per line. With
        `clamp=False` out-of-range colours are written as-is and a
        ColorRangeWarning is issued.
        """
        channels = self.to_channels(clamp=clamp)
        if not clamp:
            if not np.isfinite(self.buffer).all():
                warnings.warn("non-finite colour components written as 0 or 255",
                              ColorRangeWarning, stacklevel=2)
            if channels.min() < 0 or channels.max() > MAX_CHANNEL:
                warnings.warn(
                    f"channel values span [{channels.min()}, {channels.max()}], "
                    f"outside [0, {MAX_CHANNEL}]", ColorRangeWarning, stacklevel=2)

        lines = [f"P3 {self.width} {self.height} {MAX_CHANNEL}\n"]
        lines.extend(f"{r} {g} {b}\n" for r, g, b in channels.reshape(-1, 3).tolist())

        if hasattr(destination, "write"):
            destination.writelines(lines)
            return
        with open(destination, "w") as out:
            out.writelines(lines)

    def save_image(self, path: str):
        """Save the clamped channels in any format Pillow infers from `path` (e.g. PNG)."""
        pixels = self.to_channels(clamp=True).astype(np.uint8)
        Image.fromarray(pixels).save(path)

    def __repr__(self) -> str:
        return f"Framebuffer({self.width}x{self.height})"

def _ppm_tokens(text: str):
    for line in text.splitlines():
        for token in line.split('#', 1)[0].split():
            yield token

def read_ppm(source) -> Framebuffer:
    """
    Parse a P3 image (path or text stream) back into a Framebuffer. Colours
    are channel / maxval, so a written image reads back within 1/255.
    """
    if hasattr(source, "read"):
        text = source.read()
        name = getattr(source, "name", "<stream>")
    else:
        if not os.path.exists(source):
            raise FileNotFoundError(f"Image file not found: {source}")
        with open(source, "r") as f:
            text = f.read()
        name = source

    tokens = _ppm_tokens(text)
    try:
        magic = next(tokens)
        if magic != "P3":
            raise ImageFormatError(f"{name}: expected P3 image, found {magic!r}")
        width = int(next(tokens))
        height = int(next(tokens))
        maxval = int(next(tokens))
        if maxval <= 0:
            raise ImageFormatError(f"{name}: invalid max value {maxval}")
        values = [int(t) for t in tokens]
    except StopIteration:
        raise ImageFormatError(f"{name}: truncated header") from None
    except ValueError as e:
        if isinstance(e, ImageFormatError):
            raise
        raise ImageFormatError(f"{name}: {e}") from e

    try:
        frame = Framebuffer(width, height)
    except FramebufferConfigError as e:
        raise ImageFormatError(f"{name}: {e}") from e
    expected = width * height * 3
    if len(values) != expected:
        raise ImageFormatError(f"{name}: expected {expected} channel values, found {len(values)}")

    rows = np.asarray(values, dtype=np.float32).reshape(height, width, 3) / maxval
    # File rows run top to bottom; storage rows run bottom to top
    frame.buffer[:] = rows[::-1].reshape(-1, 3)
    return frame
