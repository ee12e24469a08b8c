from __future__ import annotations

from typing import Union

import numpy as np

from .geometry import Rectangle

BYTES_PER_PIXEL = 4

PixelSource = Union[bytes, bytearray, memoryview, np.ndarray]


class PixelBuffer:
    """
    Read-only RGBA pixel storage.

    Pixel ``(x, y)`` lives at ``base + y * stride + x * 4`` in the flat byte
    storage, channels ordered R, G, B, A.
    """

    __slots__ = ("_pix", "_width", "_height", "_stride", "_base", "_view")

    def __init__(
        self,
        pix: PixelSource,
        width: int,
        height: int,
        stride: int | None = None,
        base: int = 0,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"buffer dimensions must be non-negative, got {width}x{height}")
        if stride is None:
            stride = width * BYTES_PER_PIXEL
        if stride < width * BYTES_PER_PIXEL:
            raise ValueError(f"stride {stride} is too small for width {width}")
        if base < 0:
            raise ValueError("base offset must be >= 0")

        data = _as_byte_array(pix)
        required = base + (height - 1) * stride + width * BYTES_PER_PIXEL if width and height else 0
        if data.size < required:
            raise ValueError(f"pixel storage holds {data.size} bytes, {required} required")

        data = data.view()
        data.flags.writeable = False

        self._pix = data
        self._width = width
        self._height = height
        self._stride = stride
        self._base = base
        self._view = self._strided_view()

    @classmethod
    def new(cls, width: int, height: int) -> "PixelBuffer":
        """
        Allocate a zero-filled buffer with a compact stride.
        """
        return cls(np.zeros(width * height * BYTES_PER_PIXEL, dtype=np.uint8), width, height)

    @classmethod
    def from_image(cls, image: "PixelBuffer | np.ndarray") -> "PixelBuffer":
        """
        Copy an image into a fresh compact RGBA buffer.

        Accepts another ``PixelBuffer`` or anything ``numpy.asarray`` turns into
        a ``(h, w)``, ``(h, w, 1)``, ``(h, w, 3)`` RGB or ``(h, w, 4)`` RGBA
        array of uint8 or uint16 values (PIL images in L/RGB/RGBA mode included).
        Missing alpha is filled with 255.
        """
        if isinstance(image, PixelBuffer):
            rgba = image.as_array().copy()
        else:
            rgba = _to_rgba(np.asarray(image))
        height, width = rgba.shape[:2]
        return cls(rgba.reshape(-1), width, height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def base(self) -> int:
        return self._base

    @property
    def pix(self) -> np.ndarray:
        return self._pix

    @property
    def bounds(self) -> Rectangle:
        return Rectangle(0, 0, self._width, self._height)

    def pix_offset(self, x: int, y: int) -> int:
        """
        Offset of the first byte of pixel ``(x, y)`` in ``pix``.
        """
        return self._base + y * self._stride + x * BYTES_PER_PIXEL

    def pixel_at(self, x: int, y: int) -> tuple[int, int, int, int]:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} buffer")
        offset = self.pix_offset(x, y)
        r, g, b, a = self._pix[offset : offset + BYTES_PER_PIXEL]
        return int(r), int(g), int(b), int(a)

    def as_array(self) -> np.ndarray:
        """
        Read-only ``(height, width, 4)`` view sharing this buffer's storage.
        """
        return self._view

    def sub_buffer(self, rect: Rectangle) -> "PixelBuffer":
        """
        View of the pixels inside ``rect`` (clipped to the bounds), sharing storage.

        Coordinates inside the returned buffer are relative to the clipped corner.
        """
        clipped = self.bounds.intersect(rect)
        if clipped.is_empty():
            return PixelBuffer(self._pix, 0, 0, self._stride, self._base)
        return PixelBuffer(
            self._pix,
            clipped.width,
            clipped.height,
            self._stride,
            self.pix_offset(clipped.min_x, clipped.min_y),
        )

    def _strided_view(self) -> np.ndarray:
        if self._width == 0 or self._height == 0:
            empty = np.zeros((self._height, self._width, BYTES_PER_PIXEL), dtype=np.uint8)
            empty.flags.writeable = False
            return empty
        item = self._pix.strides[0]
        return np.lib.stride_tricks.as_strided(
            self._pix[self._base :],
            shape=(self._height, self._width, BYTES_PER_PIXEL),
            strides=(self._stride * item, BYTES_PER_PIXEL * item, item),
            writeable=False,
        )

    def __repr__(self) -> str:
        return (
            f"PixelBuffer(width={self._width}, height={self._height}, "
            f"stride={self._stride}, base={self._base})"
        )


def _as_byte_array(pix: PixelSource) -> np.ndarray:
    if isinstance(pix, np.ndarray):
        if pix.dtype != np.uint8:
            raise TypeError(f"pixel storage must be uint8, got {pix.dtype}")
        return np.ascontiguousarray(pix).reshape(-1)
    return np.frombuffer(pix, dtype=np.uint8)


def _to_rgba(array: np.ndarray) -> np.ndarray:
    if array.dtype == np.uint16:
        array = (array >> 8).astype(np.uint8)
    elif array.dtype != np.uint8:
        raise TypeError(f"unsupported pixel dtype {array.dtype}; expected uint8 or uint16")

    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]

    if array.ndim == 2:
        height, width = array.shape
        rgba = np.empty((height, width, BYTES_PER_PIXEL), dtype=np.uint8)
        rgba[:, :, :3] = array[:, :, np.newaxis]
        rgba[:, :, 3] = 0xFF
        return rgba

    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValueError(f"unsupported image shape {array.shape}; expected (h, w), (h, w, 3) or (h, w, 4)")

    height, width, channels = array.shape
    rgba = np.empty((height, width, BYTES_PER_PIXEL), dtype=np.uint8)
    rgba[:, :, :channels] = array
    if channels == 3:
        rgba[:, :, 3] = 0xFF
    return rgba
