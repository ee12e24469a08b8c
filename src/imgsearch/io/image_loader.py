from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ..buffer import PixelBuffer
from ..matching.factory import new_searchable
from ..matching.searchable import Searchable

PathLike = Union[str, Path]

logger = logging.getLogger(__name__)


def load_rgba(path: PathLike) -> PixelBuffer:
    """
    Load an image file as an RGBA pixel buffer.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Unable to load image at {path}")
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ValueError(f"Unable to decode image at {path}")
    logger.debug("decoded %s with shape %s", path, image.shape)
    return _bgr_to_buffer(image)


def decode_rgba(data: bytes) -> PixelBuffer:
    """
    Decode encoded image bytes (PNG and anything else OpenCV reads) into RGBA.
    """
    encoded = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(encoded, cv2.IMREAD_UNCHANGED) if encoded.size else None
    if image is None:
        raise ValueError("Unable to decode image data")
    return _bgr_to_buffer(image)


def load_searchable_png(path: PathLike, tolerance: int = 0) -> Searchable:
    """
    Load a needle image and build the matcher selected by ``tolerance``.
    """
    return new_searchable(load_rgba(path), tolerance)


def _bgr_to_buffer(image: np.ndarray) -> PixelBuffer:
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    if image.ndim == 3 and image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    elif image.ndim == 3 and image.shape[2] == 3:
        image = cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    return PixelBuffer.from_image(image)
