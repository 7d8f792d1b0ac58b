"""Image encoding for vision requests.

Hides how a decoded frame becomes a compact payload the API accepts:
- Lossy container and quality
- Base64 data-URL wrapping
"""

import base64

import cv2
import numpy as np
from numpy.typing import NDArray

from .errors import EncodingError

JPEG_QUALITY = 80


def encode_jpeg(image: NDArray[np.uint8], quality: int = JPEG_QUALITY) -> bytes:
    """Encode a decoded image as JPEG.

    Args:
        image: Image array in OpenCV layout (HxW grayscale or HxWxC BGR)
        quality: JPEG quality from 0 to 100

    Returns:
        JPEG bytes

    Raises:
        EncodingError: If the array is not an encodable image
    """
    if not isinstance(image, np.ndarray) or image.ndim not in (2, 3) or image.size == 0:
        raise EncodingError("Unable to encode image: expected a non-empty 2D or 3D array")

    try:
        ok, buffer = cv2.imencode(".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, quality])
    except cv2.error as e:
        raise EncodingError(f"Unable to encode image: {e}") from e

    if not ok:
        raise EncodingError("Unable to encode image")
    return buffer.tobytes()


def to_data_url(image: NDArray[np.uint8], quality: int = JPEG_QUALITY) -> str:
    """Encode an image as a ``data:image/jpeg;base64,...`` URL."""
    payload = base64.b64encode(encode_jpeg(image, quality)).decode("ascii")
    return f"data:image/jpeg;base64,{payload}"
