"""
Framebuffer - Write rendered frames straight to a Linux framebuffer device
"""
import numpy as np
from PIL import Image

from ..core.logging_service import LoggingService, get_logger


def to_rgb565(image: Image.Image) -> bytes:
    """
    Convert an image to little-endian RGB565.

    Args:
        image: Any PIL image, converted to RGB first

    Returns:
        Two bytes per pixel, row-major
    """
    rgb = image.convert('RGB')
    arr = np.asarray(rgb, dtype=np.uint8)
    r = (arr[:, :, 0] >> 3).astype(np.uint16)
    g = (arr[:, :, 1] >> 2).astype(np.uint16)
    b = (arr[:, :, 2] >> 3).astype(np.uint16)
    return ((r << 11) | (g << 5) | b).astype('<u2').tobytes()


def encode_frame(image: Image.Image, bits_per_pixel: int) -> bytes:
    """Encode an image in the framebuffer's pixel format"""
    if bits_per_pixel == 16:
        return to_rgb565(image)
    if bits_per_pixel == 32:
        return image.convert('RGBA').tobytes('raw', 'BGRA')
    return image.convert('RGB').tobytes('raw', 'BGR')


class FramebufferWriter:
    """
    Full-frame writer for /dev/fbN.
    """

    def __init__(self, device: str = '/dev/fb0', size=(454, 454), bits_per_pixel: int = 16,
                 logger=None):
        """
        Args:
            device: Framebuffer device path
            size: Framebuffer (width, height); frames of another size are scaled
            bits_per_pixel: 16, 24 or 32
        """
        self._device = device
        self._size = tuple(size)
        self._bpp = bits_per_pixel
        self._logger: LoggingService = logger or get_logger()

    def write(self, image: Image.Image) -> bool:
        """
        Write one frame.

        Returns:
            True on success, False if the device could not be written
        """
        if image.size != self._size:
            image = image.resize(self._size)
        try:
            with open(self._device, 'wb') as fb:
                fb.write(encode_frame(image, self._bpp))
            return True
        except OSError as e:
            self._logger.error(f"Failed to write to framebuffer {self._device}: {e}")
            return False

    @property
    def size(self):
        return self._size
