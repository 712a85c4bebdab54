"""
Display Info - Framebuffer geometry from sysfs
"""
from pathlib import Path
from typing import Dict, Optional, Tuple


SYSFS_FB = Path('/sys/class/graphics/fb0')


class DisplayInfo:
    """
    Framebuffer resolution and pixel depth, with configured fallbacks.
    """

    def __init__(self, sysfs_dir: Path = SYSFS_FB,
                 fallback_size: Tuple[int, int] = (454, 454), fallback_bpp: int = 16):
        """
        Args:
            sysfs_dir: Directory holding virtual_size and bits_per_pixel
            fallback_size: Size used when sysfs is unreadable
            fallback_bpp: Bits per pixel used when sysfs is unreadable
        """
        self._sysfs_dir = Path(sysfs_dir)
        self._fallback_size = fallback_size
        self._fallback_bpp = fallback_bpp
        self._size: Optional[Tuple[int, int]] = None
        self._bpp: Optional[int] = None
        self._detected = False

    def detect(self) -> Tuple[int, int]:
        """
        Read the framebuffer size.

        Returns:
            Tuple of (width, height) in pixels
        """
        if self._size is not None:
            return self._size

        try:
            raw = (self._sysfs_dir / 'virtual_size').read_text().strip()
            width, height = (int(part) for part in raw.split(','))
            self._size = (width, height)
            self._detected = True
        except (OSError, ValueError):
            self._size = self._fallback_size
        return self._size

    def bits_per_pixel(self) -> int:
        if self._bpp is not None:
            return self._bpp

        try:
            self._bpp = int((self._sysfs_dir / 'bits_per_pixel').read_text().strip())
        except (OSError, ValueError):
            self._bpp = self._fallback_bpp
        return self._bpp

    def get_info(self) -> Dict[str, object]:
        width, height = self.detect()
        return {
            'width': width,
            'height': height,
            'bits_per_pixel': self.bits_per_pixel(),
            'round': width == height,
            'detected': self._detected,
        }

    def __str__(self) -> str:
        width, height = self.detect()
        return f"{width}x{height}@{self.bits_per_pixel()}bpp"
