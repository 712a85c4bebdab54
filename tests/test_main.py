"""
Tests for main.py — application wiring through the snapshot and framebuffer backends.
"""
import signal

import pytest
from PIL import Image

from superintendent import main
from superintendent.core.config_service import config
from superintendent.hardware.display_info import DisplayInfo
from superintendent.hardware.framebuffer import FramebufferWriter
from superintendent.main import Application


@pytest.fixture
def snapshot_app(monkeypatch, tmp_path):
    monkeypatch.setattr(signal, 'signal', lambda *args: None)
    monkeypatch.setenv('DISPLAY_BACKEND', 'snapshot')
    monkeypatch.setenv('DISPLAY_WIDTH', '240')
    monkeypatch.setenv('DISPLAY_HEIGHT', '240')
    app = Application()
    config.set('display.snapshot_path', str(tmp_path / 'face.png'))
    yield app
    monkeypatch.undo()
    config.reload()


def test_snapshot_backend_writes_png(snapshot_app, tmp_path):
    snapshot_app.run()

    image = Image.open(tmp_path / 'face.png')
    assert image.size == (240, 240)
    assert image.getpixel((1, 1)) == (0, 0, 0)


def test_invalid_config_fails_fast(monkeypatch):
    monkeypatch.setenv('EXPRESSION', 'sleepy')
    with pytest.raises(ValueError):
        Application()
    monkeypatch.undo()
    config.reload()


def test_framebuffer_backend_writes_frames(monkeypatch, tmp_path):
    monkeypatch.setattr(signal, 'signal', lambda *args: None)
    monkeypatch.setenv('DISPLAY_BACKEND', 'framebuffer')
    monkeypatch.setenv('DISPLAY_WIDTH', '240')
    monkeypatch.setenv('DISPLAY_HEIGHT', '240')
    monkeypatch.setattr(main, 'DisplayInfo',
                        lambda **kwargs: DisplayInfo(tmp_path / 'sysfs', **kwargs))

    app = Application()
    device = tmp_path / 'fb0'
    config.set('display.framebuffer_device', str(device))
    writes = []

    class StoppingWriter(FramebufferWriter):
        def write(self, image):
            writes.append(image.size)
            ok = super().write(image)
            app.shutdown()
            return ok

    monkeypatch.setattr(main, 'FramebufferWriter', StoppingWriter)

    app.run()

    assert writes == [(240, 240)]
    assert len(device.read_bytes()) == 240 * 240 * 2
    assert app._health_service.get_status()['monitoring'] is False

    monkeypatch.undo()
    config.reload()
