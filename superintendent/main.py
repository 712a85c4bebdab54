"""
Main entry point for the Superintendent watch face
"""
import sys
import signal
import threading
from pathlib import Path
from typing import Optional

from superintendent.core.config_service import config
from superintendent.core.clock_service import ClockService
from superintendent.core.expression_service import ExpressionService
from superintendent.core.health_service import HealthService
from superintendent.core.logging_service import get_logger
from superintendent.hardware.display_info import DisplayInfo
from superintendent.hardware.framebuffer import FramebufferWriter
from superintendent.ui.assets import AssetLoader
from superintendent.ui.render_mode import AMBIENT, INTERACTIVE
from superintendent.ui.renderer import FaceRenderer, render_image


class Application:
    """
    Wires config, services, renderer and the selected display backend.
    """

    def __init__(self):
        config.reload()
        config.validate()

        self._logger = get_logger('superintendent', config.get('logging.level', 'INFO'))
        self._logger.log_startup(config.get('app.version', '1.0.0'), self._get_config_summary())

        self._clock_service: Optional[ClockService] = None
        self._expression_service: Optional[ExpressionService] = None
        self._health_service: Optional[HealthService] = None
        self._renderer: Optional[FaceRenderer] = None
        self._main_window = None
        self._stop_event = threading.Event()

    def _get_config_summary(self) -> dict:
        return {
            'timezone': config.get('timezone', 'UTC'),
            'display': {
                'width': config.get('display.width'),
                'height': config.get('display.height'),
                'backend': config.get('display.backend'),
            },
            'expression': config.get('expression.initial', 'idle'),
            'auto_cycle': config.get('expression.auto_cycle', False),
        }

    def _initialize_services(self) -> None:
        self._logger.info("Initializing services")

        self._clock_service = ClockService(config.get('timezone', 'UTC'))
        self._logger.info(f"Clock service initialized: timezone={self._clock_service.timezone}")

        self._expression_service = ExpressionService(
            initial=config.get('expression.initial', 'idle'),
            auto_cycle=config.get('expression.auto_cycle', False),
            dwell_ms=config.get('expression.dwell_ms', 3000),
        )

        self._health_service = HealthService(
            config.get('health.heartbeat_interval', 5),
            config.get('health.timeout', 15),
            self._logger,
        )
        self._health_service.set_freeze_callback(self._on_freeze)
        self._health_service.set_recover_callback(self._on_recover)

    def _initialize_renderer(self) -> None:
        """Resolve fonts and icon, then build the renderer"""
        loader = AssetLoader(config.get('fonts.path', ''), config.get('icon.path', ''), self._logger)
        styles = loader.paint_styles(
            clock_size=config.get('fonts.clock_size'),
            label_size=config.get('fonts.label_size'),
            additional_size=config.get('fonts.additional_size'),
            ambient_size=config.get('fonts.ambient_size'),
        )
        self._renderer = FaceRenderer(
            styles,
            head_radius=config.get('face.head_radius'),
            icon_width=config.get('face.icon_width'),
            logger=self._logger,
        )
        self._logger.info("Renderer initialized")

    def _on_freeze(self) -> None:
        self._logger.error("RENDER LOOP FREEZE DETECTED - no frame within timeout")

    def _on_recover(self) -> None:
        self._logger.info("Render loop recovered from freeze")

    def _setup_signal_handlers(self) -> None:
        def signal_handler(signum, frame):
            self._logger.info(f"Received signal {signum}, shutting down")
            self.shutdown()
            sys.exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def _params(self):
        return AMBIENT if config.get('ambient.start_mode', False) else INTERACTIVE

    def _run_window(self) -> None:
        from superintendent.ui.main_window import MainWindow

        self._main_window = MainWindow(
            renderer=self._renderer,
            clock_service=self._clock_service,
            expression_service=self._expression_service,
            health_service=self._health_service,
            logger=self._logger,
            width=config.get('display.width'),
            height=config.get('display.height'),
            fullscreen=config.get('display.fullscreen', False),
            frame_period_ms=config.get('display.frame_period_ms', 16),
            ambient_period_ms=config.get('display.ambient_period_ms', 1000),
            start_ambient=config.get('ambient.start_mode', False),
        )
        self._main_window.initialize()
        self._main_window.start()

    def _run_framebuffer(self) -> None:
        """Render straight to the framebuffer until stopped"""
        display_info = DisplayInfo(
            fallback_size=(config.get('display.width'), config.get('display.height')))
        width, height = display_info.detect()
        self._logger.info(f"Framebuffer display: {display_info}")

        writer = FramebufferWriter(config.get('display.framebuffer_device', '/dev/fb0'),
                                   (width, height), display_info.bits_per_pixel(), self._logger)
        params = self._params()
        period_key = 'display.ambient_period_ms' if params.is_ambient else 'display.frame_period_ms'
        period = config.get(period_key, 1000) / 1000

        self._health_service.start_monitoring()
        while not self._stop_event.is_set():
            try:
                now = self._clock_service.get_current_time()
                image = render_image(self._renderer, width, height, now, params,
                                     self._expression_service.current(now))
                if writer.write(image):
                    self._health_service.heartbeat()
            except Exception as e:
                self._logger.error(f"Frame render error: {e}", exc_info=True)
            self._stop_event.wait(period)

    def _run_snapshot(self) -> Path:
        """Render one frame to a PNG file"""
        path = Path(config.get('display.snapshot_path', 'superintendent.png'))
        now = self._clock_service.get_current_time()
        image = render_image(self._renderer, config.get('display.width'), config.get('display.height'),
                             now, self._params(), self._expression_service.current(now))
        image.save(path)
        self._logger.info(f"Snapshot written to {path}")
        return path

    def run(self) -> None:
        try:
            self._setup_signal_handlers()
            self._initialize_services()
            self._initialize_renderer()

            backend = config.get('display.backend', 'pygame')
            self._logger.info(f"Application started, backend={backend}")

            if backend == 'snapshot':
                self._run_snapshot()
            elif backend == 'framebuffer':
                self._run_framebuffer()
            else:
                self._run_window()

        except KeyboardInterrupt:
            self._logger.info("Keyboard interrupt received")
        except Exception as e:
            self._logger.critical(f"Fatal error: {e}", exc_info=True)
            raise
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        if self._stop_event.is_set():
            return
        self._stop_event.set()
        self._logger.info("Shutting down application")

        if self._main_window and self._main_window.is_running():
            self._main_window.stop()

        if self._health_service:
            self._health_service.stop_monitoring()

        self._logger.log_shutdown()


def main():
    app = Application()
    app.run()


if __name__ == '__main__':
    main()
