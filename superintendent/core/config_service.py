"""
Configuration Service - YAML config with environment variable overrides
"""
import os
import logging
import yaml
from typing import Any, Dict, Optional
from pathlib import Path

from .expression_service import Expression


BACKENDS = ('pygame', 'framebuffer', 'snapshot')

_TRUE_VALUES = ('true', '1', 'yes')


class ConfigService:
    """
    Centralized configuration management with environment overrides.

    Priority order:
    1. Environment variables (highest)
    2. YAML config file
    3. Default values (lowest)
    """

    _instance: Optional['ConfigService'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        """Singleton for global config access"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._config:
            self.reload()

    def reload(self, path: Optional[Path] = None) -> None:
        """
        Load config from file and environment.

        Args:
            path: Explicit YAML file, searched paths are used when omitted
        """
        self._config = self._load_yaml_config(path)
        self._apply_env_overrides()

    def _load_yaml_config(self, path: Optional[Path] = None) -> Dict[str, Any]:
        """Load the first readable YAML file, merged over the defaults"""
        config_paths = [path] if path else [
            Path("/data/config.yaml"),
            Path("config/default.yaml"),
            Path(__file__).parent.parent / "config" / "default.yaml",
        ]

        for config_path in config_paths:
            if config_path.exists():
                try:
                    with open(config_path, 'r') as f:
                        loaded = yaml.safe_load(f) or {}
                    return _merge(self._get_defaults(), loaded)
                except (OSError, yaml.YAMLError) as e:
                    logging.warning(f"Failed to load {config_path}: {e}")

        return self._get_defaults()

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides"""
        if env_tz := os.environ.get('TIMEZONE'):
            self.set('timezone', env_tz)

        if env_width := os.environ.get('DISPLAY_WIDTH'):
            self.set('display.width', int(env_width))

        if env_height := os.environ.get('DISPLAY_HEIGHT'):
            self.set('display.height', int(env_height))

        if env_backend := os.environ.get('DISPLAY_BACKEND'):
            self.set('display.backend', env_backend.lower())

        if env_fullscreen := os.environ.get('DISPLAY_FULLSCREEN'):
            self.set('display.fullscreen', env_fullscreen.lower() in _TRUE_VALUES)

        if env_expression := os.environ.get('EXPRESSION'):
            self.set('expression.initial', env_expression.lower())

        if env_cycle := os.environ.get('EXPRESSION_AUTO_CYCLE'):
            self.set('expression.auto_cycle', env_cycle.lower() in _TRUE_VALUES)

        if env_level := os.environ.get('LOG_LEVEL'):
            self.set('logging.level', env_level.upper())

    def _get_defaults(self) -> Dict[str, Any]:
        """Return default configuration"""
        return {
            'app': {'version': '1.0.0'},
            'timezone': 'UTC',
            'display': {
                'width': 454,
                'height': 454,
                'backend': 'pygame',
                'fullscreen': False,
                'frame_period_ms': 16,
                'ambient_period_ms': 1000,
                'framebuffer_device': '/dev/fb0',
                'snapshot_path': 'superintendent.png',
            },
            'face': {
                'head_radius': 70,
                'icon_width': 40,
            },
            'fonts': {
                'path': '',
                'clock_size': 56,
                'label_size': 20,
                'additional_size': 16,
                'ambient_size': 20,
            },
            'icon': {'path': ''},
            'expression': {
                'initial': 'idle',
                'auto_cycle': False,
                'dwell_ms': 3000,
            },
            'ambient': {'start_mode': False},
            'health': {
                'heartbeat_interval': 5,
                'timeout': 15,
            },
            'logging': {'level': 'INFO'},
        }

    def validate(self) -> None:
        """
        Validate the loaded configuration.

        Raises:
            ValueError: If a value is out of range or unknown
        """
        for key in ('display.width', 'display.height',
                    'display.frame_period_ms', 'display.ambient_period_ms',
                    'face.head_radius', 'face.icon_width',
                    'fonts.clock_size', 'fonts.label_size',
                    'fonts.additional_size', 'fonts.ambient_size'):
            value = self.get(key)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{key} must be a positive number, got {value!r}")

        backend = self.get('display.backend')
        if backend not in BACKENDS:
            raise ValueError(f"display.backend must be one of {', '.join(BACKENDS)}, got {backend!r}")

        initial = str(self.get('expression.initial', 'idle')).upper()
        if initial not in Expression.__members__:
            raise ValueError(f"Unknown expression: {self.get('expression.initial')!r}")

        dwell = self.get('expression.dwell_ms')
        if not isinstance(dwell, int) or dwell <= 0:
            raise ValueError(f"expression.dwell_ms must be a positive integer, got {dwell!r}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value using dot notation
        Example: config.get('display.width')
        """
        value = self._config

        for k in key.split('.'):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration dict"""
        return self._config.copy()

    def set(self, key: str, value: Any) -> None:
        """
        Set config value using dot notation
        Example: config.set('expression.auto_cycle', True)
        """
        keys = key.split('.')
        target = self._config

        for k in keys[:-1]:
            target = target.setdefault(k, {})

        target[keys[-1]] = value


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base, returning base"""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


# Global instance
config = ConfigService()
