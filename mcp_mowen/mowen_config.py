"""Mowen MCP server settings."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .mowen_errors import ConfigurationError


def load_env_file(env_path: Optional[str] = None) -> bool:
    """Load a .env file (defaults to the project root) into os.environ.

    Existing environment variables are not overridden.
    """
    if env_path is None:
        env_path = str(Path(__file__).resolve().parent.parent / ".env")
    return load_dotenv(env_path, encoding="utf-8-sig")


class MowenSettings:
    """Mowen settings manager."""

    DEFAULTS = {
        'api_key': '',
        'base_url': 'https://open.mowen.cn',
        'timeout': 30.0,
        'log_level': 'INFO',
        'server_host': '127.0.0.1',
        'server_port': 8080,
    }

    ENV_MAPPINGS = {
        'MOWEN_API_KEY': 'api_key',
        'MOWEN_BASE_URL': 'base_url',
        'MOWEN_TIMEOUT': 'timeout',
        'MOWEN_LOG_LEVEL': 'log_level',
        'MOWEN_SERVER_HOST': 'server_host',
        'MOWEN_SERVER_PORT': 'server_port',
    }

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize settings.

        Args:
            config: Optional overrides, applied after environment variables
        """
        self.config = self.DEFAULTS.copy()
        self._load_from_env()

        if config:
            self.config.update(config)

    def _load_from_env(self):
        for env_var, config_key in self.ENV_MAPPINGS.items():
            value = os.environ.get(env_var)
            if not value:
                continue

            if config_key == 'timeout':
                try:
                    value = float(value)
                except ValueError:
                    raise ConfigurationError(f"{env_var} must be a number, got {value!r}")
            elif config_key == 'server_port':
                try:
                    value = int(value)
                except ValueError:
                    raise ConfigurationError(f"{env_var} must be an integer, got {value!r}")

            self.config[config_key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    @property
    def api_key(self) -> str:
        return self.config['api_key']

    @property
    def base_url(self) -> str:
        return self.config['base_url'].rstrip('/')

    @property
    def timeout(self) -> float:
        return float(self.config['timeout'])

    @property
    def log_level(self) -> str:
        return str(self.config['log_level']).upper()

    @property
    def server_host(self) -> str:
        return self.config['server_host']

    @property
    def server_port(self) -> int:
        return int(self.config['server_port'])

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError when it is missing."""
        if not self.api_key:
            raise ConfigurationError("MOWEN_API_KEY environment variable is required")
        return self.api_key

    def validate(self) -> Dict[str, Any]:
        """Validate configuration.

        Returns:
            Validation results with warnings and errors
        """
        results = {
            'valid': True,
            'warnings': [],
            'errors': []
        }

        if not self.api_key:
            results['errors'].append('MOWEN_API_KEY is required')
            results['valid'] = False

        if self.timeout <= 0:
            results['errors'].append('timeout must be positive')
            results['valid'] = False

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.log_level not in valid_log_levels:
            results['warnings'].append('Invalid log_level, using INFO')
            self.config['log_level'] = 'INFO'

        return results
