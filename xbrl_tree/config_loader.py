# Path: xbrl_tree/config_loader.py
"""
Configuration Loader for xbrl_tree

Loads configuration from a .env file and the process environment.
Singleton pattern ensures consistent configuration across all components.

The .env file is looked up at XBRL_TREE_ENV_FILE when set, otherwise in
the project root (the directory holding the xbrl_tree package). Values
already present in the environment win over the file.

Only the command line and the loaders read configuration; the hierarchy
engine receives its settings as arguments.
"""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

DEFAULT_ENVIRONMENT: str = 'development'
DEFAULT_LOG_LEVEL: str = 'INFO'
DEFAULT_TABLE_FORMAT: str = 'csv'
DEFAULT_LABEL_LANG: str = 'en-US'
DEFAULT_PATH_ID_WIDTH: int = 2
DEFAULT_PERIOD_ORDER: str = 'ascending'

ENV_FILE_VAR: str = 'XBRL_TREE_ENV_FILE'


class ConfigLoader:
    """
    Singleton configuration loader for xbrl_tree.

    Example:
        config = ConfigLoader()
        tables_dir = config.get('tables_dir')     # Path or None
        width = config.get('path_id_width')       # int
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern.
        """
        if ConfigLoader._initialized:
            return

        env_path = self._find_env_file()
        if env_path is not None:
            load_dotenv(dotenv_path=env_path, interpolate=True)
        self.env_path = env_path

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    @staticmethod
    def _find_env_file() -> Optional[Path]:
        """Explicit XBRL_TREE_ENV_FILE, else .env in the project root."""
        explicit = os.getenv(ENV_FILE_VAR)
        if explicit:
            path = Path(os.path.expandvars(explicit)).expanduser()
            return path if path.exists() else None

        # xbrl_tree/config_loader.py -> project root is two levels up
        project_root = Path(__file__).resolve().parent.parent
        env_path = project_root / '.env'
        return env_path if env_path.exists() else None

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT
            # ================================================================
            'environment': self._get_env('XBRL_TREE_ENVIRONMENT', DEFAULT_ENVIRONMENT),

            # ================================================================
            # INPUT / OUTPUT PATHS
            # ================================================================
            'tables_dir': self._get_path('XBRL_TREE_TABLES_DIR'),
            'table_format': self._get_env(
                'XBRL_TREE_TABLE_FORMAT', DEFAULT_TABLE_FORMAT
            ).lower(),
            'output_dir': self._get_path('XBRL_TREE_OUTPUT_DIR'),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('XBRL_TREE_LOG_DIR'),
            'log_level': self._get_env('XBRL_TREE_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
            'log_console': self._get_bool('XBRL_TREE_LOG_CONSOLE', True),

            # ================================================================
            # STATEMENT BUILD SETTINGS
            # ================================================================
            'label_lang': self._get_env('XBRL_TREE_LABEL_LANG', DEFAULT_LABEL_LANG),
            'path_id_width': self._get_int('XBRL_TREE_PATH_ID_WIDTH', DEFAULT_PATH_ID_WIDTH),
            'period_order': self._get_env(
                'XBRL_TREE_PERIOD_ORDER', DEFAULT_PERIOD_ORDER
            ).lower(),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found or unset

        Returns:
            Configuration value or default
        """
        value = self._config.get(key)
        return default if value is None else value

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path from environment variable.

        Raises:
            ValueError: If required and missing
        """
        value = os.getenv(key)

        if not value:
            if required:
                raise ValueError(f"Required path not configured: {key}")
            return None

        if '$' in value:
            value = os.path.expandvars(value)

        return Path(value).expanduser()

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        value = os.getenv(key)
        return default if value is None or value == '' else value

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def __repr__(self) -> str:
        return (
            f"ConfigLoader("
            f"tables_dir={self._config.get('tables_dir')}, "
            f"environment={self._config.get('environment')})"
        )


__all__ = ['ConfigLoader']
