"""
Config Manager - dot notation access to configuration modules
"""

import importlib
import threading
from typing import Any, Optional, Dict


class Config:
    """
    Configuration manager with dot notation access

    Usage:
        # Get config value
        path = Config.get('girouette.controllers_path')

        # With default
        debug = Config.get('app.debug', False)

        # Set runtime value
        Config.set('girouette.controllers_pattern', r'_controller_domain\\.py$')

        # Check existence
        if Config.has('girouette.controllers_pattern'):
            ...

    Config files are plain modules in a config/ package on sys.path:
        config/
        ├── app.py
        └── girouette.py
    """

    _lock = threading.Lock()
    _loaded: Dict[str, Any] = {}
    _runtime_overrides: Dict[str, Any] = {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation (case-insensitive)

        Args:
            key: Config key in dot notation (e.g., 'girouette.controllers_path')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        key_lower = key.lower()

        # Runtime overrides win over file values
        if key_lower in cls._runtime_overrides:
            return cls._runtime_overrides[key_lower]

        parts = key_lower.split('.')
        file_name = parts[0]
        path = parts[1:]

        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        value = cls._loaded.get(file_name)
        if value is None:
            return default

        for part in path:
            found, value = cls._lookup(value, part)
            if not found:
                return default

        return value

    @staticmethod
    def _lookup(value: Any, part: str) -> tuple:
        """Case-insensitive attribute or key lookup of a single segment"""
        if isinstance(value, dict):
            for dict_key in value.keys():
                if str(dict_key).lower() == part:
                    return True, value[dict_key]
            return False, None

        if hasattr(value, '__dict__'):
            for attr_name in dir(value):
                if attr_name.lower() == part:
                    return True, getattr(value, attr_name)

        return False, None

    @classmethod
    def _load_config_file(cls, file_name: str):
        """
        Load a config module from the config/ package

        Args:
            file_name: Config file name (without .py extension)
        """
        with cls._lock:
            if file_name in cls._loaded:
                return

            try:
                module = importlib.import_module(f'config.{file_name}')
                cls._loaded[file_name] = module
            except ImportError:
                cls._loaded[file_name] = None

    @classmethod
    def set(cls, key: str, value: Any):
        """
        Set configuration value at runtime (does not persist to file)

        Example:
            Config.set('girouette.controllers_path', '/srv/app/controllers')
        """
        cls._runtime_overrides[key.lower()] = value

    @classmethod
    def has(cls, key: str) -> bool:
        """Check if configuration key exists"""
        return cls.get(key) is not None

    @classmethod
    def all(cls, file_name: str) -> Optional[Any]:
        """Get the whole config module for a file, or None"""
        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        return cls._loaded.get(file_name)

    @classmethod
    def reload(cls, file_name: Optional[str] = None):
        """
        Reload configuration file(s)

        Args:
            file_name: Specific file to reload, or None to reload all
        """
        with cls._lock:
            if file_name:
                cls._loaded.pop(file_name, None)
                loaded_files = [file_name]
            else:
                loaded_files = list(cls._loaded.keys())
                cls._loaded.clear()

        for file in loaded_files:
            cls._load_config_file(file)

    @classmethod
    def clear_runtime_overrides(cls):
        """Clear all runtime configuration overrides"""
        cls._runtime_overrides.clear()
