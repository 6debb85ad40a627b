#!/usr/bin/env python3
"""
Settings loader for Xeniria static site generator.
Supports configuration from xeniria.yml, xeniria.yaml, or xeniria.json files.
"""

import os
import json
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional

import yaml

logger = logging.getLogger('Xeniria')


@dataclass(frozen=True)
class SiteConfig:
    """Resolved configuration handed to the build and the preview server."""
    content_dir: str = 'content'
    output_dir: str = 'public'
    port: int = 8464
    site_title: str = 'Xeniria Blog'
    host: str = 'localhost'

    @property
    def posts_dir(self) -> str:
        return os.path.join(self.output_dir, 'posts')

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'SiteConfig':
        """Build a config from a merged settings dictionary."""
        output_dir = str(settings.get('output') or cls.output_dir)
        if output_dir.startswith('~/'):
            output_dir = os.path.expanduser(output_dir)
        try:
            port = int(settings.get('port', cls.port))
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port: {settings.get('port')!r}")
        return cls(
            content_dir=str(settings.get('content') or cls.content_dir),
            output_dir=output_dir,
            port=port,
            site_title=str(settings.get('site_title') or cls.site_title),
            host=str(settings.get('host') or cls.host),
        )


class XeniriaSettings:
    """Load and manage Xeniria configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'content': 'content',
        'output': 'public',
        'port': 8464,
        'host': 'localhost',
        'site_title': 'Xeniria Blog',
        'logs': None,
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['xeniria.yml', 'xeniria.yaml', 'xeniria.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings

        Raises:
            ValueError: If the config file is malformed
            OSError: If the config file cannot be read
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if loaded_settings:
                # Merge with defaults, giving preference to loaded settings
                self.settings.update(loaded_settings)
                logger.info(f"Loaded configuration from: {os.path.relpath(config_file)}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    data = yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    data = json.load(f) or {}
                else:
                    raise ValueError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
        except PermissionError:
            raise PermissionError(f"Permission denied reading configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error reading configuration file {config_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")
        return data

    def sample_config_path(self, file_format: str = 'yml') -> str:
        """Path of the sample configuration file for ``file_format``."""
        if file_format not in ['yml', 'yaml', 'json']:
            raise ValueError(f"Unsupported config file format: {file_format}")
        return os.path.join(self.config_dir, f'xeniria.{file_format}')

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        config_path = self.sample_config_path(file_format)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# Xeniria Configuration File\n\n")
                    f.write("# Site information\n")
                    f.write("site_title: Xeniria Blog\n\n")
                    f.write("# Build settings\n")
                    f.write("content: content\n")
                    f.write("output: public\n\n")
                    f.write("# Preview server\n")
                    f.write("host: localhost\n")
                    f.write("port: 8464\n\n")
                    f.write("# Directory for build logs (leave empty to disable)\n")
                    f.write("logs:\n")
                else:
                    json.dump(self.DEFAULT_SETTINGS, f, indent=2)
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error writing configuration file {config_path}: {e}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        # Override with non-None command line arguments
        for key, value in args_dict.items():
            if value is not None:
                merged[key] = value

        return merged
