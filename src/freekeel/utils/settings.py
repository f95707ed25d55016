"""
Settings Management
Handles user preferences and configuration
"""
import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

MAX_RECENT_FILES = 10


class Settings:
    """Manages application settings"""

    def __init__(self, config_file: str = None):
        if config_file is None:
            # Default to user's home directory
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".freekeel")
            os.makedirs(config_dir, exist_ok=True)
            config_file = os.path.join(config_dir, "settings.json")

        self.config_file = config_file
        self.settings = self.load()

    def load(self) -> Dict[str, Any]:
        """Load settings from file, layered over the defaults"""
        settings = self.get_defaults()
        if os.path.exists(self.config_file):
            try:
                with open(self.config_file, 'r') as f:
                    stored = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Error loading settings from %s: %s", self.config_file, e)
                return settings
            if isinstance(stored, dict):
                _merge(settings, stored)
            else:
                logger.warning("Ignoring malformed settings file %s", self.config_file)
        return settings

    def save(self):
        """Save settings to file"""
        try:
            with open(self.config_file, 'w') as f:
                json.dump(self.settings, f, indent=4)
        except OSError as e:
            logger.warning("Error saving settings to %s: %s", self.config_file, e)

    def get_defaults(self) -> Dict[str, Any]:
        """Get default settings"""
        return {
            'text': {
                'size': 18,
                'color': '#FFFF00'
            },
            'stroke': {
                'width': 2,
                'color': '#00FF00'
            },
            'render': {
                'scale': 1.5
            },
            'history': {
                'capacity': 50
            },
            'export': {
                'text_color': '#FFFF00',
                'stroke_color': '#00FF00',
                'preserve_colors': False,
                'file_name': 'edited.pdf'
            },
            'new_document': {
                'page_count': 1,
                'width': 612,
                'height': 792
            },
            'recent_files': []
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value"""
        keys = key.split('.')
        value = self.settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set a setting value"""
        keys = key.split('.')
        current = self.settings

        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value
        self.save()

    def add_recent_file(self, file_path: str):
        """Add file to recent files list"""
        recent = list(self.get('recent_files', []))

        if file_path in recent:
            recent.remove(file_path)

        recent.insert(0, file_path)
        self.set('recent_files', recent[:MAX_RECENT_FILES])

    def get_recent_files(self) -> list:
        """Get recent files list"""
        return self.get('recent_files', [])


def _merge(base: Dict[str, Any], override: Dict[str, Any]):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
