"""Configuration management for localization index."""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from babel import Locale, UnknownLocaleError

CONFIG_FILE_NAME = '.localization-index.yml'


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class PathsConfig:
    """Directory scanning configuration."""
    extension: str = ".strings"
    exclude: List[str] = field(default_factory=lambda: [
        'build', 'Build', 'DerivedData', '.build', 'Pods',
        'Carthage', 'vendor', '.git', 'node_modules', 'dist',
    ])


@dataclass
class SessionConfig:
    """Session configuration."""
    default_group: str = "Localizable.strings"
    max_workers: int = 2


@dataclass
class ExportConfig:
    """Spreadsheet export configuration."""
    key_header: str = "key"
    display_locale: str = "en"  # locale used to render language names in headers
    column_width: float = 50
    header_row_height: float = 40
    row_height: float = 35
    font_name: str = "Verdana"
    header_font_size: float = 18


@dataclass
class Config:
    """Main configuration class."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

            if not config_path.exists():
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(
            paths=PathsConfig(**data.get('paths', {})),
            session=SessionConfig(**data.get('session', {})),
            export=ExportConfig(**data.get('export', {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'paths': {
                'extension': self.paths.extension,
                'exclude': self.paths.exclude,
            },
            'session': {
                'default_group': self.session.default_group,
                'max_workers': self.session.max_workers,
            },
            'export': {
                'key_header': self.export.key_header,
                'display_locale': self.export.display_locale,
                'column_width': self.export.column_width,
                'header_row_height': self.export.header_row_height,
                'row_height': self.export.row_height,
                'font_name': self.export.font_name,
                'header_font_size': self.export.header_font_size,
            },
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def validate(self, raise_on_error: bool = False) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if not self.paths.extension.startswith('.'):
            errors.append(f"paths.extension must start with '.', got '{self.paths.extension}'")

        if self.session.max_workers < 1:
            errors.append(f"session.max_workers must be at least 1, got {self.session.max_workers}")

        if not self.session.default_group:
            warnings.append(ConfigValidationWarning(
                "session.default_group is empty, the first group will be selected"
            ))

        for name in ('column_width', 'header_row_height', 'row_height', 'header_font_size'):
            value = getattr(self.export, name)
            if value <= 0:
                errors.append(f"export.{name} must be positive, got {value}")

        if not self.export.key_header:
            errors.append("export.key_header cannot be empty")

        try:
            Locale.parse(self.export.display_locale.replace('_', '-'), sep='-')
        except (ValueError, UnknownLocaleError):
            errors.append(f"Unknown export.display_locale: '{self.export.display_locale}'")

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings
