"""
Configuration management with Pydantic validation and environment variable support.
"""

import json
import os
import platform
from pathlib import Path
from typing import Optional, Literal
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class NotificationSettings(BaseModel):
    """User-facing notification configuration."""

    enabled: bool = Field(
        default=True,
        description="Show success/warning/error notifications"
    )
    level: LogLevel = Field(
        default="INFO",
        description="Minimum level of notifications to show"
    )


class StatusPickerSettings(BaseModel):
    """Status picker configuration."""

    prompt_title: str = Field(
        default="Git Status",
        description="Title shown above the status table"
    )
    show_icons: bool = Field(
        default=True,
        description="Show staged/unstaged markers in front of each row"
    )
    max_preview_lines: int = Field(
        default=200,
        ge=10,
        le=2000,
        description="Maximum lines of diff shown in the preview"
    )


class GitSettings(BaseModel):
    """Git operation configuration."""

    repo_path: Optional[Path] = Field(
        default=None,
        description="Repository path (default: current directory)"
    )


class UISettings(BaseModel):
    """User interface configuration."""

    use_colors: bool = Field(
        default=True,
        description="Use colored output"
    )
    interactive: bool = Field(
        default=True,
        description="Enable interactive prompts"
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Logging level"
    )


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    status: StatusPickerSettings = Field(default_factory=StatusPickerSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    ui: UISettings = Field(default_factory=UISettings)

    model_config = {
        "env_prefix": "GW_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "extra": "ignore",
    }

    def __init__(self, **kwargs):
        # Load the default config file only when nothing was passed explicitly
        if not kwargs:
            config_path = self._get_default_config_path()
            if config_path.exists():
                try:
                    with open(config_path) as f:
                        kwargs = json.load(f)
                except (json.JSONDecodeError, OSError):
                    pass  # Fall back to defaults

        super().__init__(**kwargs)

    @staticmethod
    def _base_config_dir() -> Path:
        if platform.system() == "Windows":
            return Path(os.environ.get("APPDATA", "~"))
        return Path(os.environ.get("XDG_CONFIG_HOME", "~/.config"))

    def _get_default_config_path(self) -> Path:
        """Get the default config file path."""
        return (self._base_config_dir() / "git-workflow" / "config.json").expanduser()

    @classmethod
    def from_file(cls, config_path: Path) -> "Settings":
        """Load settings from a configuration file."""
        if config_path.exists():
            with open(config_path) as f:
                config_data = json.load(f)
            return cls(**config_data)
        return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save current settings to a configuration file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory."""
        return (self._base_config_dir() / "git-workflow").expanduser()

    @property
    def cache_dir(self) -> Path:
        """Get the cache directory."""
        if platform.system() == "Windows":
            base = Path(os.environ.get("LOCALAPPDATA", "~"))
        else:
            base = Path(os.environ.get("XDG_CACHE_HOME", "~/.cache"))

        return (base / "git-workflow").expanduser()

    @property
    def log_file(self) -> Path:
        """Get the log file path."""
        return self.cache_dir / "git-workflow.log"
