"""
Configuration management using Pydantic Settings.
"""

from pathlib import Path
from typing import Dict, Literal, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


class RestConfig(BaseModel):
    """Connection settings for the hosted backend's REST interface."""
    url: str
    api_key: str
    slots_table: str = "timetable_slots"
    breaks_table: str = "breaks"

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """Ensure the project URL is absolute."""
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"rest.url must start with http:// or https://, got '{value}'")
        return value.rstrip("/")


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Asia/Ho_Chi_Minh"
    source: Literal["demo", "json", "rest"] = "demo"
    data_file: Optional[Path] = None
    rest: Optional[RestConfig] = None
    refresh_seconds: int = 60
    use_demo_fallback: bool = True
    subject_colors: Dict[str, str] = Field(default_factory=dict)  # subject -> Rich style

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @field_validator("refresh_seconds")
    @classmethod
    def validate_refresh(cls, value: int) -> int:
        """Ensure the refresh interval is positive."""
        if value <= 0:
            raise ValueError("refresh_seconds must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_source_settings(self) -> "AppConfig":
        """Ensure the selected source has its settings."""
        if self.source == "json" and self.data_file is None:
            raise ValueError("data_file is required when source is 'json'")
        if self.source == "rest" and self.rest is None:
            raise ValueError("rest settings are required when source is 'rest'")
        return self

    def color_for(self, subject: str) -> str:
        """Get the display style for a subject."""
        return self.subject_colors.get(subject, "default")

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Relative data files are resolved against the config file location
        if config.data_file is not None and not config.data_file.is_absolute():
            config.data_file = config_path.parent / config.data_file

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
