"""Configuration loading and management for lyric-sync.

Handles the tunable constants of the parsers and the alignment engine,
stored as JSON files.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from lyric_sync.errors import ConfigurationError

CONFIG_ENV_VAR = "LYRIC_SYNC_CONFIG"


class ParserSettings(BaseModel):
    """Tunable parsing and alignment constants."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # How early (ms) a secondary line may start before its primary window
    early_tolerance_ms: int = Field(default=500, ge=0)
    # Synthetic duration of the last line of a line-timed (LRC) track
    last_line_duration_ms: int = Field(default=2000, ge=0)
    # Gap kept between a synthesized line end and the next line's start
    end_guard_ms: int = Field(default=10, ge=0)
    # KRC tag carrying the base64 multi-language payload
    language_tag: str = "language"


DEFAULT_SETTINGS = ParserSettings()


def load_settings(path: Path | str) -> ParserSettings:
    """Load parser settings from a JSON file.

    Args:
        path: Path to the settings file

    Returns:
        ParserSettings object

    Raises:
        FileNotFoundError: If the settings file doesn't exist
        ConfigurationError: If the file is not valid JSON or has bad values
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
        return ParserSettings(**data)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Settings file is not valid JSON: {e}",
            context={"path": str(config_path)},
        ) from e
    except (PydanticValidationError, TypeError) as e:
        raise ConfigurationError(
            f"Invalid settings: {e}",
            context={"path": str(config_path)},
        ) from e


def save_settings(path: Path | str, settings: ParserSettings) -> Path:
    """Save parser settings to a JSON file with atomic write.

    Args:
        path: Destination path
        settings: Settings to save

    Returns:
        Path to the saved settings file
    """
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = config_path.with_name(config_path.name + ".tmp")

    # Atomic write: write to temp file, then rename
    with open(temp_path, "w", encoding="utf-8") as f:
        json.dump(settings.model_dump(), f, indent=2)

    temp_path.replace(config_path)
    return config_path
