"""Configuration management for magicreplace."""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from magicreplace.config.paths import default_config_path
from magicreplace.platform.logging import logger

DEFAULT_API_BASE_URL = "https://magic-replace-backend.vercel.app"


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Content store endpoint
    api_base_url: str = DEFAULT_API_BASE_URL

    # Seconds to wait for a content store response; None waits indefinitely
    request_timeout: float | None = None

    # Default for the smart replacement flag on the CLI
    smart_mode: bool = False

    # Log file path
    log_file: Path | None = _path_field()

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata.

        Only fields flagged with ``metadata={"path": True}`` by
        ``_path_field`` are converted.
        """
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file.

        A missing file yields the defaults. Unknown keys are ignored with a
        warning so older files keep working.

        Returns:
            Config: Loaded configuration object.
        """
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        try:
            if not config_file.exists():
                instance = cls()
                logger.debug("No configuration at %s; using defaults", config_file)
            else:
                with open(config_file, "rb") as f:
                    raw = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(raw) - known)
                if unknown:
                    logger.warning(
                        "Ignoring unknown configuration keys in %s: %s",
                        config_file,
                        ", ".join(unknown),
                    )
                instance = cls(**{key: value for key, value in raw.items() if key in known})
                logger.info("Configuration loaded from %s", config_file)
        except Exception as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = config_file
        return instance


# Global configuration instance
config = Config.load()
