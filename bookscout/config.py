"""
Configuration management for bookscout.

Handles loading and saving user configuration from:
- $XDG_CONFIG_HOME/bookscout/config.json
- ~/.config/bookscout/config.json
- Fallback: ~/.bookscout/config.json
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class SimilarityConfig:
    """Similarity engine defaults."""
    default_limit: int = 5
    rating_tolerance: float = 0.5
    year_window: int = 5
    min_token_length: int = 3
    stop_words_file: Optional[str] = None
    normalize_genres: bool = False


@dataclass
class CLIConfig:
    """CLI default options."""
    verbose: bool = False
    color: bool = True


@dataclass
class BookscoutConfig:
    """Main bookscout configuration."""
    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "similarity": asdict(self.similarity),
            "cli": asdict(self.cli),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BookscoutConfig':
        """Create from dictionary, ignoring unknown keys."""
        return cls(
            similarity=_section(SimilarityConfig, data.get("similarity")),
            cli=_section(CLIConfig, data.get("cli")),
        )


def _section(section_cls, data: Optional[Dict[str, Any]]):
    known = {f.name for f in fields(section_cls)}
    return section_cls(**{k: v for k, v in (data or {}).items() if k in known})


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. $XDG_CONFIG_HOME/bookscout/config.json
    2. ~/.config/bookscout/config.json
    3. Fallback: ~/.bookscout/config.json

    Returns:
        Path to config file
    """
    xdg_env = os.environ.get("XDG_CONFIG_HOME")
    if xdg_env:
        return Path(xdg_env) / "bookscout" / "config.json"

    xdg_config_home = Path.home() / ".config"
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "bookscout"
    else:
        config_dir = Path.home() / ".bookscout"

    return config_dir / "config.json"


def load_config() -> BookscoutConfig:
    """
    Load configuration from file.

    Returns:
        BookscoutConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return BookscoutConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        return BookscoutConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError, AttributeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Using default configuration")
        return BookscoutConfig()


def save_config(config: BookscoutConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.debug(f"Configuration saved to {config_path}")
    return config_path


def ensure_config_exists() -> Path:
    """
    Ensure configuration file exists, creating with defaults if not.

    Returns:
        Path to config file
    """
    config_path = get_config_path()

    if not config_path.exists():
        save_config(BookscoutConfig())
        logger.info(f"Created default configuration at {config_path}")

    return config_path


def update_config(
    # Similarity settings
    default_limit: Optional[int] = None,
    rating_tolerance: Optional[float] = None,
    year_window: Optional[int] = None,
    min_token_length: Optional[int] = None,
    stop_words_file: Optional[str] = None,
    normalize_genres: Optional[bool] = None,
    # CLI settings
    cli_verbose: Optional[bool] = None,
    cli_color: Optional[bool] = None,
) -> BookscoutConfig:
    """
    Update configuration.

    Only updates provided values, leaving others unchanged.

    Returns:
        The saved configuration
    """
    config = load_config()

    if default_limit is not None:
        config.similarity.default_limit = default_limit
    if rating_tolerance is not None:
        config.similarity.rating_tolerance = rating_tolerance
    if year_window is not None:
        config.similarity.year_window = year_window
    if min_token_length is not None:
        config.similarity.min_token_length = min_token_length
    if stop_words_file is not None:
        config.similarity.stop_words_file = stop_words_file
    if normalize_genres is not None:
        config.similarity.normalize_genres = normalize_genres

    if cli_verbose is not None:
        config.cli.verbose = cli_verbose
    if cli_color is not None:
        config.cli.color = cli_color

    save_config(config)
    return config
