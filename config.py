"""
Central configuration for search depths, AI pacing and logging.
Pydantic models give type-safe configuration management.
"""
from __future__ import annotations

import os
import logging
import sys
from typing import Dict, Any, Optional, Tuple
from pydantic import BaseModel, Field, field_validator


# Difficulty levels (search depth in plies) offered per game
CHESS_DEPTHS: Tuple[int, ...] = (2, 3, 4, 5)
OTHELLO_DEPTHS: Tuple[int, ...] = (2, 4, 6, 8)

DEFAULT_CHESS_DEPTH = 3
DEFAULT_OTHELLO_DEPTH = 4

# Simulated "thinking" delay before the AI search starts (seconds)
DEFAULT_CHESS_THINK_DELAY = 1.0
DEFAULT_OTHELLO_THINK_DELAY = 0.5


class UISettings(BaseModel):
    """Terminal display settings."""

    use_unicode: bool = Field(default=True, description="Use Unicode characters for pieces")
    use_color: bool = Field(default=True, description="Enable colored terminal output")
    show_coordinates: bool = Field(default=True, description="Show row/column labels")

    @field_validator('use_unicode', 'use_color', 'show_coordinates', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        return bool(v)


class EngineSettings(BaseModel):
    """Search depth and pacing of the computer opponent."""

    chess_depth: int = Field(default=DEFAULT_CHESS_DEPTH, description="Chess search depth")
    othello_depth: int = Field(default=DEFAULT_OTHELLO_DEPTH, description="Othello search depth")
    chess_think_delay: float = Field(default=DEFAULT_CHESS_THINK_DELAY, ge=0,
                                     description="Delay before the chess AI starts searching")
    othello_think_delay: float = Field(default=DEFAULT_OTHELLO_THINK_DELAY, ge=0,
                                       description="Delay before the Othello AI starts searching")

    @field_validator('chess_depth', mode='before')
    @classmethod
    def validate_chess_depth(cls, v):
        v = int(v)
        if v not in CHESS_DEPTHS:
            raise ValueError(f"chess_depth must be one of {CHESS_DEPTHS}")
        return v

    @field_validator('othello_depth', mode='before')
    @classmethod
    def validate_othello_depth(cls, v):
        v = int(v)
        if v not in OTHELLO_DEPTHS:
            raise ValueError(f"othello_depth must be one of {OTHELLO_DEPTHS}")
        return v

    @field_validator('chess_think_delay', 'othello_think_delay', mode='before')
    @classmethod
    def validate_float_fields(cls, v):
        return float(v)

    def depth_for(self, game: str) -> int:
        return self.chess_depth if game == "chess" else self.othello_depth

    def think_delay_for(self, game: str) -> float:
        return self.chess_think_delay if game == "chess" else self.othello_think_delay


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="boardai.log", description="Log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class BoardAIConfig(BaseModel):
    """Main configuration model."""

    ui: UISettings = Field(default_factory=UISettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    def __init__(self, **data):
        super().__init__(**data)
        # No colors when output is redirected
        try:
            if not sys.stdout.isatty():
                self.ui.use_color = False
        except (AttributeError, OSError):
            self.ui.use_color = False

    @classmethod
    def from_env(cls) -> 'BoardAIConfig':
        """Create configuration from environment variables."""
        return cls(
            ui=UISettings(
                use_unicode=os.getenv('BOARDAI_UNICODE', 'true').lower() == 'true',
                use_color=os.getenv('BOARDAI_COLOR', 'true').lower() == 'true',
                show_coordinates=os.getenv('BOARDAI_COORDINATES', 'true').lower() == 'true',
            ),
            engine=EngineSettings(
                chess_depth=int(os.getenv('BOARDAI_CHESS_DEPTH', str(DEFAULT_CHESS_DEPTH))),
                othello_depth=int(os.getenv('BOARDAI_OTHELLO_DEPTH', str(DEFAULT_OTHELLO_DEPTH))),
                chess_think_delay=float(os.getenv('BOARDAI_CHESS_DELAY', str(DEFAULT_CHESS_THINK_DELAY))),
                othello_think_delay=float(os.getenv('BOARDAI_OTHELLO_DELAY', str(DEFAULT_OTHELLO_THINK_DELAY))),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('BOARDAI_LOG_LEVEL', 'INFO'),
                log_to_file=os.getenv('BOARDAI_LOG_FILE', 'false').lower() == 'true',
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'ui': self.ui.model_dump(),
            'engine': self.engine.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        import json
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'BoardAIConfig':
        """Load configuration from JSON file."""
        import json

        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            ui=UISettings(**data.get('ui', {})),
            engine=EngineSettings(**data.get('engine', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )


# Global configuration instance
_config: Optional[BoardAIConfig] = None


def get_config() -> BoardAIConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = BoardAIConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> BoardAIConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = BoardAIConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_ui_settings() -> UISettings:
    return get_config().ui


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def setup_logging() -> None:
    """Configure root logging once, controlled by BOARDAI_LOG_LEVEL / config."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    level: int = getattr(logging, settings.log_level, logging.INFO)
    handlers = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(logging.FileHandler(settings.log_file_path))
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
