"""
Central configuration for the engine, the console shell and logging.
Pydantic models give type-safe settings loaded from env vars or JSON files.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator

from tictactoe.types import Difficulty, Mark


class EngineSettings(BaseModel):
    """Search engine configuration settings."""

    difficulty: Optional[int] = Field(default=None, description="Preselected tier: 1 easy, 2 medium, 3 hard (None = ask)")
    seed: Optional[int] = Field(default=None, description="Seed for the process random generator (None = OS entropy)")

    @field_validator('difficulty', mode='before')
    @classmethod
    def validate_difficulty(cls, v):
        if v is None:
            return None
        return int(Difficulty.parse(v))


class UISettings(BaseModel):
    """Console display and interaction settings."""

    human_mark: str = Field(default="X", description="Mark played by the human at the console")
    show_scores: bool = Field(default=False, description="Print root move scores after each engine move")

    @field_validator('human_mark', mode='before')
    @classmethod
    def validate_mark(cls, v):
        return Mark.parse(v).value

    @field_validator('show_scores', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ('1', 'true', 'yes', 'on')
        return bool(v)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_to_file: bool = Field(default=False, description="Write logs to file")
    log_file_path: str = Field(default="tictactoe.log", description="Log file path")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class TicTacToeConfig(BaseModel):
    """Main configuration model."""

    engine: EngineSettings = Field(default_factory=EngineSettings)
    ui: UISettings = Field(default_factory=UISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @property
    def difficulty(self) -> Optional[Difficulty]:
        if self.engine.difficulty is None:
            return None
        return Difficulty(self.engine.difficulty)

    @classmethod
    def from_env(cls) -> 'TicTacToeConfig':
        """Create configuration from environment variables."""
        seed = os.getenv('TTT_SEED')
        return cls(
            engine=EngineSettings(
                difficulty=os.getenv('TTT_DIFFICULTY') or None,
                seed=int(seed) if seed else None,
            ),
            ui=UISettings(
                human_mark=os.getenv('TTT_HUMAN_MARK', 'X'),
                show_scores=os.getenv('TTT_SHOW_SCORES', 'false'),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('TTT_LOG_LEVEL', 'WARNING'),
                log_to_file=os.getenv('TTT_LOG_FILE', 'false').lower() == 'true',
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'engine': self.engine.model_dump(),
            'ui': self.ui.model_dump(),
            'logging': self.logging.model_dump(),
            'version': self.version,
            'config_file': self.config_file,
        }

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath

        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'TicTacToeConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            engine=EngineSettings(**data.get('engine', {})),
            ui=UISettings(**data.get('ui', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Update configuration from dictionary; values are re-validated."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[TicTacToeConfig] = None


def get_config() -> TicTacToeConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = TicTacToeConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> TicTacToeConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = TicTacToeConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def get_engine_settings() -> EngineSettings:
    return get_config().engine


def get_ui_settings() -> UISettings:
    return get_config().ui


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


# Process-wide random source, seeded once
_rng: Optional[np.random.Generator] = None


def get_rng() -> np.random.Generator:
    """Return the shared generator, creating it from the configured seed on first use."""
    global _rng
    if _rng is None:
        _rng = np.random.default_rng(get_engine_settings().seed)
    return _rng


def reset_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Replace the shared generator. Call at startup or from tests only."""
    global _rng
    _rng = np.random.default_rng(seed)
    return _rng


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once from the logging settings."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    name = (level or settings.log_level).upper()
    handlers = None
    if settings.log_to_file:
        handlers = [logging.FileHandler(settings.log_file_path)]
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
