import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")


class AIConfig(BaseModel):
    policy: Literal["random", "ngrams"] = "ngrams"
    window: int = Field(3, ge=1)
    seed: Optional[int] = None


class UIConfig(BaseModel):
    show_table: bool = False
    show_prediction: bool = False


class LoggingConfig(BaseModel):
    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v


class GameConfig(BaseModel):
    ai: AIConfig = Field(default_factory=AIConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Optional[str] = None) -> GameConfig:
    """Read the YAML config (the packaged one by default) and validate it."""
    config_path = path or DEFAULT_CONFIG_PATH
    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return GameConfig.model_validate(raw)


def apply_overrides(cfg: GameConfig, overrides: dict) -> GameConfig:
    """Merge {section: {key: value}} over `cfg`; None values are left alone."""
    data = cfg.model_dump()
    for section, values in overrides.items():
        data[section].update({k: v for k, v in values.items() if v is not None})
    return GameConfig.model_validate(data)
