"""Configuration loading and validation for context budgets."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from contextfit.tokens.encoding import DEFAULT_MODEL


class BudgetConfig(BaseModel):
    """Token budget for one target model."""

    model: str = DEFAULT_MODEL  # e.g. "gpt-4", "gpt-3.5-turbo"
    max_context_tokens: int = Field(default=8192, ge=0)
    max_response_tokens: Optional[int] = Field(default=None, ge=0)


def load_config(path: Path) -> BudgetConfig:
    """Load a budget config, either top-level or under a ``budget`` key."""
    if not path.exists():
        raise FileNotFoundError(f"Budget config not found: {path}")

    raw = load_yaml_file(path)
    if isinstance(raw, dict) and isinstance(raw.get("budget"), dict):
        raw = raw["budget"]
    return BudgetConfig.model_validate(raw)


def load_yaml_file(path: Path) -> Any:
    """Load a YAML file. An empty file gives ``{}``; other documents are returned as parsed."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
