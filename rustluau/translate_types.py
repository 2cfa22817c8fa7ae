"""Translator configuration types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TranslatorConfig:
    """Groups translator configuration."""

    placeholder_type: str = "any"
    uninitialized_value: str = "nil"


DEFAULT_CONFIG = TranslatorConfig()
