"""
Configuration loader for OpenSpec.
Merges defaults with per-workspace .openspec/config.yaml overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class ProviderConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    api_key_env: str | None = None
    max_tokens: int = 4000
    endpoint: str | None = None


def _default_providers() -> dict[str, ProviderConfig]:
    return {
        "claude": ProviderConfig(
            model="claude-sonnet-4-20250514",
            api_key_env="ANTHROPIC_API_KEY",
            max_tokens=8000,
        ),
        "gpt-4": ProviderConfig(
            model="gpt-4-turbo",
            api_key_env="OPENAI_API_KEY",
            max_tokens=8000,
        ),
        "ollama": ProviderConfig(
            model="codellama",
            max_tokens=4000,
            endpoint="http://localhost:11434",
        ),
    }


class LLMConfig(BaseModel):
    default_provider: str = "claude"
    providers: dict[str, ProviderConfig] = Field(default_factory=_default_providers)
    # Not checked against `providers`; see unknown_fallback_providers()
    fallback_chain: list[str] = Field(default_factory=lambda: ["claude", "gpt-4"])
    generation_timeout_seconds: int = 120


class ValidationRules(BaseModel):
    require_scenarios: bool = True
    require_shall_must: bool = True
    max_spec_size_kb: int = 1024


class ValidationConfig(BaseModel):
    enabled: bool = True
    debounce_ms: int = 500
    rules: ValidationRules = Field(default_factory=ValidationRules)


class AuditConfig(BaseModel):
    enabled: bool = True
    retention_days: int = 730
    signature_required: bool = True
    export_format: str = "json"


class CoverageConfig(BaseModel):
    exclude_patterns: list[str] = Field(default_factory=lambda: [
        "**/test/**",
        "**/*.test.*",
        "**/node_modules/**",
    ])
    minimum_coverage_percent: float = 60.0


class WorkflowConfig(BaseModel):
    auto_archive_on_complete: bool = False
    require_all_tasks_complete: bool = True


class ExtensionConfig(BaseModel):
    llm: LLMConfig = Field(default_factory=LLMConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    audit: AuditConfig = Field(default_factory=AuditConfig)
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)

    def save(self, path: Path) -> None:
        """Persistence hook. Configuration is not written back yet."""
        logger.debug(f"[CONFIG] save({path}) skipped: persistence not implemented")


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"
WORKSPACE_CONFIG = Path(".openspec") / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(workspace_root: Path | None = None) -> ExtensionConfig:
    """
    Load config by merging:
      1. Built-in defaults (openspec_ext/config.yaml)
      2. Workspace overrides (<workspace>/.openspec/config.yaml)
    """
    with open(_DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
        base: dict[str, Any] = yaml.safe_load(f) or {}

    if workspace_root:
        workspace_config = workspace_root / WORKSPACE_CONFIG
        if workspace_config.exists():
            with open(workspace_config, "r", encoding="utf-8") as f:
                overrides: dict[str, Any] = yaml.safe_load(f) or {}
            logger.debug(f"[CONFIG] Applying overrides from {workspace_config}")
            base = _deep_merge(base, overrides)

    return ExtensionConfig(**base)


def load_or_default() -> ExtensionConfig:
    """The fixed built-in configuration, ignoring any workspace overrides."""
    return ExtensionConfig()


def validate_api_keys(config: ExtensionConfig) -> dict[str, bool]:
    """Check which provider API keys are available in the environment."""
    keys: dict[str, bool] = {}
    for provider in config.llm.providers.values():
        if provider.api_key_env:
            keys[provider.api_key_env] = bool(os.environ.get(provider.api_key_env))
    return keys


def unknown_fallback_providers(config: ExtensionConfig) -> list[str]:
    """Fallback chain entries with no matching provider. Reported, never enforced."""
    return [name for name in config.llm.fallback_chain if name not in config.llm.providers]
