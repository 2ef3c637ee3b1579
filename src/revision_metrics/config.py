from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml


@dataclass(slots=True)
class OpenAISettings:
    """Configuration block for the OpenAI-backed revision summary."""

    enabled: bool = False
    model: str = "gpt-4.1-mini"
    api_key: str | None = None
    api_key_env: str = "OPENAI_API_KEY"
    base_url: str | None = None
    organization: str | None = None
    temperature: float = 0.3
    max_output_tokens: int = 800
    top_p: float = 0.95
    request_timeout: float = 60.0


@dataclass(slots=True)
class RevisionMetricsConfig:
    """Configuration options for text analysis and comparison."""

    top_n_words: int = 20
    passive_window: int = 3
    stopwords_path: str | None = None
    familiar_words_path: str | None = None
    weak_words_path: str | None = None
    ly_exclusions_path: str | None = None
    irregular_participles_path: str | None = None
    abbreviations_path: str | None = None
    complex_word_exceptions_path: str | None = None
    syllable_exceptions_path: str | None = None
    openai: OpenAISettings = field(default_factory=OpenAISettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(RevisionMetricsConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "openai" in data:
        openai_value = data["openai"]
        if isinstance(openai_value, OpenAISettings):
            kwargs["openai"] = openai_value
        elif isinstance(openai_value, Mapping):
            kwargs["openai"] = _build_openai_settings(openai_value)
        else:
            kwargs.pop("openai")
    return kwargs


def _build_openai_settings(data: Mapping[str, Any]) -> OpenAISettings:
    openai_allowed = {field.name for field in fields(OpenAISettings)}
    filtered = {key: data[key] for key in data if key in openai_allowed}
    return OpenAISettings(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> RevisionMetricsConfig:
    """Build a RevisionMetricsConfig from a dictionary-like input."""
    if data is None:
        return RevisionMetricsConfig()
    return RevisionMetricsConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> RevisionMetricsConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> RevisionMetricsConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return RevisionMetricsConfig()
    return config_from_yaml(path)
