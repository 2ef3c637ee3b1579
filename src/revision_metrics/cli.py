from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

import typer
import yaml

from .analysis import analyze_text
from .comparison import compare_texts
from .config import OpenAISettings, RevisionMetricsConfig, load_config
from .llm import OpenAISummaryClient
from .summary import NoOpSummarizer, OpenAISummarizer, Summarizer, SummaryRequest

app = typer.Typer(help="Revision metrics CLI.", no_args_is_help=True)

logger = logging.getLogger(__name__)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output to stderr."
    ),
) -> None:
    """Compare readability, lexical and style metrics of text documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    top_n: int | None = typer.Option(
        None, "--top-n", help="Number of entries in the word frequency table."
    ),
) -> None:
    """Analyze a single UTF-8 text file and print the metrics as JSON."""
    cfg = load_config(config)
    _apply_analysis_overrides(cfg, top_n)
    text = _read_text(input_path)
    result = analyze_text(text, cfg)
    typer.echo(json.dumps({"file": str(input_path), **result.to_dict()}, indent=2))


@app.command()
def compare(
    original: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    revised: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    top_n: int | None = typer.Option(
        None, "--top-n", help="Number of entries in the word frequency table."
    ),
    summarize: bool | None = typer.Option(
        None,
        "--summarize/--no-summarize",
        help="Request an LLM-written overview of the changes.",
    ),
    openai_model: str | None = typer.Option(
        None, "--openai-model", help="OpenAI model identifier (e.g., gpt-4.1-mini)."
    ),
    openai_api_key: str | None = typer.Option(
        None, "--openai-api-key", help="Explicit OpenAI API key (prefer env vars)."
    ),
    openai_api_key_env: str | None = typer.Option(
        None,
        "--openai-api-key-env",
        help="Environment variable to read the OpenAI API key from.",
    ),
    openai_base_url: str | None = typer.Option(
        None, "--openai-base-url", help="Custom OpenAI base URL (Azure, proxy, etc.)."
    ),
    output_path: Path | None = typer.Option(
        None, "--output-path", "-o", dir_okay=False, help="Write JSON here."
    ),
) -> None:
    """Compare an original and a revised text file."""
    cfg = load_config(config)
    _apply_analysis_overrides(cfg, top_n)
    _apply_openai_overrides(
        cfg.openai,
        summarize,
        openai_model,
        openai_api_key,
        openai_api_key_env,
        openai_base_url,
    )
    original_text = _read_text(original)
    revised_text = _read_text(revised)

    comparison = compare_texts(
        original_text, revised_text, cfg, progress=_log_progress
    )
    payload: Dict[str, Any] = {
        "original_file": str(original),
        "revised_file": str(revised),
        **comparison.to_dict(),
    }
    if cfg.openai.enabled:
        api_key = _resolve_openai_api_key(cfg.openai)
        try:
            summarizer = _build_summarizer(cfg, api_key)
            payload["summary"] = summarizer.summarize(
                SummaryRequest(
                    comparison=comparison,
                    original_text=original_text,
                    revised_text=revised_text,
                )
            )
        except RuntimeError as exc:
            logger.warning("Summary unavailable: %s", exc)
            payload["summary_error"] = str(exc)

    rendered = json.dumps(payload, indent=2)
    if output_path is None:
        typer.echo(rendered)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered, encoding="utf-8")
    typer.echo(f"Wrote comparison to {output_path}")


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = RevisionMetricsConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _log_progress(percent: int, message: str) -> None:
    logger.info("[%3d%%] %s", percent, message)


def _read_text(path: Path) -> str:
    """Read an input document; extraction from other formats happens upstream."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid UTF-8 text.") from exc
    except OSError as exc:
        raise typer.BadParameter(f"Could not read {path}: {exc}") from exc


def _apply_analysis_overrides(config: RevisionMetricsConfig, top_n: int | None) -> None:
    if top_n is not None:
        config.top_n_words = max(0, top_n)


def _apply_openai_overrides(
    settings: OpenAISettings,
    enabled: bool | None,
    model: str | None,
    api_key: str | None,
    api_key_env: str | None,
    base_url: str | None,
) -> None:
    """Override OpenAI summary settings from CLI flags."""
    if enabled is not None:
        settings.enabled = enabled
    if model:
        settings.model = model
    if api_key:
        settings.api_key = api_key
    if api_key_env:
        settings.api_key_env = api_key_env
    if base_url:
        settings.base_url = base_url


def _build_summarizer(config: RevisionMetricsConfig, api_key: str) -> Summarizer:
    """Instantiate the configured summarizer for the current run."""
    if not config.openai.enabled:
        return NoOpSummarizer()
    client = OpenAISummaryClient(config.openai, api_key=api_key)
    return OpenAISummarizer(client)


def _resolve_openai_api_key(settings: OpenAISettings) -> str:
    """Resolve the API key from explicit config or the configured environment variable."""
    if settings.api_key:
        return settings.api_key
    env_name = settings.api_key_env or "OPENAI_API_KEY"
    if env_name in os.environ and os.environ[env_name]:
        return os.environ[env_name]
    raise typer.BadParameter(
        "OpenAI API key not provided. Use --openai-api-key or set "
        f"the {env_name} environment variable."
    )


if __name__ == "__main__":
    main()
