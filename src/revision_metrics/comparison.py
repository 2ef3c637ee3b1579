from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict

from .analysis import analyze_text
from .config import RevisionMetricsConfig
from .models import AnalysisResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]

# Metric label -> (AnalysisResult attribute, reading hint for the summary prompt).
DELTA_METRICS: Dict[str, tuple[str, str | None]] = {
    "Total Word Count": ("word_count", None),
    "Average Sentence Length": ("avg_sentence_length", None),
    "Flesch Reading Ease": ("flesch_reading_ease", "Higher is easier"),
    "Flesch-Kincaid Grade Level": ("flesch_kincaid_grade", None),
    "Passive Voice Sentences": ("passive_voice_count", None),
    "Lexical Density": ("lexical_density", "Higher is more informative"),
    "Lexical Diversity": ("lexical_diversity", "Higher is richer vocabulary"),
}


def percent_change(original: float, revised: float) -> float:
    """Relative change from original to revised, in percent."""
    if original == 0:
        return 100.0 if revised > 0 else 0.0
    return (revised - original) / original * 100.0


def format_delta(value: float) -> str:
    """Format a percent change as ``+12.5%`` / ``-3.0%``."""
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.1f}%"


@dataclass(frozen=True, slots=True)
class AnalysisComparison:
    """Results for the original and revised version of a document."""

    original: AnalysisResult
    revised: AnalysisResult

    def deltas(self) -> Dict[str, float]:
        """Percent change per tracked metric, in presentation order."""
        return {
            label: percent_change(
                float(getattr(self.original, attribute)),
                float(getattr(self.revised, attribute)),
            )
            for label, (attribute, _) in DELTA_METRICS.items()
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "original": self.original.to_dict(),
            "revised": self.revised.to_dict(),
            "deltas": self.deltas(),
        }


def compare_texts(
    original: str,
    revised: str,
    config: RevisionMetricsConfig | None = None,
    progress: ProgressCallback | None = None,
) -> AnalysisComparison:
    """
    Analyze both versions of a document with the same configuration.

    ``progress`` receives ``(percent, message)`` around each engine call; the
    engine itself never reports progress.
    """
    if config is None:
        config = RevisionMetricsConfig()

    def report(percent: int, message: str) -> None:
        if progress is not None:
            progress(percent, message)

    report(0, "Analyzing original text...")
    original_result = analyze_text(original, config)
    report(50, "Analyzing revised text...")
    revised_result = analyze_text(revised, config)
    report(100, "Analysis complete.")

    logger.debug(
        "Compared %d -> %d words.",
        original_result.word_count,
        revised_result.word_count,
    )
    return AnalysisComparison(original=original_result, revised=revised_result)
