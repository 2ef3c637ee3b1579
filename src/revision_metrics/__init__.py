"""
revision_metrics package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .analysis import aggregate, analyze_text
from .comparison import AnalysisComparison, compare_texts, percent_change
from .config import RevisionMetricsConfig, config_from_dict, config_from_yaml, load_config
from .models import AnalysisResult
from .tokenization import segment

__all__ = [
    "AnalysisComparison",
    "AnalysisResult",
    "RevisionMetricsConfig",
    "aggregate",
    "analyze_text",
    "compare_texts",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "percent_change",
    "segment",
]

__version__ = "0.1.0"
