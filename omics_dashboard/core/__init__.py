"""Core dataclasses for the omics dashboard.

Provides the fundamental data structures used throughout the application:
- AnalysisConfig: Parameters for one simulated pipeline run
- LogEntry: One line of simulated pipeline output
- AnalysisResult: Report text plus the static file manifest

Example:
    >>> from omics_dashboard.core import AnalysisConfig, WorkflowType, StatMethod
    >>>
    >>> config = AnalysisConfig(
    ...     workflow=WorkflowType.DIFF_EXPRESSION,
    ...     stat_method=StatMethod.WILCOXON,
    ...     p_value_threshold=0.01,
    ... )
"""

from .dataclasses import (
    ViewMode,
    WorkflowType,
    StatMethod,
    RunState,
    ResultStatus,
    ChartType,
    DEFAULT_PROJECT_PATH,
    parse_threshold,
    AnalysisConfig,
    LogEntry,
    FileEntry,
    AnalysisResult,
)

__all__ = [
    "ViewMode",
    "WorkflowType",
    "StatMethod",
    "RunState",
    "ResultStatus",
    "ChartType",
    "DEFAULT_PROJECT_PATH",
    "parse_threshold",
    "AnalysisConfig",
    "LogEntry",
    "FileEntry",
    "AnalysisResult",
]
