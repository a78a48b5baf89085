"""Core dataclasses and enums for the omics dashboard.

These are the fundamental data structures used throughout the system:
- AnalysisConfig: Parameters for one simulated pipeline run
- LogEntry: A single line of simulated pipeline output
- FileEntry: One row of the generated-files manifest
- AnalysisResult: The outcome of one run (report + manifest)

All result classes support serialization via to_dict() for export.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
import math


class ViewMode(str, Enum):
    """Screens of the dashboard."""
    HOME = "HOME"
    ANALYSIS = "ANALYSIS"
    PLOTTING = "PLOTTING"


class WorkflowType(str, Enum):
    """Canned pipeline categories a user can run."""
    BULK_RNA = "BULK_RNA"
    SINGLE_CELL = "SINGLE_CELL"
    DIFF_EXPRESSION = "DIFF_EXPRESSION"


class StatMethod(str, Enum):
    """Statistical methods offered for differential expression."""
    DESEQ2 = "DESeq2"
    T_TEST = "T-Test"
    WILCOXON = "Wilcoxon"
    MANN_WHITNEY = "Mann-Whitney U"


class RunState(str, Enum):
    """Lifecycle of a simulated pipeline run."""
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class ResultStatus(str, Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class ChartType(str, Enum):
    """Chart presentations supported by the plotting screen."""
    SCATTER = "SCATTER"
    BAR = "BAR"
    LINE = "LINE"


DEFAULT_PROJECT_PATH = "/data/projects/sample_01"


def parse_threshold(text: Any) -> float:
    """Parse a numeric threshold the way a number input does.

    Invalid entries are not rejected; they become NaN.

    Parameters
    ----------
    text : Any
        User input (string or number)

    Returns
    -------
    float
        Parsed value, or NaN if it cannot be parsed
    """
    if isinstance(text, bool):
        return math.nan
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


@dataclass
class AnalysisConfig:
    """Configuration for a single simulated pipeline run.

    Only ``workflow``, ``stat_method`` and the two thresholds influence the
    simulated stages and the report prompt. The remaining fields mirror
    inputs shown on the Analysis screen and are carried for display.

    Attributes
    ----------
    workflow : WorkflowType
        Selected pipeline
    project_path : str
        Input directory (free text)
    p_value_threshold : float
        P-value cutoff (may be NaN if the user typed garbage)
    log2fc_threshold : float
        Log2 fold-change cutoff
    stat_method : StatMethod
        Statistical method for differential expression
    tools : list[str]
        Tools ticked in the Bulk RNA-Seq tool list
    platform : str, optional
        Single-cell platform
    reference_genome : str, optional
        Single-cell reference genome
    grouping_path : str, optional
        Group metadata file for differential expression
    """
    workflow: WorkflowType = WorkflowType.BULK_RNA
    project_path: str = DEFAULT_PROJECT_PATH
    p_value_threshold: float = 0.05
    log2fc_threshold: float = 1.0
    stat_method: StatMethod = StatMethod.DESEQ2
    tools: list[str] = field(default_factory=list)
    platform: str | None = None
    reference_genome: str | None = None
    grouping_path: str | None = None

    def __post_init__(self):
        # Plain strings such as "SINGLE_CELL" or "Wilcoxon" are accepted
        self.workflow = WorkflowType(self.workflow)
        self.stat_method = StatMethod(self.stat_method)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "workflow": self.workflow.value,
            "project_path": self.project_path,
            "p_value_threshold": self.p_value_threshold,
            "log2fc_threshold": self.log2fc_threshold,
            "stat_method": self.stat_method.value,
            "tools": list(self.tools),
            "platform": self.platform,
            "reference_genome": self.reference_genome,
            "grouping_path": self.grouping_path,
        }


@dataclass
class LogEntry:
    """One line of simulated pipeline output."""
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    run_id: int = 0

    def format(self) -> str:
        """Render as ``[HH:MM:SS] message``."""
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.message}"


@dataclass(frozen=True)
class FileEntry:
    """A generated output file shown in the results panel.

    These are static literals; no file backs them.
    """
    name: str
    type: str
    size: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "type": self.type, "size": self.size}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileEntry":
        """Create from dictionary."""
        return cls(name=data["name"], type=data["type"], size=data["size"])


@dataclass
class AnalysisResult:
    """Outcome of one simulated run.

    Created once per run and replaced wholesale by the next run.

    Attributes
    ----------
    report_markdown : str
        Report text returned by the generative service (Markdown)
    status : ResultStatus
        SUCCESS or ERROR
    files : list[FileEntry]
        File manifest for the workflow; empty on error
    timestamp : datetime
        Completion time
    """
    report_markdown: str
    status: ResultStatus
    files: list[FileEntry] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def time_label(self) -> str:
        """Completion time as ``HH:MM:SS``."""
        return self.timestamp.strftime("%H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "report_markdown": self.report_markdown,
            "status": self.status.value,
            "files": [f.to_dict() for f in self.files],
            "timestamp": self.timestamp.isoformat(),
        }
