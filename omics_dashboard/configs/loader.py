"""Configuration loader for workflow definitions.

Loads each workflow's stage messages, report instruction, file manifest and
cosmetic form options from JSON files. This keeps every canned literal in
one place, outside the code that simulates and reports on a run.

Usage:
    >>> from omics_dashboard.configs import get_workflow_config
    >>> cfg = get_workflow_config("DIFF_EXPRESSION")
    >>> print(cfg.display_name)
    >>> print(cfg.render_stages({"stat_method": "Wilcoxon", "p_value": 0.05}))
"""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any
import json
import math

from ..core import AnalysisConfig, FileEntry, StatMethod, WorkflowType


@dataclass
class WorkflowConfig:
    """Configuration for one workflow.

    Attributes
    ----------
    key : WorkflowType
        Workflow identifier
    display_name : str
        Label shown on the workflow selector
    description : str
        Short human-readable description
    stages : list[str]
        Stage message templates, in reveal order. May contain
        ``{stat_method}``, ``{p_value}`` and ``{log2fc}`` placeholders.
    report_instruction : str
        Workflow-specific part of the system instruction (same placeholders)
    files : list[FileEntry]
        Static manifest of "generated" output files
    options : dict[str, Any]
        Cosmetic form options (tool list, platforms, genomes, ...)
    """
    key: WorkflowType
    display_name: str
    description: str
    stages: list[str] = field(default_factory=list)
    report_instruction: str = ""
    files: list[FileEntry] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "WorkflowConfig":
        """Create from dictionary (JSON)."""
        return cls(
            key=WorkflowType(data["key"]),
            display_name=data.get("display_name", data["key"]),
            description=data.get("description", ""),
            stages=list(data.get("stages", [])),
            report_instruction=data.get("report_instruction", ""),
            files=[FileEntry.from_dict(f) for f in data.get("files", [])],
            options=dict(data.get("options", {})),
        )

    @property
    def n_stages(self) -> int:
        return len(self.stages)

    def render_stages(self, values: dict[str, Any]) -> list[str]:
        """Substitute placeholder values into the stage templates."""
        return [stage.format(**values) for stage in self.stages]

    def render_instruction(self, values: dict[str, Any]) -> str:
        """Substitute placeholder values into the report instruction."""
        return self.report_instruction.format(**values)

    def get_option(self, name: str, default: Any = None) -> Any:
        """Get a cosmetic form option."""
        return self.options.get(name, default)


# Module-level cache for loaded configs
_workflow_cache: dict[WorkflowType, WorkflowConfig] = {}


def _get_configs_dir() -> Path:
    """Get the workflow configs directory path."""
    return Path(__file__).parent / "workflows"


def _load_json_config(path: Path) -> dict:
    """Load a JSON config file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _coerce_workflow(workflow: WorkflowType | str) -> WorkflowType:
    if isinstance(workflow, WorkflowType):
        return workflow
    try:
        return WorkflowType(str(workflow).upper())
    except ValueError:
        available = [w.value for w in WorkflowType]
        raise ValueError(f"Unknown workflow: {workflow}. Available: {available}") from None


def get_workflow_config(workflow: WorkflowType | str) -> WorkflowConfig:
    """Get configuration for a workflow.

    Parameters
    ----------
    workflow : WorkflowType or str
        Workflow key (e.g., ``WorkflowType.BULK_RNA`` or "BULK_RNA")

    Returns
    -------
    WorkflowConfig
        Workflow definition

    Raises
    ------
    ValueError
        If the workflow is unknown or has no config file
    """
    key = _coerce_workflow(workflow)
    if key in _workflow_cache:
        return _workflow_cache[key]

    config_path = _get_configs_dir() / f"{key.value.lower()}.json"

    if not config_path.exists():
        available = list_workflows()
        raise ValueError(f"No config for workflow: {key.value}. Available: {available}")

    config = WorkflowConfig.from_dict(_load_json_config(config_path))
    _workflow_cache[key] = config
    return config


def list_workflows() -> list[str]:
    """List workflows that have a config file, in selector order."""
    configs_dir = _get_configs_dir()
    if not configs_dir.exists():
        return []
    present = {p.stem.upper() for p in configs_dir.glob("*.json")}
    return [w.value for w in WorkflowType if w.value in present]


def _format_number(value: float) -> str:
    """Render a threshold compactly.

    Whole numbers drop the decimal point (``1.0`` -> ``1``) and small
    magnitudes are written out in positional notation (``1e-05`` ->
    ``0.00001``). Values below ``1e-6`` keep the short exponent form.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(float(value))
    if "e" not in text:
        return text
    if abs(value) >= 1e-6:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent)}"


def template_values(config: AnalysisConfig) -> dict[str, Any]:
    """Placeholder values for stage and instruction templates.

    Thresholds are pre-formatted strings (``0.05`` stays ``0.05``, an
    unparsable value reads ``NaN``).
    """
    return {
        "stat_method": StatMethod(config.stat_method).value if config.stat_method else "Standard methods",
        "p_value": _format_number(config.p_value_threshold),
        "log2fc": _format_number(config.log2fc_threshold),
    }


def clear_cache() -> None:
    """Clear the config cache (useful for testing)."""
    _workflow_cache.clear()
