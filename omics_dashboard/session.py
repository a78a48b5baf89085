"""Screen-local state for the Analysis screen.

One ``AnalysisSession`` is owned by each Analysis screen instance. It holds
the user-editable configuration plus the logs, result and lifecycle state of
the current run, so the simulator and the view share one explicit object
instead of closures.
"""

import param

from .configs import get_workflow_config
from .core import (
    AnalysisConfig,
    AnalysisResult,
    DEFAULT_PROJECT_PATH,
    LogEntry,
    RunState,
    StatMethod,
    WorkflowType,
)


class AnalysisSession(param.Parameterized):
    """Configuration and run state for one Analysis screen."""

    # Configuration
    workflow = param.Selector(
        default=WorkflowType.BULK_RNA,
        objects=list(WorkflowType),
        doc="Selected pipeline",
    )
    project_path = param.String(default=DEFAULT_PROJECT_PATH, doc="Input directory")
    p_value_threshold = param.Number(default=0.05, doc="P-value cutoff (NaN if unparsable)")
    log2fc_threshold = param.Number(default=1.0, doc="Log2 fold-change cutoff")
    stat_method = param.Selector(
        default=StatMethod.DESEQ2,
        objects=list(StatMethod),
        doc="Statistical method for differential expression",
    )
    tools = param.List(default=[], doc="Ticked Bulk RNA-Seq tools (cosmetic)")
    platform = param.String(default=None, allow_None=True, doc="Single-cell platform (cosmetic)")
    reference_genome = param.String(default=None, allow_None=True, doc="Reference genome (cosmetic)")

    # Run state
    logs = param.List(default=[], doc="Log of the current run")
    result = param.ClassSelector(class_=AnalysisResult, default=None, allow_None=True)
    state = param.Selector(default=RunState.IDLE, objects=list(RunState))
    run_id = param.Integer(default=0, doc="Identifier of the most recent run")

    def __init__(self, **params):
        super().__init__(**params)
        bulk = get_workflow_config(WorkflowType.BULK_RNA)
        single_cell = get_workflow_config(WorkflowType.SINGLE_CELL)
        if not self.tools:
            self.tools = list(bulk.get_option("tools", []))
        if self.platform is None:
            self.platform = next(iter(single_cell.get_option("platforms", [])), None)
        if self.reference_genome is None:
            self.reference_genome = next(iter(single_cell.get_option("reference_genomes", [])), None)

    @property
    def is_running(self) -> bool:
        return self.state == RunState.RUNNING

    def to_config(self) -> AnalysisConfig:
        """Snapshot the current configuration."""
        grouping = get_workflow_config(WorkflowType.DIFF_EXPRESSION).get_option("grouping_file")
        return AnalysisConfig(
            workflow=WorkflowType(self.workflow),
            project_path=self.project_path,
            p_value_threshold=self.p_value_threshold,
            log2fc_threshold=self.log2fc_threshold,
            stat_method=StatMethod(self.stat_method),
            tools=list(self.tools),
            platform=self.platform,
            reference_genome=self.reference_genome,
            grouping_path=grouping,
        )

    def reset_run(self) -> None:
        """Discard logs and result of the previous run."""
        self.param.update(logs=[], result=None)

    def is_current(self, run_id: int) -> bool:
        """Whether ``run_id`` identifies the most recent run."""
        return run_id == self.run_id

    def append_log(self, message: str, run_id: int) -> bool:
        """Append a log line tagged with ``run_id``.

        Lines from a superseded run are dropped.

        Returns
        -------
        bool
            True if the line was appended
        """
        if not self.is_current(run_id):
            return False
        # Reassign so watchers fire
        self.logs = self.logs + [LogEntry(message=message, run_id=run_id)]
        return True

    @property
    def log_messages(self) -> list[str]:
        return [entry.message for entry in self.logs]
