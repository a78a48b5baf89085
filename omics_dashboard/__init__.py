"""Omics dashboard - AI-assisted bioinformatics workbench.

A Panel app with three screens: a dashboard, a simulated sequence-analysis
pipeline that ends in a Gemini-written report, and a chart builder for
volcano, bar and line plots.

Example workflow:
    1. Pick a pipeline (Bulk RNA-Seq, Single Cell, Diff. Expression)
    2. Adjust its configuration
    3. Run it and watch the stage log
    4. Read or download the generated report
    5. Switch to Visualization, paste JSON data and export the chart

Quick start:
    from omics_dashboard import launch_gui
    server = launch_gui()

Headless use:
    import asyncio
    from omics_dashboard import AnalysisSession, PipelineSimulator, WorkflowType

    session = AnalysisSession(workflow=WorkflowType.DIFF_EXPRESSION)
    result = asyncio.run(PipelineSimulator(session).run())
    print(result.report_markdown)
"""

from .core import (
    ViewMode,
    WorkflowType,
    StatMethod,
    RunState,
    ResultStatus,
    ChartType,
    parse_threshold,
    AnalysisConfig,
    LogEntry,
    FileEntry,
    AnalysisResult,
)

from .configs import (
    WorkflowConfig,
    get_workflow_config,
    list_workflows,
)

from .reporting import (
    ExternalServiceError,
    GeminiTextClient,
    ReportRequester,
)

from .session import AnalysisSession

from .simulation import (
    PipelineSimulator,
    SimulationError,
    get_simulation_steps,
)

from .plotting import (
    ChartEditor,
    ChartDataParseError,
    parse_chart_data,
    plot_chart,
    plot_volcano,
    plot_bar,
    plot_line,
)

from .launcher import launch_gui, GUIServer

__version__ = "0.1.0"

__all__ = [
    # Core
    "ViewMode",
    "WorkflowType",
    "StatMethod",
    "RunState",
    "ResultStatus",
    "ChartType",
    "parse_threshold",
    "AnalysisConfig",
    "LogEntry",
    "FileEntry",
    "AnalysisResult",
    # Configs
    "WorkflowConfig",
    "get_workflow_config",
    "list_workflows",
    # Reporting
    "ExternalServiceError",
    "GeminiTextClient",
    "ReportRequester",
    # Simulation
    "AnalysisSession",
    "PipelineSimulator",
    "SimulationError",
    "get_simulation_steps",
    # Plotting
    "ChartEditor",
    "ChartDataParseError",
    "parse_chart_data",
    "plot_chart",
    "plot_volcano",
    "plot_bar",
    "plot_line",
    # Launcher
    "launch_gui",
    "GUIServer",
]
