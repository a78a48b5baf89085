"""Panel GUI for the omics dashboard.

Three screens:
1. Dashboard: entry points to the other screens
2. Sequence Analysis: pick a workflow, configure it, run the simulated
   pipeline and read the generated report
3. Visualization: volcano, bar and line charts from sample or pasted JSON

Run with:
    panel serve omics_dashboard/app.py --show --autoreload

Or programmatically:
    from omics_dashboard.app import serve
    serve(port=5006)
"""

import io
import logging

import panel as pn
import param

pn.extension('tabulator', notifications=True)

from .configs import get_workflow_config, list_workflows
from .core import ChartType, RunState, StatMethod, ViewMode, WorkflowType, parse_threshold
from .plotting import ChartEditor, chart_to_html
from .reporting import ReportRequester
from .results import format_console, render_placeholder, render_result
from .session import AnalysisSession
from .simulation import PipelineSimulator, SimulationError, STAGE_DELAY_SECONDS

logger = logging.getLogger(__name__)

APP_TITLE = "BioVisio AI"

NAV_OPTIONS = {
    "Dashboard": ViewMode.HOME,
    "Sequence Analysis": ViewMode.ANALYSIS,
    "Visualization": ViewMode.PLOTTING,
}

CHART_OPTIONS = {
    "Volcano / Scatter": ChartType.SCATTER,
    "Bar Chart": ChartType.BAR,
    "Line Chart": ChartType.LINE,
}

CHART_DESCRIPTIONS = {
    ChartType.SCATTER: "Differential Expression",
    ChartType.BAR: "Quantification",
    ChartType.LINE: "Time Series / Growth",
}


class OmicsDashboardApp(param.Parameterized):
    """Omics dashboard application.

    Screens:
    1. Dashboard: landing page
    2. Sequence Analysis: simulated pipeline run and AI report
    3. Visualization: chart renderer with a live JSON editor

    Each instance owns its own AnalysisSession and ChartEditor, so
    state is private to one browser session.
    """

    view_mode = param.Selector(
        default=ViewMode.HOME,
        objects=list(ViewMode),
        doc="Active screen",
    )

    # Status
    status = param.String(default="Ready. Pick a pipeline or open the visualization tools.")

    def __init__(
        self,
        requester: ReportRequester | None = None,
        stage_delay: float = STAGE_DELAY_SECONDS,
        **params
    ):
        super().__init__(**params)

        # State
        self.session = AnalysisSession()
        self.simulator = PipelineSimulator(
            self.session,
            requester=requester,
            stage_delay=stage_delay,
        )
        self.chart_editor = ChartEditor()

        # Build UI components
        self._build_ui()

    def _build_ui(self):
        """Build UI components."""
        # === Navigation ===
        self._nav = pn.widgets.RadioButtonGroup(
            options=NAV_OPTIONS,
            value=self.view_mode,
            button_type="primary",
            button_style="outline",
        )
        self._nav.param.watch(self._on_nav_change, 'value')

        # === Screen 1: Dashboard ===
        self._open_analysis_btn = pn.widgets.Button(
            name="Start Analysis →",
            button_type="primary",
            width=200,
        )
        self._open_analysis_btn.on_click(lambda event: self.navigate(ViewMode.ANALYSIS))

        self._open_plotting_btn = pn.widgets.Button(
            name="Start Plotting →",
            button_type="primary",
            width=200,
        )
        self._open_plotting_btn.on_click(lambda event: self.navigate(ViewMode.PLOTTING))

        # === Screen 2: Sequence Analysis ===
        workflow_options = {
            get_workflow_config(key).display_name: WorkflowType(key)
            for key in list_workflows()
        }
        self._workflow_selector = pn.widgets.RadioButtonGroup(
            name="Pipelines",
            options=workflow_options,
            value=self.session.workflow,
            orientation='vertical',
            button_type="primary",
            button_style="outline",
            sizing_mode='stretch_width',
        )
        self._workflow_selector.param.watch(self._on_workflow_select, 'value')

        # Bulk RNA-Seq inputs
        bulk = get_workflow_config(WorkflowType.BULK_RNA)
        self._project_path_input = pn.widgets.TextInput.from_param(
            self.session.param.project_path,
            name="Input Directory",
        )
        self._tools_checkboxes = pn.widgets.CheckBoxGroup(
            name="Pipeline Tools",
            options=list(bulk.get_option("tools", [])),
            value=list(self.session.tools),
        )
        self._tools_checkboxes.param.watch(self._on_tools_change, 'value')

        # Single cell inputs
        single_cell = get_workflow_config(WorkflowType.SINGLE_CELL)
        self._platform_select = pn.widgets.Select(
            name="Platform",
            options=list(single_cell.get_option("platforms", [])),
            value=self.session.platform,
        )
        self._platform_select.param.watch(self._on_platform_change, 'value')

        self._genome_select = pn.widgets.Select(
            name="Reference Genome",
            options=list(single_cell.get_option("reference_genomes", [])),
            value=self.session.reference_genome,
        )
        self._genome_select.param.watch(self._on_genome_change, 'value')

        # Differential expression inputs
        self._stat_method_select = pn.widgets.Select(
            name="Statistical Method",
            options={m.value: m for m in StatMethod},
            value=self.session.stat_method,
        )
        self._stat_method_select.param.watch(self._on_stat_method_change, 'value')

        # Text inputs so that unparsable entries become NaN instead of being rejected
        self._p_value_input = pn.widgets.TextInput(
            name="P-value Cutoff",
            value=str(self.session.p_value_threshold),
            width=140,
        )
        self._p_value_input.param.watch(self._on_p_value_change, 'value')

        self._log2fc_input = pn.widgets.TextInput(
            name="Log2FC Cutoff",
            value=str(self.session.log2fc_threshold),
            width=140,
        )
        self._log2fc_input.param.watch(self._on_log2fc_change, 'value')

        self._workflow_config_area = pn.Column(sizing_mode='stretch_width')
        self._update_workflow_config_area()

        self._run_btn = pn.widgets.Button(
            name="Run Analysis",
            button_type="success",
            sizing_mode='stretch_width',
        )
        self._run_btn.on_click(self._on_run)

        self._console = pn.pane.Markdown(
            self._console_markdown(),
            sizing_mode='stretch_width',
        )

        self._results_area = pn.Column(
            render_placeholder(self.session.state),
            sizing_mode='stretch_width',
        )

        self.session.param.watch(self._on_session_change, ['logs', 'result', 'state'])

        # === Screen 3: Visualization ===
        self._chart_type_selector = pn.widgets.RadioButtonGroup(
            name="Chart Type",
            options=CHART_OPTIONS,
            value=self.chart_editor.chart_type,
            orientation='vertical',
            button_type="primary",
            button_style="outline",
            sizing_mode='stretch_width',
        )
        self._chart_type_selector.param.watch(self._on_chart_type_select, 'value')

        self._chart_description = pn.pane.Markdown(
            f"*{CHART_DESCRIPTIONS[self.chart_editor.chart_type]}*"
        )

        self._data_input = pn.widgets.TextAreaInput(
            name="Data Source (JSON)",
            value=self.chart_editor.text,
            height=400,
            sizing_mode='stretch_width',
        )
        self._data_input.param.watch(self._on_data_input, 'value_input')

        self._parse_status = pn.pane.Alert(
            "",
            alert_type="danger",
            visible=False,
            sizing_mode='stretch_width',
        )

        self._chart_pane = pn.pane.HoloViews(
            self.chart_editor.plot(),
            sizing_mode='stretch_width',
        )

        self._export_btn = pn.widgets.FileDownload(
            callback=self._export_chart,
            filename="chart.html",
            button_type="light",
            label="Export HTML",
            width=150,
        )

        self.chart_editor.param.watch(self._on_editor_text_change, 'text')
        self.chart_editor.param.watch(self._on_chart_data_change, 'data')
        self.chart_editor.param.watch(self._on_parse_error_change, 'parse_error')

        # Status bar
        self._status_pane = pn.pane.Alert(
            self.status,
            alert_type="info",
            sizing_mode='stretch_width',
        )

        # Screens and main area
        self._screens = {
            ViewMode.HOME: self._build_home_screen(),
            ViewMode.ANALYSIS: self._build_analysis_screen(),
            ViewMode.PLOTTING: self._build_plotting_screen(),
        }
        self._main_area = pn.Column(
            self._screens[self.view_mode],
            sizing_mode='stretch_width',
        )

        self.param.watch(self._on_view_mode_change, 'view_mode')

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    def _build_home_screen(self) -> pn.viewable.Viewable:
        analysis_card = pn.Card(
            pn.pane.Markdown(
                "### Analyze Sequences\n\n"
                "Translation, motifs, structure prediction, and AI summaries."
            ),
            self._open_analysis_btn,
            hide_header=True,
            width=360,
        )
        plotting_card = pn.Card(
            pn.pane.Markdown(
                "### Create Plots\n\n"
                "Volcano plots, heatmaps, and growth curves in seconds."
            ),
            self._open_plotting_btn,
            hide_header=True,
            width=360,
        )
        return pn.Column(
            pn.pane.Markdown(
                "# Biological Insights, Visualized.\n\n"
                "Accelerate your bioinformatics workflow with AI-powered sequence "
                "analysis and publication-ready visualization tools."
            ),
            pn.Row(analysis_card, plotting_card),
            sizing_mode='stretch_width',
        )

    def _build_analysis_screen(self) -> pn.viewable.Viewable:
        sidebar = pn.Column(
            pn.pane.Markdown("### Pipelines"),
            self._workflow_selector,
            pn.layout.Divider(),
            pn.pane.Markdown("### Configuration"),
            self._workflow_config_area,
            self._run_btn,
            width=320,
        )
        console = pn.Column(
            pn.pane.Markdown("### Pipeline Console"),
            self._console,
            width=420,
        )
        results = pn.Column(
            pn.pane.Markdown("### Results Output"),
            self._results_area,
            sizing_mode='stretch_width',
        )
        return pn.Row(sidebar, console, results, sizing_mode='stretch_width')

    def _build_plotting_screen(self) -> pn.viewable.Viewable:
        controls = pn.Column(
            pn.pane.Markdown("### Configuration"),
            self._chart_type_selector,
            self._chart_description,
            self._data_input,
            self._parse_status,
            width=360,
        )
        output = pn.Column(
            pn.Row(pn.pane.Markdown("### Visualization Output"), pn.layout.HSpacer(), self._export_btn),
            self._chart_pane,
            sizing_mode='stretch_width',
        )
        return pn.Row(controls, output, sizing_mode='stretch_width')

    def _update_workflow_config_area(self):
        """Show the inputs relevant to the selected workflow."""
        workflow = self.session.workflow
        config = get_workflow_config(workflow)

        if workflow == WorkflowType.BULK_RNA:
            items = [
                self._project_path_input,
                pn.pane.Markdown(f"*{config.get_option('input_hint', '')}*"),
                pn.pane.Markdown("**Pipeline Tools**"),
                self._tools_checkboxes,
            ]
        elif workflow == WorkflowType.SINGLE_CELL:
            items = [
                self._platform_select,
                self._genome_select,
            ]
        else:
            items = [
                pn.pane.Markdown("**Expression Matrix**\n\n*Upload or Select Server File*"),
                self._stat_method_select,
                pn.Row(self._p_value_input, self._log2fc_input),
                pn.pane.Markdown(f"**Grouping Info**: `{config.get_option('grouping_file', '')}`"),
            ]

        self._workflow_config_area.objects = [
            pn.pane.Markdown(f"*{config.description}*"),
            *items,
        ]

    @property
    def current_screen(self) -> pn.viewable.Viewable:
        """The screen currently shown in the main area."""
        return self._main_area.objects[0]

    def navigate(self, mode: ViewMode | str):
        """Switch to another screen."""
        self.view_mode = ViewMode(mode)

    # -------------------------------------------------------------------------
    # Callbacks
    # -------------------------------------------------------------------------

    def _on_nav_change(self, event):
        self.navigate(event.new)

    def _on_view_mode_change(self, event):
        self._main_area.objects = [self._screens[event.new]]
        self._nav.value = event.new

    def _on_workflow_select(self, event):
        if self.session.is_running:
            # Workflow is fixed while a run is active
            self._workflow_selector.value = self.session.workflow
            return
        self.session.workflow = event.new
        self._update_workflow_config_area()

    def _on_tools_change(self, event):
        self.session.tools = list(event.new)

    def _on_platform_change(self, event):
        self.session.platform = event.new

    def _on_genome_change(self, event):
        self.session.reference_genome = event.new

    def _on_stat_method_change(self, event):
        self.session.stat_method = event.new

    def _on_p_value_change(self, event):
        self.session.p_value_threshold = parse_threshold(event.new)

    def _on_log2fc_change(self, event):
        self.session.log2fc_threshold = parse_threshold(event.new)

    async def _on_run(self, event):
        """Run the simulated pipeline for the current configuration."""
        if self.session.is_running:
            return

        workflow_name = get_workflow_config(self.session.workflow).display_name
        self.status = f"Running {workflow_name} pipeline..."
        self._update_status("info")

        try:
            result = await self.simulator.run(supersede=False)
        except SimulationError as e:
            self.status = str(e)
            self._update_status("warning")
            return
        except Exception as e:
            logger.exception("Unexpected error during pipeline run")
            self.status = f"Error running pipeline: {e}"
            self._update_status("danger")
            return

        if result is None:
            if self.session.state == RunState.FAILED:
                self.status = "Pipeline failed."
                self._update_status("danger")
            return

        if result.success:
            self.status = f"{workflow_name} pipeline completed at {result.time_label}."
            self._update_status("success")
        else:
            self.status = "Report generation failed. See the results panel for details."
            self._update_status("warning")

    def _on_session_change(self, *events):
        self._console.object = self._console_markdown()

        if self.session.result is not None and not self.session.is_running:
            self._results_area.objects = [render_result(self.session.result)]
        else:
            self._results_area.objects = [render_placeholder(self.session.state)]

        running = self.session.is_running
        self._run_btn.disabled = running
        self._workflow_selector.disabled = running
        self._run_btn.name = "Running..." if running else "Run Analysis"

    def _console_markdown(self) -> str:
        text = format_console(self.session.logs, self.session.state)
        return f"```\n{text}\n```"

    def _on_chart_type_select(self, event):
        self.chart_editor.chart_type = event.new
        self._chart_description.object = f"*{CHART_DESCRIPTIONS[event.new]}*"

    def _on_data_input(self, event):
        self.chart_editor.text = event.new or ""

    def _on_editor_text_change(self, event):
        # Only push to the widget when the text did not come from it
        if self._data_input.value_input != event.new:
            self._data_input.value = event.new

    def _on_chart_data_change(self, event):
        try:
            self._chart_pane.object = self.chart_editor.plot()
        except Exception as e:
            logger.exception("Could not render chart")
            self._parse_status.object = f"Could not render chart: {e}"
            self._parse_status.visible = True

    def _on_parse_error_change(self, event):
        self._parse_status.object = f"Invalid data, showing last valid chart: {event.new}" if event.new else ""
        self._parse_status.visible = bool(event.new)

    def _export_chart(self):
        html = chart_to_html(self.chart_editor.plot(), title=APP_TITLE)
        return io.BytesIO(html.encode("utf-8"))

    def _update_status(self, alert_type: str):
        """Update status pane."""
        self._status_pane.alert_type = alert_type
        self._status_pane.object = self.status

    def view(self) -> pn.viewable.Viewable:
        """Create the main application view."""
        header = pn.Row(
            pn.pane.Markdown(f"## {APP_TITLE}"),
            pn.layout.HSpacer(),
            self._nav,
            sizing_mode='stretch_width',
        )

        layout = pn.Column(
            header,
            self._status_pane,
            self._main_area,
            sizing_mode='stretch_width',
        )

        return layout


def create_app(
    requester: ReportRequester | None = None,
    stage_delay: float = STAGE_DELAY_SECONDS,
) -> OmicsDashboardApp:
    """Create the application.

    Parameters
    ----------
    requester : ReportRequester, optional
        Report requester. Defaults to Gemini with the key from the environment.
    stage_delay : float, default=0.8
        Seconds between simulated pipeline stages

    Returns
    -------
    OmicsDashboardApp
        The application instance
    """
    return OmicsDashboardApp(
        requester=requester,
        stage_delay=stage_delay,
    )


def serve(
    stage_delay: float = STAGE_DELAY_SECONDS,
    **kwargs
):
    """Serve the application.

    A fresh app is created for every browser session.

    Parameters
    ----------
    stage_delay : float, default=0.8
        Seconds between simulated pipeline stages
    **kwargs
        Additional arguments passed to pn.serve()
    """
    def session_view():
        return create_app(stage_delay=stage_delay).view()

    kwargs.setdefault("title", APP_TITLE)
    return pn.serve(session_view, **kwargs)


# For panel serve
if __name__.startswith("bokeh"):
    create_app().view().servable(title=APP_TITLE)
