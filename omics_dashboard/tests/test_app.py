"""Tests for the Panel application wiring."""

import asyncio

import pytest


pytestmark = pytest.mark.gui


@pytest.fixture
def app(fake_requester):
    """App with a fake report requester and no stage delay."""
    from omics_dashboard.app import create_app

    return create_app(requester=fake_requester, stage_delay=0)


class TestNavigation:
    """Tests for screen switching."""

    def test_starts_on_dashboard(self, app):
        """Test the home screen is shown first."""
        from omics_dashboard.core import ViewMode

        assert app.view_mode == ViewMode.HOME
        assert app.current_screen is app._screens[ViewMode.HOME]

    def test_navigate_swaps_screen(self, app):
        """Test navigate() shows the requested screen and syncs the nav bar."""
        from omics_dashboard.core import ViewMode

        app.navigate(ViewMode.PLOTTING)

        assert app.current_screen is app._screens[ViewMode.PLOTTING]
        assert app._nav.value == ViewMode.PLOTTING

    def test_nav_bar_selection(self, app):
        """Test clicking a nav entry changes the view mode."""
        from omics_dashboard.core import ViewMode

        app._nav.value = ViewMode.ANALYSIS

        assert app.view_mode == ViewMode.ANALYSIS

    def test_home_card_buttons(self, app):
        """Test the dashboard cards navigate to their screens."""
        from omics_dashboard.core import ViewMode

        app._open_plotting_btn.clicks += 1
        assert app.view_mode == ViewMode.PLOTTING

        app._open_analysis_btn.clicks += 1
        assert app.view_mode == ViewMode.ANALYSIS

    def test_view_builds(self, app):
        """Test the top-level layout builds."""
        import panel as pn

        assert isinstance(app.view(), pn.Column)


class TestAnalysisScreen:
    """Tests for the Analysis screen controls."""

    def test_workflow_selection_updates_session(self, app):
        """Test picking a workflow updates the session."""
        from omics_dashboard.core import WorkflowType

        app._workflow_selector.value = WorkflowType.DIFF_EXPRESSION

        assert app.session.workflow == WorkflowType.DIFF_EXPRESSION

    def test_threshold_inputs_parse_to_nan(self, app):
        """Test unparsable cutoffs are stored as NaN."""
        import math

        app._p_value_input.value = "abc"
        app._log2fc_input.value = "2"

        assert math.isnan(app.session.p_value_threshold)
        assert app.session.log2fc_threshold == pytest.approx(2.0)

    def test_run_button_disabled_while_running(self, app):
        """Test the run button locks during a run."""
        app.simulator.begin()

        assert app._run_btn.disabled
        assert app._workflow_selector.disabled
        assert app._run_btn.name == "Running..."

    def test_workflow_fixed_while_running(self, app):
        """Test selecting a workflow mid-run snaps the selector back."""
        from omics_dashboard.core import WorkflowType

        app.simulator.begin()
        app._workflow_selector.value = WorkflowType.DIFF_EXPRESSION

        assert app.session.workflow == WorkflowType.BULK_RNA
        assert app._workflow_selector.value == WorkflowType.BULK_RNA

    def test_run_updates_console_and_results(self, app):
        """Test a completed run fills the console and results area."""
        import panel as pn
        from omics_dashboard.core import RunState
        from omics_dashboard.results import CONSOLE_DONE

        asyncio.run(app._on_run(None))

        assert app.session.state == RunState.COMPLETED
        assert CONSOLE_DONE in app._console.object
        assert not app._run_btn.disabled
        badge = app._results_area.objects[0].objects[0]
        assert isinstance(badge, pn.pane.Alert)
        assert badge.alert_type == "success"
        assert app._status_pane.alert_type == "success"

    def test_run_ignored_while_running(self, app, fake_client):
        """Test a second run request is ignored while one is active."""
        app.simulator.begin()

        asyncio.run(app._on_run(None))

        assert fake_client.calls == []


class TestPlottingScreen:
    """Tests for the Visualization screen controls."""

    def test_chart_type_resets_editor_widget(self, app):
        """Test switching chart type loads the sample into the text area."""
        from omics_dashboard.core import ChartType
        from omics_dashboard.plotting import SAMPLE_EXPRESSION_DATA, serialize_chart_data

        app._chart_type_selector.value = ChartType.BAR

        assert app.chart_editor.chart_type == ChartType.BAR
        assert app._data_input.value == serialize_chart_data(SAMPLE_EXPRESSION_DATA)

    def test_typing_invalid_json_shows_error(self, app):
        """Test invalid input shows the error and keeps the chart."""
        from omics_dashboard.core import ChartType

        app._chart_type_selector.value = ChartType.BAR
        chart_before = app._chart_pane.object

        app._data_input.value_input = "{bad json"

        assert app._parse_status.visible
        assert len(app.chart_editor.data) == 6
        assert app._chart_pane.object is chart_before

    def test_typing_valid_json_updates_chart(self, app):
        """Test valid input replaces the chart."""
        from omics_dashboard.core import ChartType

        app._chart_type_selector.value = ChartType.LINE
        chart_before = app._chart_pane.object

        app._data_input.value_input = '[{"name": "0h", "value": 1.0}]'

        assert not app._parse_status.visible
        assert app._chart_pane.object is not chart_before

    def test_export_html(self, app):
        """Test the export callback returns an HTML document."""
        html = app._export_chart().read().decode("utf-8")

        assert "<html" in html.lower()
