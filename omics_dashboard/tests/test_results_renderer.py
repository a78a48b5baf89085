"""Tests for result rendering (console text, manifest table, report panel)."""

from datetime import datetime

import panel as pn
import pytest


@pytest.fixture
def success_result():
    from omics_dashboard.core import AnalysisResult, ResultStatus
    from omics_dashboard.reporting import get_file_manifest

    return AnalysisResult(
        report_markdown="## Summary\n\n150 genes",
        status=ResultStatus.SUCCESS,
        files=get_file_manifest("DIFF_EXPRESSION"),
        timestamp=datetime(2024, 3, 1, 14, 30, 0),
    )


@pytest.fixture
def error_result():
    from omics_dashboard.core import AnalysisResult, ResultStatus

    return AnalysisResult(
        report_markdown="### Workflow Error\n\nFailed to execute pipeline. Details: boom",
        status=ResultStatus.ERROR,
        timestamp=datetime(2024, 3, 1, 14, 31, 0),
    )


class TestConsole:
    """Tests for format_console()."""

    def test_placeholder_when_empty(self):
        """Test the waiting message shows before any run."""
        from omics_dashboard.core import RunState
        from omics_dashboard.results import CONSOLE_PLACEHOLDER, format_console

        assert format_console([], RunState.IDLE) == CONSOLE_PLACEHOLDER

    def test_completed_marker(self):
        """Test the completion marker follows the log once COMPLETED."""
        from omics_dashboard.core import LogEntry, RunState
        from omics_dashboard.results import CONSOLE_DONE, format_console

        logs = [LogEntry(message="Scanning", timestamp=datetime(2024, 1, 1, 8, 0, 0))]

        assert format_console(logs, RunState.RUNNING) == "[08:00:00] Scanning"
        assert format_console(logs, RunState.COMPLETED).splitlines()[-1] == CONSOLE_DONE

    def test_marker_after_failed_run(self):
        """Test a failed run's log also ends with the completion marker."""
        from omics_dashboard.core import LogEntry, RunState
        from omics_dashboard.results import CONSOLE_DONE, format_console
        from omics_dashboard.simulation import FAILED_MESSAGE

        logs = [
            LogEntry(message="Initializing BULK_RNA pipeline...", timestamp=datetime(2024, 1, 1, 8, 0, 0)),
            LogEntry(message=FAILED_MESSAGE, timestamp=datetime(2024, 1, 1, 8, 0, 5)),
        ]

        lines = format_console(logs, RunState.FAILED).splitlines()

        assert lines[-2] == f"[08:00:05] {FAILED_MESSAGE}"
        assert lines[-1] == CONSOLE_DONE
        assert CONSOLE_DONE not in format_console(logs, RunState.RUNNING)


class TestManifestTable:
    """Tests for manifest_to_dataframe()."""

    def test_columns_and_kinds(self, success_result):
        """Test CSV and Excel files are tables, others documents."""
        from omics_dashboard.core import FileEntry
        from omics_dashboard.results import manifest_to_dataframe

        df = manifest_to_dataframe(success_result.files + [FileEntry("web_summary.html", "HTML", "3.5 MB")])

        assert list(df.columns) == ["name", "type", "size", "kind"]
        assert (df["kind"].iloc[:6] == "table").all()
        assert df["kind"].iloc[-1] == "document"

    def test_empty_manifest(self):
        """Test an empty manifest keeps its columns."""
        from omics_dashboard.results import manifest_to_dataframe

        df = manifest_to_dataframe([])

        assert df.empty
        assert list(df.columns) == ["name", "type", "size", "kind"]


@pytest.mark.gui
class TestResultPanels:
    """Tests for the Panel components of the results area."""

    def test_success_panel(self, success_result):
        """Test a success result shows badge, table and report."""
        from omics_dashboard.results import render_result

        panel = render_result(success_result)
        badge = panel.objects[0]

        assert isinstance(badge, pn.pane.Alert)
        assert badge.object == "Done (14:30:00)"
        assert any(isinstance(obj, pn.widgets.Tabulator) for obj in panel.objects)
        assert any(isinstance(obj, pn.widgets.FileDownload) for obj in panel.objects)

    def test_error_panel_has_no_table(self, error_result):
        """Test an error result shows the error badge and no manifest."""
        from omics_dashboard.results import render_result

        panel = render_result(error_result)

        assert panel.objects[0].object == "Error (14:31:00)"
        assert panel.objects[0].alert_type == "danger"
        assert not any(isinstance(obj, pn.widgets.Tabulator) for obj in panel.objects)

    def test_report_download_contents(self, success_result):
        """Test the download button serves the report Markdown."""
        from omics_dashboard.results import report_download

        button = report_download(success_result)

        assert button.filename == "analysis_report_20240301_143000.md"
        assert button.callback().read().decode("utf-8") == success_result.report_markdown

    def test_placeholder_messages(self):
        """Test idle and running placeholders."""
        from omics_dashboard.core import RunState
        from omics_dashboard.results import NO_RESULTS_MESSAGE, PROCESSING_MESSAGE, render_placeholder

        idle = render_placeholder(RunState.IDLE)
        running = render_placeholder(RunState.RUNNING)

        assert NO_RESULTS_MESSAGE in idle.objects[-1].object
        assert PROCESSING_MESSAGE in running.objects[-1].object
        assert isinstance(running.objects[0], pn.indicators.LoadingSpinner)
