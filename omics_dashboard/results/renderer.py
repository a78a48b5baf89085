"""Result rendering for the Analysis screen.

Turns the run state into Panel components:
- the pipeline console (log lines)
- the file manifest table
- the report, rendered as Markdown
- a download button for the report
"""

import io

import pandas as pd
import panel as pn

from ..core import AnalysisResult, FileEntry, LogEntry, RunState

TABLE_FILE_TYPES = {"CSV", "Excel"}

CONSOLE_PLACEHOLDER = "Waiting for job submission..."
CONSOLE_DONE = "> Process Completed."
NO_RESULTS_MESSAGE = "No results generated yet."
PROCESSING_MESSAGE = "Processing biological data..."


def manifest_to_dataframe(files: list[FileEntry]) -> pd.DataFrame:
    """Convert a file manifest to a DataFrame for display.

    The ``kind`` column is "table" for spreadsheet-like outputs and
    "document" for everything else.
    """
    rows = [
        {
            "name": f.name,
            "type": f.type,
            "size": f.size,
            "kind": "table" if f.type in TABLE_FILE_TYPES else "document",
        }
        for f in files
    ]
    return pd.DataFrame(rows, columns=["name", "type", "size", "kind"])


def format_console(logs: list[LogEntry], state: RunState) -> str:
    """Render the pipeline console text.

    The completion marker follows the log of any run that is no longer
    active, including a failed one.
    """
    if not logs:
        return CONSOLE_PLACEHOLDER
    lines = [entry.format() for entry in logs]
    if state != RunState.RUNNING:
        lines.append(CONSOLE_DONE)
    return "\n".join(lines)


def report_filename(result: AnalysisResult) -> str:
    return f"analysis_report_{result.timestamp.strftime('%Y%m%d_%H%M%S')}.md"


def report_download(result: AnalysisResult) -> pn.widgets.FileDownload:
    """Download button for the report Markdown."""
    def get_markdown():
        return io.BytesIO(result.report_markdown.encode("utf-8"))

    return pn.widgets.FileDownload(
        callback=get_markdown,
        filename=report_filename(result),
        button_type="light",
        label="Download Report",
    )


def render_placeholder(state: RunState) -> pn.Column:
    """Results-area content when there is no result to show."""
    message = PROCESSING_MESSAGE if state == RunState.RUNNING else NO_RESULTS_MESSAGE
    items = [pn.pane.Markdown(f"*{message}*")]
    if state == RunState.RUNNING:
        items.insert(0, pn.indicators.LoadingSpinner(value=True, width=40, height=40))
    return pn.Column(*items, sizing_mode='stretch_width')


def render_result(result: AnalysisResult) -> pn.Column:
    """Render a result: status badge, file manifest, report.

    Parameters
    ----------
    result : AnalysisResult
        Result of the most recent run

    Returns
    -------
    pn.Column
        Panel layout for the results area
    """
    if result.success:
        badge = pn.pane.Alert(f"Done ({result.time_label})", alert_type="success")
    else:
        badge = pn.pane.Alert(f"Error ({result.time_label})", alert_type="danger")

    items = [badge]

    if result.files:
        items.append(pn.pane.Markdown("### Output Files"))
        items.append(pn.widgets.Tabulator(
            manifest_to_dataframe(result.files),
            disabled=True,
            show_index=False,
            sizing_mode='stretch_width',
        ))

    items.extend([
        pn.pane.Markdown("### Analysis Report"),
        pn.pane.Markdown(result.report_markdown, sizing_mode='stretch_width'),
        report_download(result),
    ])

    return pn.Column(*items, sizing_mode='stretch_width')
