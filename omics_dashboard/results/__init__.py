"""Rendering of run results (console, file manifest, report)."""

from .renderer import (
    manifest_to_dataframe,
    format_console,
    render_placeholder,
    render_result,
    report_download,
    report_filename,
    CONSOLE_PLACEHOLDER,
    CONSOLE_DONE,
    NO_RESULTS_MESSAGE,
    PROCESSING_MESSAGE,
)

__all__ = [
    'manifest_to_dataframe',
    'format_console',
    'render_placeholder',
    'render_result',
    'report_download',
    'report_filename',
    'CONSOLE_PLACEHOLDER',
    'CONSOLE_DONE',
    'NO_RESULTS_MESSAGE',
    'PROCESSING_MESSAGE',
]
