"""Plotting functions for the visualization screen.

Provides chart rendering, built-in sample data and the JSON data editor.
All plot functions return HoloViews objects.

Example - Volcano plot from the built-in sample:
    >>> from omics_dashboard.plotting import plot_volcano, SAMPLE_VOLCANO_DATA
    >>> plot = plot_volcano(SAMPLE_VOLCANO_DATA)
    >>> plot  # Display in notebook

Example - Editor with live parsing:
    >>> from omics_dashboard.plotting import ChartEditor
    >>> editor = ChartEditor(chart_type="LINE")
    >>> editor.text = '[{"name": "0h", "value": 0.2}]'
    >>> editor.plot()
"""

from .samples import (
    SAMPLE_VOLCANO_DATA,
    SAMPLE_EXPRESSION_DATA,
    SAMPLE_GROWTH_DATA,
    make_volcano_sample,
    get_sample_data,
)

from .charts import (
    SIGNIFICANT_COLOR,
    DEFAULT_POINT_COLOR,
    CONTROL_BAR_COLOR,
    BAR_COLOR,
    LINE_COLOR,
    ZERO_FOLD_CHANGE,
    SIGNIFICANCE_LINE,
    scatter_color,
    bar_color,
    points_to_dataframe,
    prepare_volcano_frame,
    prepare_bar_frame,
    plot_volcano,
    plot_bar,
    plot_line,
    plot_chart,
    chart_to_html,
)

from .editor import (
    ChartDataParseError,
    ChartEditor,
    parse_chart_data,
    serialize_chart_data,
)

__all__ = [
    # Samples
    "SAMPLE_VOLCANO_DATA",
    "SAMPLE_EXPRESSION_DATA",
    "SAMPLE_GROWTH_DATA",
    "make_volcano_sample",
    "get_sample_data",
    # Colors and guides
    "SIGNIFICANT_COLOR",
    "DEFAULT_POINT_COLOR",
    "CONTROL_BAR_COLOR",
    "BAR_COLOR",
    "LINE_COLOR",
    "ZERO_FOLD_CHANGE",
    "SIGNIFICANCE_LINE",
    "scatter_color",
    "bar_color",
    # Rendering
    "points_to_dataframe",
    "prepare_volcano_frame",
    "prepare_bar_frame",
    "plot_volcano",
    "plot_bar",
    "plot_line",
    "plot_chart",
    "chart_to_html",
    # Editor
    "ChartDataParseError",
    "ChartEditor",
    "parse_chart_data",
    "serialize_chart_data",
]
