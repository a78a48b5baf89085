"""Chart rendering functions.

Maps a list of data-point records to one of three HoloViews presentations.
All functions return HoloViews objects that display in Jupyter notebooks
and in ``pn.pane.HoloViews``.

Example - Volcano plot:
    >>> from omics_dashboard.plotting import plot_volcano, SAMPLE_VOLCANO_DATA
    >>> plot = plot_volcano(SAMPLE_VOLCANO_DATA)

Example - Dispatch on chart type:
    >>> plot = plot_chart(ChartType.BAR, SAMPLE_EXPRESSION_DATA)

Fields a chart does not read are ignored; missing fields become NaN.
"""

import numpy as np
import pandas as pd
import holoviews as hv

from bokeh.embed import file_html
from bokeh.resources import CDN as bokeh_cdn

from ..core import ChartType

hv.extension("bokeh")


POINT_FIELDS = ["name", "x", "y", "value", "category"]

# Colors
SIGNIFICANT_COLOR = "#ef4444"
DEFAULT_POINT_COLOR = "#94a3b8"
CONTROL_BAR_COLOR = "#94a3b8"
BAR_COLOR = "#6366f1"
LINE_COLOR = "#10b981"
GUIDE_COLOR = "#94a3b8"

# Fixed volcano guides: no fold change, and p = 0.05 on a -log10 scale
ZERO_FOLD_CHANGE = 0.0
SIGNIFICANCE_LINE = 1.3

DEFAULT_TOOLS = ["hover", "pan", "wheel_zoom", "box_zoom", "reset", "save"]


def scatter_color(category) -> str:
    """Color for a volcano point: only exactly "Significant" is highlighted."""
    return SIGNIFICANT_COLOR if category == "Significant" else DEFAULT_POINT_COLOR


def bar_color(category) -> str:
    """Color for a bar: exactly "Control" is grey, everything else indigo."""
    return CONTROL_BAR_COLOR if category == "Control" else BAR_COLOR


def points_to_dataframe(points: list[dict]) -> pd.DataFrame:
    """Convert data-point records to a DataFrame.

    Every column in POINT_FIELDS is present; absent values are NaN.
    """
    df = pd.DataFrame.from_records(list(points))
    for col in POINT_FIELDS:
        if col not in df.columns:
            df[col] = np.nan
    return df


def prepare_volcano_frame(points: list[dict]) -> pd.DataFrame:
    """DataFrame for the volcano plot with a per-point ``color`` column."""
    df = points_to_dataframe(points)
    df["color"] = [scatter_color(c) for c in df["category"]]
    df["category"] = df["category"].fillna("")
    return df


def prepare_bar_frame(points: list[dict]) -> pd.DataFrame:
    """DataFrame for the bar chart with a per-bar ``color`` column."""
    df = points_to_dataframe(points)
    df["color"] = [bar_color(c) for c in df["category"]]
    df["category"] = df["category"].fillna("")
    df["name"] = df["name"].astype(str)
    return df


def plot_volcano(
    points: list[dict],
    title: str = "Volcano Plot",
    width: int = 800,
    height: int = 500,
) -> hv.Overlay:
    """Plot a volcano (scatter) chart.

    Parameters
    ----------
    points : list[dict]
        Records with ``x`` (log2 fold change), ``y`` (-log10 p-value) and
        optional ``category``
    title : str, default="Volcano Plot"
        Plot title
    width : int, default=800
        Plot width in pixels
    height : int, default=500
        Plot height in pixels

    Returns
    -------
    hv.Overlay
        Scatter plus the x=0 and y=1.3 reference guides
    """
    df = prepare_volcano_frame(points)

    scatter = hv.Scatter(
        df, kdims=["x"], vdims=["y", "name", "category", "color"], label="Genes",
    ).opts(
        color="color",
        alpha=0.7,
        size=7,
    )

    vertical = hv.VLine(ZERO_FOLD_CHANGE).opts(color=GUIDE_COLOR, line_width=1)
    horizontal = hv.HLine(SIGNIFICANCE_LINE).opts(
        color=SIGNIFICANT_COLOR, line_dash="dashed", line_width=1,
    )

    x_max = df["x"].max()
    label_x = float(x_max) if not pd.isna(x_max) else ZERO_FOLD_CHANGE
    label = hv.Text(label_x, SIGNIFICANCE_LINE, "p=0.05", halign="right", valign="bottom").opts(
        text_color=SIGNIFICANT_COLOR, text_font_size="10pt",
    )

    overlay = scatter * vertical * horizontal * label
    return overlay.opts(
        xlabel="Log2 Fold Change",
        ylabel="-Log10 P-value",
        title=title,
        width=width,
        height=height,
        show_legend=False,
        tools=DEFAULT_TOOLS,
        active_tools=["wheel_zoom"],
    )


def plot_bar(
    points: list[dict],
    title: str = "Expression",
    width: int = 800,
    height: int = 500,
) -> hv.Bars:
    """Plot a bar chart of ``value`` by ``name``, colored by control status."""
    df = prepare_bar_frame(points)

    bars = hv.Bars(df, kdims=["name"], vdims=["value", "category", "color"])
    return bars.opts(
        color="color",
        xlabel="",
        ylabel="value",
        title=title,
        width=width,
        height=height,
        tools=DEFAULT_TOOLS,
        show_grid=True,
    )


def plot_line(
    points: list[dict],
    title: str = "Time Series",
    width: int = 800,
    height: int = 500,
) -> hv.Overlay:
    """Plot ``value`` over the ordered ``name`` labels as one series.

    Labels are treated as ordered categories, not parsed as times.
    """
    import hvplot.pandas  # noqa: F401

    df = points_to_dataframe(points)[["name", "value"]].copy()
    df["name"] = df["name"].astype(str)

    if df.empty:
        overlay = hv.Curve([], "name", "value") * hv.Scatter([], "name", "value")
    else:
        curve = df.hvplot.line(x="name", y="value", color=LINE_COLOR, line_width=3, label="value")
        dots = df.hvplot.scatter(x="name", y="value", color=LINE_COLOR, size=8)
        overlay = curve * dots

    return overlay.opts(
        xlabel="",
        ylabel="value",
        title=title,
        width=width,
        height=height,
        tools=DEFAULT_TOOLS,
    )


def plot_chart(
    chart_type: ChartType | str,
    points: list[dict],
    **kwargs,
):
    """Plot records with the presentation for ``chart_type``.

    Raises
    ------
    ValueError
        If the chart type is unknown
    """
    try:
        chart_type = ChartType(chart_type)
    except ValueError:
        available = [c.value for c in ChartType]
        raise ValueError(f"Unknown chart type: {chart_type}. Available: {available}") from None

    if chart_type == ChartType.SCATTER:
        return plot_volcano(points, **kwargs)
    if chart_type == ChartType.BAR:
        return plot_bar(points, **kwargs)
    return plot_line(points, **kwargs)


def chart_to_html(plot, title: str = "Chart") -> str:
    """Export a chart as a standalone HTML document (Bokeh from CDN)."""
    figure = hv.render(plot, backend="bokeh")
    return file_html(figure, bokeh_cdn, title)
