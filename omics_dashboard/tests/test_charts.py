"""Tests for chart rendering and sample data.

Minimal test set covering:
- Color rules for scatter points and bars
- DataFrame preparation (missing fields, color columns)
- Plot object types and fixed volcano guides
- Sample data shape
"""

import holoviews as hv
import pytest


class TestColorRules:
    """Tests for category-based coloring."""

    @pytest.mark.parametrize("category,expected", [
        ("Significant", "#ef4444"),
        ("Not Significant", "#94a3b8"),
        ("significant", "#94a3b8"),
        (None, "#94a3b8"),
    ])
    def test_scatter_color(self, category, expected):
        """Test only the exact string "Significant" is highlighted."""
        from omics_dashboard.plotting import scatter_color

        assert scatter_color(category) == expected

    @pytest.mark.parametrize("category,expected", [
        ("Control", "#94a3b8"),
        ("Treated", "#6366f1"),
        ("control", "#6366f1"),
        (None, "#6366f1"),
    ])
    def test_bar_color(self, category, expected):
        """Test only the exact string "Control" is grey."""
        from omics_dashboard.plotting import bar_color

        assert bar_color(category) == expected


class TestFramePreparation:
    """Tests for record-to-DataFrame conversion."""

    def test_missing_fields_become_nan(self):
        """Test fields a record lacks are present as NaN."""
        from omics_dashboard.plotting import points_to_dataframe

        df = points_to_dataframe([{"name": "A", "value": 1}])

        assert list(df.columns[:2]) == ["name", "value"]
        for col in ["x", "y", "category"]:
            assert col in df.columns
            assert df[col].isna().all()

    def test_volcano_frame_colors(self):
        """Test per-point colors follow the category."""
        from omics_dashboard.plotting import SIGNIFICANT_COLOR, DEFAULT_POINT_COLOR, prepare_volcano_frame

        df = prepare_volcano_frame([
            {"name": "G1", "x": 3.0, "y": 2.0, "category": "Significant"},
            {"name": "G2", "x": 0.1, "y": 0.2},
        ])

        assert list(df["color"]) == [SIGNIFICANT_COLOR, DEFAULT_POINT_COLOR]
        assert list(df["category"]) == ["Significant", ""]

    def test_bar_frame_colors(self):
        """Test control bars are grey and the rest indigo."""
        from omics_dashboard.plotting import BAR_COLOR, CONTROL_BAR_COLOR, SAMPLE_EXPRESSION_DATA, prepare_bar_frame

        df = prepare_bar_frame(SAMPLE_EXPRESSION_DATA)

        assert list(df["color"]) == [CONTROL_BAR_COLOR] * 3 + [BAR_COLOR] * 3


class TestPlots:
    """Tests for plot construction."""

    def test_volcano_has_fixed_guides(self):
        """Test guides sit at x=0 and y=1.3 regardless of data."""
        from omics_dashboard.plotting import plot_volcano

        plot = plot_volcano([{"name": "G1", "x": 10.0, "y": 50.0, "category": "Significant"}])

        assert isinstance(plot, hv.Overlay)
        vlines = [el for el in plot.data.values() if isinstance(el, hv.VLine)]
        hlines = [el for el in plot.data.values() if isinstance(el, hv.HLine)]
        assert vlines[0].data == 0.0
        assert hlines[0].data == 1.3
        assert any(isinstance(el, hv.Text) and el.text == "p=0.05" for el in plot.data.values())

    def test_bar_plot(self):
        """Test bar chart type and row count."""
        from omics_dashboard.plotting import SAMPLE_EXPRESSION_DATA, plot_bar

        plot = plot_bar(SAMPLE_EXPRESSION_DATA)

        assert isinstance(plot, hv.Bars)
        assert len(plot.data) == 6

    def test_line_plot(self):
        """Test line chart builds from the growth sample."""
        from omics_dashboard.plotting import SAMPLE_GROWTH_DATA, plot_line

        plot = plot_line(SAMPLE_GROWTH_DATA)

        assert isinstance(plot, hv.Overlay)

    def test_empty_data_renders(self):
        """Test every chart type accepts an empty array."""
        from omics_dashboard.core import ChartType
        from omics_dashboard.plotting import plot_chart

        for chart_type in ChartType:
            assert plot_chart(chart_type, []) is not None

    def test_unknown_chart_type(self):
        """Test dispatch rejects unknown types."""
        from omics_dashboard.plotting import plot_chart

        with pytest.raises(ValueError, match="Unknown chart type"):
            plot_chart("AREA", [])

    def test_chart_to_html(self):
        """Test HTML export produces a standalone document."""
        from omics_dashboard.plotting import SAMPLE_EXPRESSION_DATA, chart_to_html, plot_bar

        html = chart_to_html(plot_bar(SAMPLE_EXPRESSION_DATA), title="Expression")

        assert "<html" in html.lower()
        assert "Expression" in html


class TestSamples:
    """Tests for built-in sample data."""

    def test_volcano_sample(self):
        """Test the volcano sample size, fields and category rule."""
        from omics_dashboard.plotting import SAMPLE_VOLCANO_DATA

        assert len(SAMPLE_VOLCANO_DATA) == 100
        for point in SAMPLE_VOLCANO_DATA:
            significant = abs(point["x"]) > 2 and point["y"] > 1.3
            assert point["category"] == ("Significant" if significant else "Not Significant")

    def test_volcano_sample_is_reproducible(self):
        """Test the same seed yields the same sample."""
        from omics_dashboard.plotting import make_volcano_sample

        assert make_volcano_sample(seed=7) == make_volcano_sample(seed=7)

    def test_sample_sizes(self):
        """Test bar and line sample lengths."""
        from omics_dashboard.plotting import SAMPLE_EXPRESSION_DATA, SAMPLE_GROWTH_DATA

        assert len(SAMPLE_EXPRESSION_DATA) == 6
        assert len(SAMPLE_GROWTH_DATA) == 7

    def test_get_sample_data_returns_copy(self):
        """Test callers cannot mutate the shared sample."""
        from omics_dashboard.plotting import SAMPLE_GROWTH_DATA, get_sample_data

        sample = get_sample_data("LINE")
        sample[0]["value"] = 99

        assert SAMPLE_GROWTH_DATA[0]["value"] == 0.1
