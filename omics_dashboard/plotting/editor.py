"""Raw-JSON chart data editor.

The editor text is the single source of truth for custom chart data. Every
text change is parsed and validated against the schema of the active chart
type:

- the top level is a JSON array of objects
- ``name`` is a string
- SCATTER needs numeric ``x`` and ``y``
- BAR and LINE need a numeric ``value``
- ``category``, when present, is a string

A valid parse replaces the chart data. An invalid one keeps the last valid
data and reports why in ``parse_error``.

Example:
    >>> editor = ChartEditor(chart_type=ChartType.BAR)
    >>> editor.text = "{bad json"
    >>> len(editor.data), bool(editor.parse_error)
    (6, True)
"""

from dataclasses import dataclass
import json
import logging
import numbers

import param

from ..core import ChartType
from .charts import plot_chart
from .samples import get_sample_data

logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 5


@dataclass(frozen=True)
class PointSchema:
    """Fields one chart type reads from each record."""
    required_numeric: tuple[str, ...]
    optional_numeric: tuple[str, ...]


POINT_SCHEMAS: dict[ChartType, PointSchema] = {
    ChartType.SCATTER: PointSchema(required_numeric=("x", "y"), optional_numeric=("value",)),
    ChartType.BAR: PointSchema(required_numeric=("value",), optional_numeric=("x", "y")),
    ChartType.LINE: PointSchema(required_numeric=("value",), optional_numeric=("x", "y")),
}


class ChartDataParseError(ValueError):
    """Chart data text could not be parsed or does not fit the chart type."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        shown = self.errors[:MAX_REPORTED_ERRORS]
        message = "; ".join(shown)
        if len(self.errors) > MAX_REPORTED_ERRORS:
            message += f" (and {len(self.errors) - MAX_REPORTED_ERRORS} more)"
        super().__init__(message)


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _validate_point(index: int, point, schema: PointSchema) -> list[str]:
    if not isinstance(point, dict):
        return [f"Item {index}: expected an object, got {type(point).__name__}"]

    errors = []
    if not isinstance(point.get("name"), str):
        errors.append(f"Item {index}: 'name' must be a string")

    for key in schema.required_numeric:
        if key not in point:
            errors.append(f"Item {index}: missing numeric '{key}'")
        elif not _is_number(point[key]):
            errors.append(f"Item {index}: '{key}' must be a number")

    for key in schema.optional_numeric:
        if key in point and point[key] is not None and not _is_number(point[key]):
            errors.append(f"Item {index}: '{key}' must be a number")

    category = point.get("category")
    if category is not None and not isinstance(category, str):
        errors.append(f"Item {index}: 'category' must be a string")

    return errors


def serialize_chart_data(points: list[dict]) -> str:
    """Serialize records to the editor's JSON text."""
    return json.dumps(points, indent=2)


def parse_chart_data(text: str, chart_type: ChartType | str) -> list[dict]:
    """Parse and validate editor text.

    Parameters
    ----------
    text : str
        Raw JSON text
    chart_type : ChartType or str
        Chart type whose schema the records must satisfy

    Returns
    -------
    list[dict]
        Parsed records

    Raises
    ------
    ChartDataParseError
        If the text is not JSON, not an array, or a record does not fit
    """
    schema = POINT_SCHEMAS[ChartType(chart_type)]

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ChartDataParseError([f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"]) from e

    if not isinstance(parsed, list):
        raise ChartDataParseError([f"Expected a JSON array, got {type(parsed).__name__}"])

    errors = []
    for i, point in enumerate(parsed):
        errors.extend(_validate_point(i, point, schema))
    if errors:
        raise ChartDataParseError(errors)

    return parsed


class ChartEditor(param.Parameterized):
    """Chart type, editor text and the last valid data set.

    Changing ``chart_type`` loads that type's sample into both ``text`` and
    ``data``, discarding unsaved edits.
    """

    chart_type = param.Selector(default=ChartType.SCATTER, objects=list(ChartType))
    text = param.String(default="", doc="Raw JSON text")
    data = param.List(default=[], doc="Last successfully parsed records")
    parse_error = param.String(default="", doc="Why the current text was rejected")

    def __init__(self, **params):
        super().__init__(**params)
        self.load_sample()

    @property
    def is_valid(self) -> bool:
        return not self.parse_error

    @param.depends("chart_type", watch=True)
    def load_sample(self):
        """Reset text and data to the built-in sample for the chart type."""
        sample = get_sample_data(self.chart_type)
        self.param.update(
            data=sample,
            text=serialize_chart_data(sample),
            parse_error="",
        )

    @param.depends("text", watch=True)
    def _parse_text(self):
        try:
            points = parse_chart_data(self.text, self.chart_type)
        except ChartDataParseError as e:
            logger.debug(f"Keeping previous chart data: {e}")
            self.parse_error = str(e)
            return
        self.param.update(data=points, parse_error="")

    def plot(self, **kwargs):
        """Render the current data with the active chart type."""
        return plot_chart(self.chart_type, self.data, **kwargs)
