import base64

import pytest

from models.common_models import ChartSpec
from services.viz_service import render_chart

PNG_MAGIC = b"\x89PNG"


@pytest.mark.parametrize("kind", ["line", "bar", "pie"])
def test_render_chart_kinds(kind):
    spec = ChartSpec(
        kind=kind,
        data=[{"date": "2024-01-01", "value": 3}, {"date": "2024-02-01", "value": 5}],
        x_key="date",
        y_key="value",
    )
    image = render_chart(spec)
    assert base64.b64decode(image).startswith(PNG_MAGIC)


def test_render_chart_empty_data():
    assert render_chart(ChartSpec(kind="bar", data=[], x_key="name", y_key="total")) is None


def test_render_chart_all_zero_pie():
    spec = ChartSpec(kind="pie", data=[{"name": "a", "value": 0}], x_key="name", y_key="value")
    assert render_chart(spec) is None
