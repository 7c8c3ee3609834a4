"""Shared fixtures for displaygrid tests."""

import io

import pytest

from displaygrid.models import TableModel
from displaygrid.output import HtmlSink

WIDTHS = [100, 50, 70, 30, 20]


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def sink(out):
    return HtmlSink(out)


@pytest.fixture
def wide_model():
    """Five columns c0..c4 with pixel widths, two rows."""
    objects = [
        {f"c{i}": f"r{row}c{i}" for i in range(5)}
        for row in range(2)
    ]
    columns = [
        {
            "title": f"C{i}",
            "property_name": f"c{i}",
            "cell_attributes": {"style": f"width:{width}px"},
        }
        for i, width in enumerate(WIDTHS)
    ]
    return TableModel.from_objects(objects, columns=columns)
