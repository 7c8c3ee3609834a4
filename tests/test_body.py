"""Tests for the table body renderer."""

import io

import pytest

from displaygrid.body import TableBodyRenderer
from displaygrid.decorators.base import TableDecorator
from displaygrid.exceptions import DecoratorError, ModelInconsistencyError
from displaygrid.grouping import Grouping
from displaygrid.models import Cell, HeaderCell, Row, TableModel
from displaygrid.output import HtmlSink


class RecordingDecorator(TableDecorator):
    """Records hook calls; shows every grouped value."""

    def __init__(self):
        self.events = []
        self.contexts = []

    def init(self, model):
        self.events.append(("init", model.id))

    def init_row(self, ctx):
        self.contexts.append(ctx)
        self.events.append(("init_row", ctx.view_index))

    def start_of_group(self, ctx, value, group):
        self.events.append(("start_of_group", value, group))

    def end_of_group(self, ctx, value, group):
        self.events.append(("end_of_group", value, group))

    def display_grouped_value(self, ctx, value, grouping, column_number):
        self.events.append(("display", value, grouping, column_number))
        return value

    def start_row(self, ctx):
        self.events.append(("start_row", ctx.view_index))
        return None

    def finish_row(self, ctx):
        self.events.append(("finish_row", ctx.view_index))
        return None


class CountingItem:
    lookups = 0

    def __init__(self, name):
        self._name = name

    @property
    def name(self):
        CountingItem.lookups += 1
        return self._name


@pytest.fixture
def grouped_model():
    return TableModel.from_objects(
        [{"k": "A", "v": 1}, {"k": "A", "v": 2}, {"k": "B", "v": 3}],
        columns=[
            {"title": "K", "property_name": "k", "group": 1},
            {"title": "V", "property_name": "v"},
        ],
    )


def _render(model, decorator=None, split_offset=0, group_columns=None):
    out = io.StringIO()
    TableBodyRenderer(HtmlSink(out), decorator).render(model, split_offset, group_columns)
    return out.getvalue()


class TestBodyWithoutDecorator:
    def test_repeated_group_values_hidden(self, grouped_model):
        assert _render(grouped_model) == (
            '<tr class="odd"><td>A</td><td>1</td></tr>'
            '<tr class="even"><td></td><td>2</td></tr>'
            '<tr class="odd"><td>B</td><td>3</td></tr>'
        )

    def test_ungrouped_table(self):
        model = TableModel.from_objects(
            [{"a": "x"}, {"a": "x"}], columns=[{"title": "A", "property_name": "a"}]
        )
        assert _render(model) == (
            '<tr class="odd"><td>x</td></tr><tr class="even"><td>x</td></tr>'
        )

    def test_cell_attributes_written(self):
        model = TableModel.from_objects(
            [{"a": 1}],
            columns=[{"property_name": "a", "cell_attributes": {"class": "num"}}],
        )
        assert _render(model) == '<tr class="odd"><td class="num">1</td></tr>'

    def test_row_attributes_merged(self, grouped_model):
        grouped_model.rows[0].attributes["class"] = "first"
        assert _render(grouped_model).startswith('<tr class="odd first">')

    def test_empty_rows_write_empty_list_row_message(self):
        model = TableModel.from_objects([], columns=[{"title": t} for t in "ABC"])
        assert _render(model) == (
            '<tr class="empty"><td colspan="3">Nothing found to display.</td></tr>'
        )

    def test_empty_row_message_with_other_braces(self):
        model = TableModel.from_objects([], columns=[{"title": "A"}, {"title": "B"}])
        model.properties.empty_list_row_message = (
            '<tr><td colspan="{0}" style="x{y}">none</td></tr>'
        )
        assert _render(model) == '<tr><td colspan="2" style="x{y}">none</td></tr>'

    def test_columnless_model_writes_object(self):
        model = TableModel(rows=[Row(obj="hello <world>", row_number=0)])
        assert _render(model) == '<tr class="odd"><td>hello &lt;world&gt;</td></tr>'

    def test_rendering_twice_is_identical(self, grouped_model):
        assert _render(grouped_model) == _render(grouped_model)


class TestBodyGrouping:
    def test_hook_order(self, grouped_model):
        decorator = RecordingDecorator()
        _render(grouped_model, decorator)

        assert decorator.events == [
            ("init", "row"),
            ("init_row", 0),
            ("start_of_group", "A", 1),
            ("display", "A", Grouping.START, 0),
            ("start_row", 0),
            ("finish_row", 0),
            ("init_row", 1),
            ("end_of_group", "A", 1),
            ("display", "A", Grouping.END, 0),
            ("start_row", 1),
            ("finish_row", 1),
            ("init_row", 2),
            ("start_of_group", "B", 1),
            ("end_of_group", "B", 1),
            ("display", "B", Grouping.START_AND_END, 0),
            ("start_row", 2),
            ("finish_row", 2),
        ]

    def test_decorator_value_is_written(self, grouped_model):
        """The decorator decides what grouped cells show."""
        output = _render(grouped_model, RecordingDecorator())
        assert '<tr class="even"><td>A</td><td>2</td></tr>' in output

    def test_row_context(self, grouped_model):
        grouped_model.page_offset = 20
        decorator = RecordingDecorator()
        _render(grouped_model, decorator)

        assert [c.view_index for c in decorator.contexts] == [0, 1, 2]
        assert [c.list_index for c in decorator.contexts] == [20, 21, 22]
        assert [c.is_last_row for c in decorator.contexts] == [False, False, True]
        assert decorator.contexts[0].obj == {"k": "A", "v": 1}

    def test_nested_groups_cascade(self):
        model = TableModel.from_objects(
            [{"a": "X", "b": "a"}, {"a": "X", "b": "a"}, {"a": "Y", "b": "a"}],
            columns=[
                {"title": "A", "property_name": "a", "group": 1},
                {"title": "B", "property_name": "b", "group": 2},
            ],
        )
        decorator = RecordingDecorator()
        _render(model, decorator)

        inner = [e[2] for e in decorator.events if e[0] == "display" and e[3] == 1]
        assert inner == [Grouping.START, Grouping.END, Grouping.START_AND_END]

        assert _render(model) == (
            '<tr class="odd"><td>X</td><td>a</td></tr>'
            '<tr class="even"><td></td><td></td></tr>'
            '<tr class="odd"><td>Y</td><td>a</td></tr>'
        )

    def test_group_columns_outside_partition(self, grouped_model):
        decorator = RecordingDecorator()
        values_only = grouped_model.partition(1, 2)

        output = _render(
            values_only, decorator, split_offset=1, group_columns=grouped_model.header_cells
        )

        group_events = [e for e in decorator.events if e[0].endswith("_of_group")]
        assert group_events == [
            ("start_of_group", "A", 1),
            ("end_of_group", "A", 1),
            ("start_of_group", "B", 1),
            ("end_of_group", "B", 1),
        ]
        assert not [e for e in decorator.events if e[0] == "display"]
        assert output == (
            '<tr class="odd"><td>1</td></tr>'
            '<tr class="even"><td>2</td></tr>'
            '<tr class="odd"><td>3</td></tr>'
        )

    def test_group_columns_inside_partition(self, grouped_model):
        """Passing the model's own grouped columns changes nothing."""
        assert _render(grouped_model, group_columns=grouped_model.header_cells) == (
            _render(grouped_model)
        )

    def test_decorator_row_markup(self, grouped_model):
        class Marker(TableDecorator):
            def start_row(self, ctx):
                return "<!--s-->"

            def finish_row(self, ctx):
                return "<!--f-->" if ctx.is_last_row else None

            def add_row_class(self, ctx):
                return "hot" if ctx.view_index == 1 else None

            def add_row_id(self, ctx):
                return f"r{ctx.list_index}"

        output = _render(grouped_model, Marker())

        assert output.startswith('<!--s--><tr class="odd" id="r0">')
        assert '<tr class="even hot" id="r1">' in output
        assert output.endswith("</tr><!--f-->")
        assert output.count("<!--s-->") == 3


class TestBodyValues:
    def test_each_cell_computed_once(self):
        CountingItem.lookups = 0
        model = TableModel.from_objects(
            [CountingItem("a"), CountingItem("a"), CountingItem("b")],
            columns=[{"title": "Name", "property_name": "name", "group": 1}],
        )
        _render(model)
        assert CountingItem.lookups == 3

    def test_split_offset_selects_cells(self, wide_model):
        center = wide_model.partition(2, 4)
        assert _render(center, split_offset=2) == (
            '<tr class="odd"><td style="width:70px">r0c2</td><td style="width:30px">r0c3</td></tr>'
            '<tr class="even"><td style="width:70px">r1c2</td><td style="width:30px">r1c3</td></tr>'
        )


class TestBodyErrors:
    def test_row_missing_cells(self):
        model = TableModel(
            header_cells=[HeaderCell(column_number=0), HeaderCell(column_number=1)],
            rows=[Row(obj={}, row_number=0, cells=[Cell()])],
        )
        with pytest.raises(ModelInconsistencyError):
            _render(model)

    def test_header_numbers_not_contiguous(self):
        model = TableModel(
            header_cells=[HeaderCell(column_number=0), HeaderCell(column_number=3)],
            rows=[Row(obj={}, row_number=0, cells=[Cell() for _ in range(4)])],
        )
        with pytest.raises(ModelInconsistencyError):
            _render(model)

    def test_offset_past_row_cells(self, wide_model):
        with pytest.raises(ModelInconsistencyError):
            _render(wide_model.partition(3, 5), split_offset=4)

    def test_decorator_failure(self, grouped_model):
        class Broken(TableDecorator):
            def start_row(self, ctx):
                raise RuntimeError("boom")

        with pytest.raises(DecoratorError, match="start_row") as exc_info:
            _render(grouped_model, Broken())
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_error_keeps_written_rows(self, grouped_model):
        class FailsOnSecondRow(TableDecorator):
            def start_row(self, ctx):
                if ctx.view_index == 1:
                    raise RuntimeError("boom")

        out = io.StringIO()
        with pytest.raises(DecoratorError):
            TableBodyRenderer(HtmlSink(out), FailsOnSecondRow()).render(grouped_model)
        assert out.getvalue() == '<tr class="odd"><td>A</td><td>1</td></tr>'
