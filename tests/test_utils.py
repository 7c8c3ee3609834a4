"""Tests for HTML helpers, links, parameter names and the output sink."""

import io

import pytest

from displaygrid.exceptions import SinkWriteError
from displaygrid.output import HtmlSink
from displaygrid.utils import (
    Href,
    ParamEncoder,
    anchor,
    escape,
    hidden_field,
    join_classes,
    open_tag,
    render_attributes,
)


class TestParamEncoder:
    def test_default_table_id(self):
        assert ParamEncoder("row").encode("p") == "d-16544-p"

    def test_ids_get_distinct_prefixes(self):
        assert ParamEncoder("row").prefix != ParamEncoder("other").prefix

    def test_prefix_is_stable(self):
        assert ParamEncoder("sales").encode("s") == ParamEncoder("sales").encode("s")


class TestHtmlHelpers:
    def test_escape(self):
        assert escape('<a href="x">') == "&lt;a href=&quot;x&quot;&gt;"
        assert escape(None) == ""
        assert escape(5) == "5"

    def test_render_attributes(self):
        assert render_attributes({"class": "odd", "id": None, "title": 'a"b'}) == (
            ' class="odd" title="a&quot;b"'
        )
        assert render_attributes(None) == ""

    def test_join_classes(self):
        assert join_classes("a b", None, ["b", "c"], "") == "a b c"
        assert join_classes(None, []) is None

    def test_open_tag(self):
        assert open_tag("tr") == "<tr>"
        assert open_tag("tr", {"class": "odd"}) == '<tr class="odd">'

    def test_anchor_escapes_href_only(self):
        assert anchor("list?a=1&b=2", "<b>x</b>") == '<a href="list?a=1&amp;b=2"><b>x</b></a>'

    def test_hidden_field(self):
        assert hidden_field("q", "it's") == '<input type="hidden" name="q" value="it&#x27;s"/>'


class TestHref:
    def test_parameters(self):
        href = Href("http://example.com/list?a=1&b=2&b=3")
        assert href.parameters == {"a": ["1"], "b": ["2", "3"]}

    def test_with_param_replaces(self):
        href = Href("http://example.com/list?a=1")
        updated = href.with_param("a", 2).with_param("c", "x")

        assert updated.parameters == {"a": ["2"], "c": ["x"]}
        assert href.parameters == {"a": ["1"]}

    def test_without_param(self):
        href = Href("http://example.com/list?a=1&b=2").without_param("a")
        assert str(href) == "http://example.com/list?b=2"

    def test_plain_link(self):
        assert str(Href("http://example.com/list").with_param("p", 2)) == (
            "http://example.com/list?p=2"
        )

    def test_form_link(self):
        href = Href("http://example.com/list?b=2&b=3", form="f").with_param("q", "it's")
        assert str(href) == (
            "javascript:displaytagform('f',[{f:'b',v:['2','3']},{f:'q',v:'it\\'s'}])"
        )

    def test_form_kept_by_copies(self):
        href = Href("http://example.com/list").with_form("f")
        assert href.with_param("a", 1).form == "f"
        assert href.with_form(None).form is None

    def test_equality(self):
        assert Href("http://example.com/list?a=1") == Href("http://example.com/list?a=1")
        assert Href("http://example.com/list", form="f") != Href("http://example.com/list")


class TestHtmlSink:
    def test_writes_in_order(self):
        out = io.StringIO()
        sink = HtmlSink(out)
        for fragment in ("<tr>", None, "", "</tr>"):
            sink.write(fragment)
        assert out.getvalue() == "<tr></tr>"

    def test_closed_stream(self):
        out = io.StringIO()
        out.close()
        with pytest.raises(SinkWriteError):
            HtmlSink(out).write("<table>")
