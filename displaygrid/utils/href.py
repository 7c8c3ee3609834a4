"""Link targets for sorting, paging and export links."""

from __future__ import annotations

import httpx


class Href:
    """Immutable link target: a base URL plus query parameters.

    When bound to a host form (``form`` set), the link renders as a
    ``javascript:displaytagform(...)`` call that copies the parameters into
    the form fields and submits it, so the request is POSTed instead.

    Example:
        >>> href = Href("list.html?q=a").with_param("d-16544-p", 2)
        >>> str(href)
        'list.html?q=a&d-16544-p=2'
    """

    def __init__(self, url: httpx.URL | str = "", form: str | None = None):
        self.url = url if isinstance(url, httpx.URL) else httpx.URL(url)
        self.form = form

    @property
    def parameters(self) -> dict[str, list[str]]:
        """Query parameters as a name -> values mapping, in URL order."""
        result: dict[str, list[str]] = {}
        for name, value in self.url.params.multi_items():
            result.setdefault(name, []).append(value)
        return result

    def with_param(self, name: str, value: object) -> Href:
        """Return a copy with ``name`` set to ``value`` (replacing old values)."""
        return Href(self.url.copy_set_param(name, str(value)), self.form)

    def without_param(self, name: str) -> Href:
        """Return a copy without ``name``."""
        return Href(self.url.copy_remove_param(name), self.form)

    def with_form(self, form: str | None) -> Href:
        """Return a copy bound to the given host form."""
        return Href(self.url, form)

    def __str__(self) -> str:
        if self.form is None:
            return str(self.url)
        return _post_link(self.form, self.parameters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Href):
            return NotImplemented
        return self.url == other.url and self.form == other.form

    def __repr__(self) -> str:
        return f"Href({str(self.url)!r}, form={self.form!r})"


def _js_quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _post_link(form: str, parameters: dict[str, list[str]]) -> str:
    fields = []
    for name, values in parameters.items():
        if len(values) == 1:
            value = f"'{_js_quote(values[0])}'"
        else:
            value = "[" + ",".join(f"'{_js_quote(v)}'" for v in values) + "]"
        fields.append(f"{{f:'{_js_quote(name)}',v:{value}}}")
    return f"javascript:displaytagform('{_js_quote(form)}',[{','.join(fields)}])"
