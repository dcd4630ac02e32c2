import pytest
from jinja2 import Environment

from errors import RenderError
from todo_store import TodoEntry
from views import render


def test_render_empty_list():
    html = render([])

    assert "<ul>" in html
    assert "<li>" not in html
    assert 'action="/add"' in html


def test_render_lists_entries_with_delete_forms():
    html = render([TodoEntry(id=1, text="buy milk"), TodoEntry(id=7, text="walk dog")])

    assert html.count("<li>") == 2
    assert "buy milk" in html
    assert "walk dog" in html
    assert 'name="id" value="7"' in html


def test_render_escapes_text():
    html = render([TodoEntry(id=1, text='<script>alert("x")</script>')])

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_is_deterministic():
    entries = [TodoEntry(id=3, text="same")]

    assert render(entries) == render(entries)


def test_template_failure_raises_render_error():
    broken = Environment().from_string("{{ entries.missing.attribute }}")

    with pytest.raises(RenderError):
        render([], template=broken)
