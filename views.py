"""
HTML rendering for the todo list page.

The template is compiled once at import; ``render`` only binds entries.
"""
from typing import Sequence

from jinja2 import Environment, TemplateError

from errors import RenderError

INDEX_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Todo</title>
</head>
<body>
  <h1>Todo</h1>
  <form action="/add" method="post">
    <input type="text" name="text">
    <button type="submit">Add</button>
  </form>
  <ul>
  {%- for entry in entries %}
    <li>
      <span>{{ entry.text }}</span>
      <form action="/delete" method="post" style="display: inline">
        <input type="hidden" name="id" value="{{ entry.id }}">
        <button type="submit">Delete</button>
      </form>
    </li>
  {%- endfor %}
  </ul>
</body>
</html>
"""

_env = Environment(autoescape=True)
index_template = _env.from_string(INDEX_TEMPLATE)


def render(entries: Sequence, template=index_template) -> str:
    try:
        return template.render(entries=entries)
    except TemplateError as e:
        raise RenderError(str(e)) from e
