"""Render styled lines as an HTML table annotated with CSS classes.

Each source line becomes one row::

    <tr><td class="line" data-line="1"></td><td class="code"><div>...</div></td></tr>

The code cell wraps the line in a span for the grammar's root scope and one span
per token. Class names are derived from the scope path alone, so a single
stylesheet colors every document the same way.
"""

from __future__ import annotations

import html
from collections.abc import Iterable

from codex_highlight.models import Scope, StyledLine

DEFAULT_CLASS_PREFIX = "hl-"


def scope_classes(scope: Scope, prefix: str = DEFAULT_CLASS_PREFIX) -> str:
    """``("Keyword", "Constant")`` -> ``"hl-keyword hl-constant"``."""
    return " ".join(f"{prefix}{segment.lower()}" for segment in scope)


def _render_code(line: StyledLine, limit: int | None, prefix: str, root_scope: Scope) -> str:
    if not line:
        return ""
    parts = [f'<span class="{scope_classes(root_scope, prefix)}">']
    shown = 0
    for scope, text in line:
        if limit is not None and shown + len(text) > limit:
            text = text[: limit - shown]
            if text:
                parts.append(_span(scope, text, prefix))
            break
        parts.append(_span(scope, text, prefix))
        shown += len(text)
    parts.append("</span>")
    return "".join(parts)


def _span(scope: Scope, text: str, prefix: str) -> str:
    escaped = html.escape(text, quote=True)
    if not scope:
        return escaped
    return f'<span class="{scope_classes(scope, prefix)}">{escaped}</span>'


def render_classed(
    lines: Iterable[StyledLine],
    line_length_limit: int | None = None,
    class_prefix: str = DEFAULT_CLASS_PREFIX,
    root_scope: Scope = ("text", "plain"),
) -> str:
    """Render ``lines`` as a ``<table>``, one row per line, blank lines included.

    With ``line_length_limit`` each line shows at most that many characters; the
    token crossing the limit is cut and everything after it on that line dropped.
    """
    rows = ["<table><tbody>"]
    for number, line in enumerate(lines, start=1):
        code = _render_code(line, line_length_limit, class_prefix, root_scope)
        rows.append(f'<tr><td class="line" data-line="{number}"></td><td class="code"><div>{code}</div></td></tr>')
    rows.append("</tbody></table>")
    return "".join(rows)
