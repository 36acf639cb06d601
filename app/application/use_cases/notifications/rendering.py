"""Variable substitution for notification templates.

Tokens use the ``{{variable_name}}`` syntax. Only keys present in the context
are substituted; any other token is left verbatim so a partial context never
prevents delivery. Values are inserted as-is, without HTML escaping: callers
that place user-controlled free text in the context must escape it first
(see :func:`escape_context_value`).
"""

from __future__ import annotations

import html
import re
from collections.abc import Mapping
from typing import Any

from app.domain.entities import NotificationTemplate, RenderedMessage

_TOKEN_PATTERN = re.compile(r"\{\{([A-Za-z0-9_.\-]+)\}\}")


def _stringify(value: Any) -> str:
    return "" if value is None else str(value)


def render_text(text: str, context: Mapping[str, Any]) -> str:
    """Replace every ``{{key}}`` of ``text`` whose key appears in ``context``."""

    rendered = text
    for key, value in context.items():
        rendered = rendered.replace("{{" + str(key) + "}}", _stringify(value))
    return rendered


def stringify_context(context: Mapping[str, Any]) -> dict[str, str]:
    """Return ``context`` with every value converted the way templates render it."""

    return {str(key): _stringify(value) for key, value in context.items()}


def extract_variables(*texts: str | None) -> list[str]:
    """Return token names found in ``texts`` in order of first appearance."""

    seen: list[str] = []
    for text in texts:
        if not text:
            continue
        for match in _TOKEN_PATTERN.finditer(text):
            name = match.group(1)
            if name not in seen:
                seen.append(name)
    return seen


def escape_context_value(value: Any) -> str:
    """Escape free text before it is placed into a rendering context."""

    return html.escape(_stringify(value), quote=True)


class TemplateRenderer:
    """Render the subject and bodies of a :class:`NotificationTemplate`."""

    def render(
        self, template: NotificationTemplate, context: Mapping[str, Any]
    ) -> RenderedMessage:
        body_text = (
            render_text(template.body_text, context) if template.body_text else None
        )
        return RenderedMessage(
            subject=render_text(template.subject, context),
            body_html=render_text(template.body_html, context),
            body_text=body_text,
        )


__all__ = [
    "TemplateRenderer",
    "escape_context_value",
    "extract_variables",
    "render_text",
    "stringify_context",
]
