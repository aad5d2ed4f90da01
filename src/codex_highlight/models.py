"""Plain data objects passed between the resolver, the pipeline and the renderers.

Pydantic schemas for the wire format live in ``codex_highlight.api.schemas``;
these dataclasses are what the core works with.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

Scope = tuple[str, ...]
StyledLine = list[tuple[Scope, str]]


class OutputMode(enum.Enum):
    THEMED = "themed"
    CLASSED = "classed"


@dataclass(frozen=True)
class GrammarDescriptor:
    name: str
    aliases: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()
    filenames: tuple[str, ...] = ()
    plaintext: bool = False

    @property
    def scope(self) -> Scope:
        """Root scope of every line tokenized with this grammar."""
        if self.plaintext:
            return ("text", "plain")
        key = self.aliases[0] if self.aliases else self.name.lower().replace(" ", "-")
        return ("source", key)


@dataclass(frozen=True)
class ThemeDescriptor:
    """A named theme and its scope -> style table.

    ``styles`` is a tuple of ``(dotted scope, style)`` pairs so descriptors stay
    hashable and can be sent to worker processes. Themed rendering goes through
    the Pygments style registered under ``name``; ``styles`` and
    :meth:`style_for` are for inspecting a theme from the catalog.
    """

    name: str
    background: str | None = None
    styles: tuple[tuple[str, str], ...] = ()

    def style_for(self, scope: Scope) -> str | None:
        """Return the display style of ``scope``, falling back to its parent scopes."""
        table = dict(self.styles)
        while True:
            style = table.get(".".join(scope))
            if style is not None or not scope:
                return style
            scope = scope[:-1]


@dataclass(frozen=True)
class HighlightRequest:
    code: str
    extension: str = ""
    filepath: str = ""
    mode: OutputMode = OutputMode.THEMED
    theme: str = ""
    line_length_limit: int | None = None


@dataclass(frozen=True)
class Resolution:
    grammar: GrammarDescriptor
    plaintext: bool = False


@dataclass(frozen=True)
class RenderedOutput:
    body: str
    plaintext: bool = False
