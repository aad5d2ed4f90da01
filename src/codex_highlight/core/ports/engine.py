from collections.abc import Iterable, Iterator
from typing import Protocol

from codex_highlight.models import GrammarDescriptor, StyledLine, ThemeDescriptor


class GrammarEngine(Protocol):
    def grammars(self) -> list[GrammarDescriptor]: ...

    def themes(self) -> list[ThemeDescriptor]: ...

    def plaintext(self) -> GrammarDescriptor: ...

    def find_by_key(self, key: str) -> GrammarDescriptor | None: ...

    def find_by_first_line(self, code: str) -> GrammarDescriptor | None: ...

    def find_theme(self, name: str) -> ThemeDescriptor | None: ...

    def tokenize(self, code: str, grammar: GrammarDescriptor) -> Iterator[StyledLine]: ...

    def render_themed(self, lines: Iterable[StyledLine], theme: ThemeDescriptor) -> str: ...
