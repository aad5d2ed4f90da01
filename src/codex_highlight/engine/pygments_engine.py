"""Grammar and theme catalogs backed by Pygments lexers and styles."""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from types import MappingProxyType

import pygments
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import find_lexer_class, get_all_lexers
from pygments.lexers.special import TextLexer
from pygments.modeline import get_filetype_from_buffer
from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import Token

from codex_highlight.models import GrammarDescriptor, Scope, StyledLine, ThemeDescriptor

logger = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[")

_SHEBANG_RE = re.compile(r"^#!\s*(?P<interpreter>\S+)(?P<args>.*)$")

_PROLOGUES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^\s*<\?xml\b"), "xml"),
    (re.compile(r"^\s*<\?php\b"), "php"),
    (re.compile(r"^\s*<!doctype\s+html\b", re.IGNORECASE), "html"),
    (re.compile(r"^\s*<html\b", re.IGNORECASE), "html"),
)

# Interpreters whose name is not itself a lexer alias.
_INTERPRETER_ALIASES = {
    "node": "javascript",
    "nodejs": "javascript",
    "deno": "typescript",
    "runhaskell": "haskell",
    "escript": "erlang",
}


@dataclass(frozen=True)
class GrammarCatalog:
    grammars: tuple[GrammarDescriptor, ...]
    by_key: Mapping[str, GrammarDescriptor]
    by_alias: Mapping[str, GrammarDescriptor]
    plaintext: GrammarDescriptor


def _split_patterns(patterns: Iterable[str]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Split lexer filename globs into suffix keys (``*.py``) and whole file names (``Dockerfile``).

    Other glob shapes (``Makefile.*``, ``*.py[cod]``) cannot be matched by key and are dropped.
    """
    extensions: list[str] = []
    filenames: list[str] = []
    for pattern in patterns:
        if pattern.startswith("*.") and not _GLOB_CHARS & set(pattern[2:]):
            extensions.append(pattern[2:])
        elif not _GLOB_CHARS & set(pattern):
            filenames.append(pattern)
    return tuple(extensions), tuple(filenames)


@functools.cache
def _lexer_class(name: str) -> type[Lexer]:
    lexer_cls = find_lexer_class(name)
    if lexer_cls is None:
        raise LookupError(f"Unknown grammar: {name}")
    return lexer_cls


def _pick(names: list[str]) -> str:
    """Choose the registered grammar for a key claimed by several lexers."""
    if len(names) == 1:
        return names[0]
    return min(names, key=lambda n: (-_lexer_class(n).priority, n))


@functools.cache
def load_grammar_catalog() -> GrammarCatalog:
    grammars: list[GrammarDescriptor] = []
    claims: dict[str, list[str]] = {}
    aliases: dict[str, GrammarDescriptor] = {}
    plaintext: GrammarDescriptor | None = None

    for name, lexer_aliases, patterns, _mimetypes in sorted(get_all_lexers(plugins=False)):
        extensions, filenames = _split_patterns(patterns)
        descriptor = GrammarDescriptor(
            name=name,
            aliases=tuple(lexer_aliases),
            extensions=extensions,
            filenames=filenames,
            plaintext=name == TextLexer.name,
        )
        grammars.append(descriptor)
        if descriptor.plaintext:
            plaintext = descriptor
        for key in (*filenames, *extensions):
            claims.setdefault(key.lower(), []).append(name)
        for alias in lexer_aliases:
            aliases.setdefault(alias.lower(), descriptor)

    if plaintext is None:
        raise RuntimeError("Pygments does not provide a plain text lexer")

    by_name = {g.name: g for g in grammars}
    by_key = {key: by_name[_pick(names)] for key, names in claims.items()}
    logger.info("Loaded %d grammars (%d lookup keys)", len(grammars), len(by_key))
    return GrammarCatalog(
        grammars=tuple(grammars),
        by_key=MappingProxyType(by_key),
        by_alias=MappingProxyType(aliases),
        plaintext=plaintext,
    )


@functools.cache
def load_theme_catalog() -> Mapping[str, ThemeDescriptor]:
    themes: dict[str, ThemeDescriptor] = {}
    for name in sorted(get_all_styles()):
        style = get_style_by_name(name)
        styles = tuple((".".join(ttype), value) for ttype, value in style.styles.items() if value)
        themes[name] = ThemeDescriptor(name=name, background=style.background_color, styles=styles)
    logger.info("Loaded %d themes", len(themes))
    return MappingProxyType(themes)


def _interpreter_aliases(first_line: str) -> list[str]:
    match = _SHEBANG_RE.match(first_line)
    if match is None:
        return []
    interpreter = PurePosixPath(match["interpreter"]).name
    if interpreter == "env":
        args = [a for a in match["args"].split() if not a.startswith("-")]
        if not args:
            return []
        interpreter = PurePosixPath(args[0]).name
    interpreter = interpreter.lower()
    unversioned = re.sub(r"[\d.]+$", "", interpreter)
    candidates = [interpreter, unversioned]
    return [_INTERPRETER_ALIASES.get(c, c) for c in candidates if c]


def _to_token_type(scope: Scope) -> tuple[str, ...]:
    ttype = Token
    for segment in scope:
        ttype = getattr(ttype, segment)
    return ttype


def _token_stream(lines: Iterable[StyledLine]) -> Iterator[tuple[tuple[str, ...], str]]:
    for line in lines:
        for scope, text in line:
            yield _to_token_type(scope), text
        yield Token.Text, "\n"


class PygmentsEngine:
    """``GrammarEngine`` backed by the Pygments lexer and style registries.

    Holds no state of its own: catalogs are process-wide caches, so instances
    are cheap to create and safe to send to worker processes.
    """

    def grammars(self) -> list[GrammarDescriptor]:
        return list(load_grammar_catalog().grammars)

    def themes(self) -> list[ThemeDescriptor]:
        return list(load_theme_catalog().values())

    def plaintext(self) -> GrammarDescriptor:
        return load_grammar_catalog().plaintext

    def find_by_key(self, key: str) -> GrammarDescriptor | None:
        if not key:
            return None
        return load_grammar_catalog().by_key.get(key.lower())

    def find_by_first_line(self, code: str) -> GrammarDescriptor | None:
        first_line = code.split("\n", 1)[0].rstrip("\r")
        if not first_line.strip():
            return None
        by_alias = load_grammar_catalog().by_alias

        for alias in _interpreter_aliases(first_line):
            if alias in by_alias:
                return by_alias[alias]

        for pattern, alias in _PROLOGUES:
            if pattern.match(first_line):
                return by_alias.get(alias)

        filetype = get_filetype_from_buffer(first_line)
        if filetype:
            return by_alias.get(filetype.lower())
        return None

    def find_theme(self, name: str) -> ThemeDescriptor | None:
        return load_theme_catalog().get(name)

    def tokenize(self, code: str, grammar: GrammarDescriptor) -> Iterator[StyledLine]:
        if not code:
            return
        lexer = _lexer_class(grammar.name)(stripnl=False, ensurenl=True)
        line: StyledLine = []
        for ttype, value in lexer.get_tokens(code):
            head, *rest = value.split("\n")
            if head:
                line.append((tuple(ttype), head))
            for part in rest:
                yield line
                line = []
                if part:
                    line.append((tuple(ttype), part))
        if line:
            yield line

    def render_themed(self, lines: Iterable[StyledLine], theme: ThemeDescriptor) -> str:
        formatter = HtmlFormatter(style=theme.name, noclasses=True)
        return pygments.format(_token_stream(lines), formatter)
