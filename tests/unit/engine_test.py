"""Tests for the Pygments-backed grammar and theme catalogs."""

from __future__ import annotations

from pygments.token import Token

from codex_highlight.engine import PygmentsEngine, load_grammar_catalog, load_theme_catalog
from codex_highlight.engine.pygments_engine import _interpreter_aliases, _split_patterns


class TestSplitPatterns:
    def test_suffix_and_whole_names(self) -> None:
        extensions, filenames = _split_patterns(["*.py", "SConstruct", "*.bzl"])
        assert extensions == ("py", "bzl")
        assert filenames == ("SConstruct",)

    def test_unmatchable_globs_are_dropped(self) -> None:
        assert _split_patterns(["*.php[345]", "Makefile.*", "*.x[bp]m"]) == ((), ())


class TestInterpreterAliases:
    def test_direct_interpreter(self) -> None:
        assert _interpreter_aliases("#!/bin/bash") == ["bash", "bash"]

    def test_env_with_flags(self) -> None:
        assert _interpreter_aliases("#!/usr/bin/env -S python3.11 -u") == ["python3.11", "python"]

    def test_mapped_interpreter(self) -> None:
        assert _interpreter_aliases("#!/usr/bin/env node")[0] == "javascript"

    def test_not_a_shebang(self) -> None:
        assert _interpreter_aliases("# just a comment") == []

    def test_bare_env(self) -> None:
        assert _interpreter_aliases("#!/usr/bin/env") == []


class TestGrammarCatalog:
    def test_catalog_is_loaded_once(self) -> None:
        assert load_grammar_catalog() is load_grammar_catalog()

    def test_plaintext_grammar(self, engine: PygmentsEngine) -> None:
        plaintext = engine.plaintext()
        assert plaintext.plaintext is True
        assert plaintext.scope == ("text", "plain")

    def test_grammar_scope_uses_first_alias(self, engine: PygmentsEngine) -> None:
        python = engine.find_by_key("py")
        assert python is not None
        assert python.scope == ("source", "python")

    def test_whole_file_names_are_keys(self, engine: PygmentsEngine) -> None:
        cmake = engine.find_by_key("CMakeLists.txt")
        assert cmake is not None
        assert "CMakeLists.txt" in cmake.filenames

    def test_shared_key_prefers_higher_priority(self, engine: PygmentsEngine) -> None:
        # "h" is claimed by C, C++ ("*.H") and Objective-C. C and C++ tie on priority.
        header = engine.find_by_key("h")
        assert header is not None
        assert header.name == "C"

    def test_unknown_and_empty_keys(self, engine: PygmentsEngine) -> None:
        assert engine.find_by_key("definitely-not-an-extension") is None
        assert engine.find_by_key("") is None

    def test_grammars_lists_descriptors(self, engine: PygmentsEngine) -> None:
        names = [g.name for g in engine.grammars()]
        assert "Python" in names
        assert names == sorted(names)


class TestThemeCatalog:
    def test_default_themes_present(self, engine: PygmentsEngine) -> None:
        names = {t.name for t in engine.themes()}
        assert {"default", "monokai"} <= names

    def test_find_theme(self, engine: PygmentsEngine) -> None:
        theme = engine.find_theme("monokai")
        assert theme is not None
        assert theme.background is not None
        assert engine.find_theme("no-such-theme") is None

    def test_theme_styles_inherit_from_parent_scope(self) -> None:
        theme = load_theme_catalog()["default"]
        keyword = theme.style_for(tuple(Token.Keyword))
        assert keyword
        assert theme.style_for((*Token.Keyword, "MadeUpChild")) == keyword


class TestTokenize:
    def test_fragments_reassemble_each_line(self, engine: PygmentsEngine) -> None:
        code = "def f(x):\n    return x < 1\n"
        python = engine.find_by_key("py")
        assert python is not None
        lines = list(engine.tokenize(code, python))
        assert ["".join(text for _, text in line) for line in lines] == code.splitlines()

    def test_blank_lines_are_kept(self, engine: PygmentsEngine) -> None:
        lines = list(engine.tokenize("a\n\n\nb", engine.plaintext()))
        assert len(lines) == 4
        assert lines[1] == []
        assert lines[2] == []

    def test_trailing_newline_does_not_add_a_line(self, engine: PygmentsEngine) -> None:
        assert len(list(engine.tokenize("a\nb\n", engine.plaintext()))) == 2

    def test_empty_code_has_no_lines(self, engine: PygmentsEngine) -> None:
        assert list(engine.tokenize("", engine.plaintext())) == []

    def test_carriage_returns_are_line_breaks(self, engine: PygmentsEngine) -> None:
        assert len(list(engine.tokenize("a\r\nb\rc", engine.plaintext()))) == 3

    def test_scopes_are_token_paths(self, engine: PygmentsEngine) -> None:
        python = engine.find_by_key("py")
        assert python is not None
        (line,) = engine.tokenize("import os", python)
        assert line[0] == (("Keyword", "Namespace"), "import")


class TestRenderThemed:
    def test_inline_styles_and_escaping(self, engine: PygmentsEngine) -> None:
        python = engine.find_by_key("py")
        theme = engine.find_theme("monokai")
        assert python is not None and theme is not None
        html = engine.render_themed(engine.tokenize('x = "<b>"\n', python), theme)
        assert 'style="' in html
        assert "&lt;b&gt;" in html
        assert "<b>" not in html
        assert 'class="hl-' not in html
