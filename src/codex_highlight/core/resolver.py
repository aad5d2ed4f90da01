from pathlib import PurePosixPath

from codex_highlight.core.ports.engine import GrammarEngine
from codex_highlight.models import Resolution


def split_filepath(filepath: str) -> tuple[str, str]:
    """Split ``"foo/myfile.go"`` into its file name (``"myfile.go"``) and suffix (``"go"``)."""
    name = PurePosixPath(filepath).name
    return name, PurePosixPath(name).suffix.removeprefix(".")


def resolve(engine: GrammarEngine, extension: str, filepath: str, code: str) -> Resolution:
    """Pick the grammar for a piece of code. Never fails: plain text is the last resort.

    With a ``filepath`` the whole file name is tried first, because some grammars
    register full names (``Dockerfile``, ``CMakeLists.txt``) as their "extension",
    then its suffix. Without one, the legacy ``extension`` field is used. Either
    way the first line of ``code`` (shebang, prologue, modeline) comes next.
    """
    if filepath:
        file_name, suffix = split_filepath(filepath)
        grammar = engine.find_by_key(file_name) or engine.find_by_key(suffix)
    else:
        grammar = engine.find_by_key(extension)

    grammar = grammar or engine.find_by_first_line(code)
    if grammar is None:
        return Resolution(grammar=engine.plaintext(), plaintext=True)
    return Resolution(grammar=grammar)
