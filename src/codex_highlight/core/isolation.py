"""Run untrusted work in a throwaway child process.

The grammar engine is a black box that may blow the stack, loop forever or
take the interpreter down with it on adversarial input. Every call submitted
to a :class:`ProcessBoundary` runs in its own child process; whatever happens
there is reported back as a :class:`HighlightPanicError` and never reaches the
serving process or the other requests it is handling.
"""

from __future__ import annotations

import logging
import multiprocessing
import traceback
from collections.abc import Callable, Sequence
from multiprocessing.connection import Connection
from multiprocessing.process import BaseProcess
from typing import Any, TypeVar

from codex_highlight.errors import HighlightPanicError, HighlightTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_JOIN_GRACE_SECONDS = 1.0


def _child_main(conn: Connection, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
    try:
        result = fn(*args)
    except BaseException as exc:  # noqa: BLE001 - everything is reported to the parent
        conn.send(("error", f"{type(exc).__name__}: {exc}", traceback.format_exc()))
    else:
        conn.send(("ok", result, None))
    finally:
        conn.close()


class ProcessBoundary:
    """Execute callables in a fresh child process with an optional time limit.

    ``fn`` and ``args`` must be picklable unless ``start_method`` is ``"fork"``.
    """

    def __init__(
        self,
        start_method: str = "spawn",
        timeout: float | None = None,
        preload: Sequence[str] = (),
    ) -> None:
        self._context = multiprocessing.get_context(start_method)
        self.start_method = start_method
        self.timeout = timeout
        if start_method == "forkserver" and preload:
            self._context.set_forkserver_preload(list(preload))

    def run(self, fn: Callable[..., T], *args: Any) -> T:
        receiver, sender = self._context.Pipe(duplex=False)
        process = self._context.Process(target=_child_main, args=(sender, fn, args), daemon=True)
        process.start()
        sender.close()
        timed_out = False
        try:
            if not receiver.poll(self.timeout):
                timed_out = True
                raise HighlightTimeoutError(f"worker pid={process.pid} exceeded {self.timeout}s")
            try:
                status, payload, trace = receiver.recv()
            except EOFError:
                process.join(_JOIN_GRACE_SECONDS)
                raise HighlightPanicError(
                    f"worker pid={process.pid} exited without a result (exit code {process.exitcode})"
                ) from None
        finally:
            receiver.close()
            self._reap(process, kill=timed_out)

        if status != "ok":
            raise HighlightPanicError(f"{payload}\n{trace}")
        result: T = payload
        return result

    @staticmethod
    def _reap(process: BaseProcess, kill: bool = False) -> None:
        if not kill:
            process.join(_JOIN_GRACE_SECONDS)
        if process.is_alive():
            logger.warning("Killing worker pid=%s", process.pid)
            process.kill()
            process.join()
