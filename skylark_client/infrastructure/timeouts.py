from __future__ import annotations

import threading
from typing import Callable, Dict, Optional, Tuple, TypeVar

from ..domain.context import Context

T = TypeVar("T")


def call_timeout(ctx: Context) -> Optional[float]:
    """Time left on ``ctx``; None when it has no deadline, so no timeout is imposed."""
    return ctx.remaining()


def run_with_context(
    ctx: Context,
    fn: Callable[[], T],
    on_abandon: Optional[Callable[[T], None]] = None,
) -> T:
    """
    Run a blocking call so that it returns as soon as ``ctx`` is done.

    The call runs on a daemon worker thread while the caller waits for either
    the result or the context. When the context wins, the context error is
    raised and the worker is abandoned; a value it produces later is handed to
    ``on_abandon`` (e.g., to close a late response).
    Contexts that can never be done run ``fn`` inline.
    """
    ctx.raise_if_done()
    if not ctx.cancelable:
        return fn()

    wake = threading.Event()
    lock = threading.Lock()
    state: Dict[str, object] = {"abandoned": False}

    def worker() -> None:
        outcome: Tuple[bool, object]
        try:
            outcome = (True, fn())
        except BaseException as exc:  # re-raised on the caller's thread
            outcome = (False, exc)
        with lock:
            abandoned = bool(state["abandoned"])
            if not abandoned:
                state["outcome"] = outcome
        if abandoned and outcome[0] and on_abandon is not None:
            on_abandon(outcome[1])  # type: ignore[arg-type]
        wake.set()

    ctx.add_done_callback(wake.set)
    try:
        threading.Thread(target=worker, name="skylark-call", daemon=True).start()
        wake.wait()
        with lock:
            outcome = state.get("outcome")
            if outcome is None:
                state["abandoned"] = True
    finally:
        ctx.remove_done_callback(wake.set)

    if outcome is None:
        ctx.raise_if_done()
    ok, payload = outcome  # type: ignore[misc]
    if not ok:
        raise payload  # type: ignore[misc]
    return payload  # type: ignore[return-value]
