from __future__ import annotations

import threading
import time
import weakref
from typing import Callable, List, Optional

from .errors import Cancelled, DeadlineExceeded, SkylarkError


class Context:
    """Cancellation and deadline scope for an outgoing call.

    A context becomes done when it is canceled, when its deadline passes or
    when its parent becomes done. Once done it stays done and reports the
    first error that finished it.
    """

    def __init__(
        self,
        parent: Optional["Context"] = None,
        deadline: Optional[float] = None,
        cancelable: bool = True,
    ) -> None:
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._error: Optional[SkylarkError] = None
        self._callbacks: List[Callable[[], None]] = []
        self._cancelable = cancelable
        self._timer: Optional[threading.Timer] = None

        if parent is not None and parent.deadline is not None:
            if deadline is None or parent.deadline < deadline:
                deadline = parent.deadline
        self._deadline = deadline

        self._parent = parent
        self._propagate: Optional[Callable[[], None]] = None
        if parent is not None:
            self._propagate = self._on_parent_done(parent)
            parent.add_done_callback(self._propagate)
            weakref.finalize(self, parent.remove_done_callback, self._propagate)
        if deadline is not None and not self._done.is_set():
            delay = deadline - time.monotonic()
            if delay <= 0:
                self._finish(DeadlineExceeded("context deadline exceeded"))
            else:
                self._timer = threading.Timer(delay, self._finish, args=(DeadlineExceeded("context deadline exceeded"),))
                self._timer.daemon = True
                self._timer.start()

    @classmethod
    def background(cls) -> "Context":
        """Return the shared context that is never done."""
        return _BACKGROUND

    @classmethod
    def with_cancel(cls, parent: Optional["Context"] = None) -> "Context":
        return cls(parent=parent)

    @classmethod
    def with_deadline(cls, deadline: float, parent: Optional["Context"] = None) -> "Context":
        """Context finishing at ``deadline``, a ``time.monotonic()`` timestamp."""
        return cls(parent=parent, deadline=deadline)

    @classmethod
    def with_timeout(cls, seconds: float, parent: Optional["Context"] = None) -> "Context":
        return cls(parent=parent, deadline=time.monotonic() + float(seconds))

    @property
    def cancelable(self) -> bool:
        return self._cancelable

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def cancel(self) -> None:
        self._finish(Cancelled("context canceled"))

    def done(self) -> bool:
        return self._done.is_set()

    def error(self) -> Optional[SkylarkError]:
        with self._lock:
            return self._error

    def raise_if_done(self) -> None:
        err = self.error()
        if err is not None:
            raise err

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)

    def add_done_callback(self, fn: Callable[[], None]) -> None:
        """Invoke ``fn`` once the context is done (immediately if it already is)."""
        if not self._cancelable:
            return
        with self._lock:
            if not self._done.is_set():
                self._callbacks.append(fn)
                return
        fn()

    def remove_done_callback(self, fn: Callable[[], None]) -> None:
        with self._lock:
            if fn in self._callbacks:
                self._callbacks.remove(fn)

    def _on_parent_done(self, parent: "Context") -> Callable[[], None]:
        # holds the child weakly so a dropped child does not stay registered
        ref = weakref.ref(self)

        def propagate() -> None:
            child = ref()
            if child is None:
                return
            err = parent.error()
            child._finish(err if err is not None else Cancelled("context canceled"))
        return propagate

    def _finish(self, err: SkylarkError) -> None:
        if not self._cancelable:
            return
        with self._lock:
            if self._done.is_set():
                return
            self._error = err
            self._done.set()
            callbacks, self._callbacks = self._callbacks, []
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        if self._parent is not None and self._propagate is not None:
            self._parent.remove_done_callback(self._propagate)
        for fn in callbacks:
            fn()


_BACKGROUND = Context(cancelable=False)
