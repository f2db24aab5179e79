"""Tracking of foreground and background child processes."""

from __future__ import annotations

import os
import signal
from contextlib import contextmanager
from typing import Iterator, Optional

from .proc_list import ProcList


def format_status(pid: int, status: int) -> str:
    """Describe how a background process ended, or '' if it did not end."""
    if os.WIFEXITED(status):
        return (
            f"Background process {pid} terminated. "
            f"(exited with status {os.WEXITSTATUS(status)})\n"
        )
    if os.WIFSIGNALED(status):
        return (
            f"Background process {pid} terminated. "
            f"(killed by signal {os.WTERMSIG(status)})\n"
        )
    return ""


class JobTracker:
    """Reaps children and remembers which ones ran in the background."""

    def __init__(self, background: Optional[ProcList] = None) -> None:
        self.background = background if background is not None else ProcList()
        self._foreground: set[int] = set()
        self._orphans: dict[int, int] = {}
        self._installed = False

    @contextmanager
    def _sigchld_blocked(self) -> Iterator[None]:
        if not self._installed:
            yield
            return
        old = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGCHLD})
        try:
            yield
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, old)

    def _record(self, pid: int, status: int) -> None:
        if self.background.mark_terminated(pid, status):
            return
        if pid in self._foreground:
            self._foreground.discard(pid)
        else:
            # Reaped before the parent registered it.
            self._orphans[pid] = status

    def add_background(self, pid: int) -> None:
        with self._sigchld_blocked():
            entry = self.background.push(pid)
            status = self._orphans.pop(pid, None)
            if status is not None:
                entry.terminated = True
                entry.status = status

    def add_foreground(self, pid: int) -> None:
        with self._sigchld_blocked():
            if self._orphans.pop(pid, None) is None:
                self._foreground.add(pid)

    def install(self) -> None:
        """Reap children whenever SIGCHLD arrives."""
        signal.signal(signal.SIGCHLD, self._on_sigchld)
        self._installed = True

    def _on_sigchld(self, signum: int, frame: object) -> None:
        self._reap_all()

    def _reap_all(self) -> list[tuple[int, int]]:
        reaped = []
        while True:
            try:
                pid, status = os.waitpid(-1, os.WNOHANG)
            except ChildProcessError:
                break
            if pid == 0:
                break
            self._record(pid, status)
            reaped.append((pid, status))
        return reaped

    def reap(self) -> list[tuple[int, int]]:
        """Collect every child that has ended; return their (pid, status)."""
        with self._sigchld_blocked():
            return self._reap_all()

    def finished_report(self) -> str:
        """Forget finished background processes and describe them."""
        with self._sigchld_blocked():
            finished = self.background.pop_terminated()
        return "".join(format_status(e.pid, e.status) for e in finished)

    def wait_foreground(self) -> None:
        """Block until every foreground child has ended."""
        while self._foreground:
            pid = next(iter(self._foreground))
            try:
                os.waitpid(pid, 0)
            except ChildProcessError:
                pass
            with self._sigchld_blocked():
                self._foreground.discard(pid)