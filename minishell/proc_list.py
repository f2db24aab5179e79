"""Registry of background processes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass
class ProcEntry:
    pid: int
    status: int = 0
    terminated: bool = False


class ProcList:
    """Background processes kept in the order they were started."""

    def __init__(self) -> None:
        self._entries: list[ProcEntry] = []

    def push(self, pid: int) -> ProcEntry:
        entry = ProcEntry(pid)
        self._entries.append(entry)
        return entry

    def find(self, pid: int) -> Optional[ProcEntry]:
        return next((e for e in self._entries if e.pid == pid), None)

    def remove(self, pid: int) -> Optional[ProcEntry]:
        entry = self.find(pid)
        if entry is not None:
            self._entries.remove(entry)
        return entry

    def mark_terminated(self, pid: int, status: int) -> bool:
        """Record a wait status for pid; return whether pid is tracked."""
        entry = self.find(pid)
        if entry is None:
            return False
        entry.terminated = True
        entry.status = status
        return True

    def pop_terminated(self) -> list[ProcEntry]:
        """Remove and return terminated entries, oldest first."""
        finished = [e for e in self._entries if e.terminated]
        self._entries = [e for e in self._entries if not e.terminated]
        return finished

    def __iter__(self) -> Iterator[ProcEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)