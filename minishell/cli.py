"""Interactive shell loop."""

from __future__ import annotations

import signal
import sys
from typing import Optional, Sequence

from .display import print_prompt, stdin_is_terminal
from .executor import Executor
from .jobs import JobTracker
from .line_reader import LineReader, LineTooLongError
from .syntax import SYNTAX_ERROR_STR, ParseError, parse_line


def _loop(jobs: JobTracker) -> None:
    executor = Executor(jobs)
    reader = LineReader(0)
    while True:
        report = jobs.finished_report()
        if report and stdin_is_terminal():
            sys.stdout.write(report)
            sys.stdout.flush()
        print_prompt()

        try:
            line = reader.read_line()
        except LineTooLongError as error:
            sys.stderr.write(f"{error}\n")
            sys.stderr.flush()
            continue
        if line is None:
            break

        try:
            pipelines = parse_line(line)
        except ParseError:
            sys.stdout.write(f"{SYNTAX_ERROR_STR}\n")
            sys.stdout.flush()
            continue
        executor.run_line(pipelines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read and run command lines from standard input until it ends."""
    previous_chld = signal.getsignal(signal.SIGCHLD)
    previous_int = signal.getsignal(signal.SIGINT)
    jobs = JobTracker()
    jobs.install()
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        _loop(jobs)
    finally:
        if previous_chld is not None:
            signal.signal(signal.SIGCHLD, previous_chld)
        if previous_int is not None:
            signal.signal(signal.SIGINT, previous_int)
    return 0


if __name__ == "__main__":
    sys.exit(main())