"""Running parsed lines: builtins, forked pipelines and redirections."""

from __future__ import annotations

import errno
import os
import signal
import sys
from typing import Optional, Sequence, TextIO

from .builtins import BuiltinError, is_builtin, run_builtin
from .display import check_pipelines
from .jobs import JobTracker
from .syntax import (
    DOESNT_EXIST_STR,
    EXEC_ERROR_STR,
    EXEC_FAILURE,
    PERMISSION_DENIED_STR,
    SYNTAX_ERROR_STR,
    Command,
    ParseError,
    Pipeline,
    Redirection,
    RedirKind,
)

OK = 0
FAIL = 1

_REDIRECT_MODES = {
    RedirKind.INPUT: (os.O_RDONLY, 0),
    RedirKind.OUTPUT: (os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 1),
    RedirKind.APPEND: (os.O_WRONLY | os.O_CREAT | os.O_APPEND, 1),
}


def exec_error_message(program: str, error_number: Optional[int]) -> str:
    if error_number == errno.ENOENT:
        return f"{program}{DOESNT_EXIST_STR}"
    if error_number == errno.EACCES:
        return f"{program}{PERMISSION_DENIED_STR}"
    return f"{program}{EXEC_ERROR_STR}"


def open_error_message(filename: str, error_number: Optional[int]) -> str:
    if error_number == errno.ENOENT:
        return f"{filename}{DOESNT_EXIST_STR}"
    if error_number == errno.EACCES:
        return f"{filename}{PERMISSION_DENIED_STR}"
    return f"open: {os.strerror(error_number or 0)}\n"


def _close(*fds: Optional[int]) -> None:
    for fd in fds:
        if fd is not None:
            os.close(fd)


def _child_write(message: str) -> None:
    os.write(2, message.encode("utf-8", "surrogateescape"))


def _redirect(redirection: Redirection) -> None:
    flags, target = _REDIRECT_MODES[redirection.kind]
    try:
        fd = os.open(redirection.filename, flags, 0o644)
    except OSError as error:
        _child_write(open_error_message(redirection.filename, error.errno))
        os._exit(EXEC_FAILURE)
    try:
        os.dup2(fd, target)
    except OSError as error:
        _child_write(f"dup2: {error.strerror}\n")
        os._exit(EXEC_FAILURE)
    os.close(fd)


def _run_child(
    command: Command,
    stdin_fd: Optional[int],
    stdout_fd: Optional[int],
    extra_fd: Optional[int],
    background: bool,
) -> None:
    try:
        signal.signal(signal.SIGINT, signal.SIG_DFL)
        if background:
            os.setsid()
        try:
            if stdin_fd is not None:
                os.dup2(stdin_fd, 0)
            if stdout_fd is not None:
                os.dup2(stdout_fd, 1)
        except OSError as error:
            _child_write(f"dup2: {error.strerror}\n")
            os._exit(EXEC_FAILURE)
        _close(stdin_fd, stdout_fd, extra_fd)
        for redirection in command.redirs:
            _redirect(redirection)
        try:
            os.execvp(command.program, command.args)
        except OSError as error:
            _child_write(exec_error_message(command.program, error.errno))
    finally:
        os._exit(EXEC_FAILURE)


class Executor:
    """Runs pipelines, keeping track of the children it starts."""

    def __init__(self, jobs: Optional[JobTracker] = None, out: Optional[TextIO] = None) -> None:
        self.jobs = jobs if jobs is not None else JobTracker()
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def run_line(self, pipelines: Optional[Sequence[Pipeline]]) -> int:
        """Run each pipeline in turn; return the status of the last one."""
        try:
            check_pipelines(pipelines)
        except ParseError:
            self.out.write(f"{SYNTAX_ERROR_STR}\n")
            self.out.flush()
            return FAIL
        status = OK
        for pipeline in pipelines:
            status = self.run_pipeline(pipeline)
        return status

    def run_pipeline(self, pipeline: Pipeline) -> int:
        commands = pipeline.commands
        if not commands or (len(commands) == 1 and commands[0] is None):
            return OK
        if any(command is None for command in commands):
            raise ParseError()

        first = commands[0]
        if len(commands) == 1 and is_builtin(first.program):
            try:
                run_builtin(first.args, self.out)
            except BuiltinError:
                sys.stderr.write(f"Builtin {first.program} error.\n")
                sys.stderr.flush()
                return FAIL
            return OK

        last = len(commands) - 1
        prev_read: Optional[int] = None
        for index, command in enumerate(commands):
            read_end = write_end = None
            if index != last:
                try:
                    read_end, write_end = os.pipe()
                except OSError as error:
                    sys.stderr.write(f"pipe: {error.strerror}\n")
                    _close(prev_read)
                    return FAIL
            try:
                pid = self._spawn(command, prev_read, write_end, read_end, pipeline.background)
            except OSError:
                _close(prev_read, read_end, write_end)
                return FAIL
            if pipeline.background:
                self.jobs.add_background(pid)
            else:
                self.jobs.add_foreground(pid)
            _close(prev_read, write_end)
            prev_read = read_end

        if not pipeline.background:
            self.jobs.wait_foreground()
        return OK

    def _spawn(
        self,
        command: Command,
        stdin_fd: Optional[int],
        stdout_fd: Optional[int],
        extra_fd: Optional[int],
        background: bool,
    ) -> int:
        sys.stdout.flush()
        sys.stderr.flush()
        pid = os.fork()
        if pid == 0:
            _run_child(command, stdin_fd, stdout_fd, extra_fd, background)
        return pid