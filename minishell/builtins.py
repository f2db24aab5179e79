"""Commands executed inside the shell process itself."""

from __future__ import annotations

import os
import re
import signal
import sys
from typing import Callable, Optional, Sequence, TextIO

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_C_SPACE = " \t\n\v\f\r"
_INTEGER = re.compile(r"[+-]?[0-9]+")


class BuiltinError(RuntimeError):
    """Raised when a builtin command fails."""


def _stream(out: Optional[TextIO]) -> TextIO:
    return out if out is not None else sys.stdout


def lecho(args: Sequence[str], out: Optional[TextIO] = None) -> None:
    """Print the arguments separated by single spaces."""
    stream = _stream(out)
    stream.write(" ".join(args[1:]) + "\n")
    stream.flush()


def lexit(args: Sequence[str], out: Optional[TextIO] = None) -> None:
    """Flush pending output and leave the shell with status 0."""
    _stream(out).flush()
    sys.exit(0)


def lcd(args: Sequence[str], out: Optional[TextIO] = None) -> None:
    """Change directory; with no argument go to $HOME."""
    if len(args) < 2:
        target = os.environ.get("HOME")
        if target is None:
            raise BuiltinError("HOME is not set")
    elif len(args) > 2:
        raise BuiltinError("too many arguments")
    else:
        target = args[1]
    try:
        os.chdir(target)
    except OSError as error:
        raise BuiltinError(str(error)) from error


def lls(args: Sequence[str], out: Optional[TextIO] = None) -> None:
    """List the directory entries that do not start with a dot."""
    directory = args[1] if len(args) > 1 else "."
    try:
        names = os.listdir(directory)
    except OSError as error:
        raise BuiltinError(str(error)) from error
    stream = _stream(out)
    for name in names:
        if not name.startswith("."):
            stream.write(f"{name}\n")
            stream.flush()


def _parse_int(text: str) -> int:
    body = text.lstrip(_C_SPACE)
    match = _INTEGER.match(body)
    if match is None:
        if text:
            raise BuiltinError(f"not a number: {text!r}")
        return 0
    if match.end() != len(body):
        raise BuiltinError(f"not a number: {text!r}")
    value = int(match.group())
    if not _INT_MIN <= value <= _INT_MAX:
        raise BuiltinError(f"number out of range: {text!r}")
    return value


def lkill(args: Sequence[str], out: Optional[TextIO] = None) -> None:
    """Send a signal: 'lkill PID' sends SIGTERM, 'lkill -SIG PID' sends SIG."""
    if len(args) < 2:
        raise BuiltinError("missing process id")
    first = _parse_int(args[1])
    if len(args) < 3:
        pid, sig = first, int(signal.SIGTERM)
    else:
        pid, sig = _parse_int(args[2]), -first
    try:
        os.kill(pid, sig)
    except (OSError, ValueError, OverflowError):
        pass


_BUILTINS: dict[str, Callable[[Sequence[str], Optional[TextIO]], None]] = {
    "exit": lexit,
    "lecho": lecho,
    "lcd": lcd,
    "lkill": lkill,
    "lls": lls,
}


def is_builtin(name: str) -> bool:
    return name in _BUILTINS


def run_builtin(args: Sequence[str], out: Optional[TextIO] = None) -> None:
    """Run the builtin named by args[0]; raise BuiltinError if it fails."""
    handler = _BUILTINS.get(args[0]) if args else None
    if handler is None:
        raise BuiltinError(f"Command {args[0] if args else ''} undefined.")
    handler(args, out)