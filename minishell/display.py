"""Text rendering of parsed lines, validation and the prompt."""

from __future__ import annotations

import os
import stat
import sys
from typing import Optional, Sequence, TextIO

from .syntax import PROMPT_STR, SYNTAX_ERROR_STR, Command, ParseError, Pipeline


def format_command(command: Optional[Command], index: int) -> str:
    lines = [f"\tCOMMAND {index}\n"]
    if command is None:
        lines.append("\t\t(NULL)\n")
        return "".join(lines)
    argv = "".join(f"{arg}:" for arg in command.args)
    redirs = "".join(f"({r.filename},{r.kind.symbol}):" for r in command.redirs)
    lines.append(f"\t\targv=:{argv}\n\t\tredirections=:{redirs}\n")
    return "".join(lines)


def format_pipeline(pipeline: Pipeline, index: int) -> str:
    parts = [f"PIPELINE {index}\n"]
    if not pipeline.commands:
        parts.append("\t(NULL)\n")
        return "".join(parts)
    parts.extend(
        format_command(command, number)
        for number, command in enumerate(pipeline.commands, start=1)
    )
    parts.append(f"Totally {len(pipeline.commands)} commands in pipeline {index}.\n")
    parts.append(f"Pipeline {'' if pipeline.background else 'NOT '}in background.\n")
    return "".join(parts)


def format_parsed_line(pipelines: Optional[Sequence[Pipeline]]) -> str:
    if pipelines is None:
        return f"{SYNTAX_ERROR_STR}\n"
    parts = [format_pipeline(p, number) for number, p in enumerate(pipelines, start=1)]
    parts.append(f"Totally {len(pipelines)} pipelines.\n")
    return "".join(parts)


def first_command(pipelines: Optional[Sequence[Pipeline]]) -> Optional[Command]:
    if not pipelines or not pipelines[0].commands:
        return None
    return pipelines[0].commands[0]


def check_pipelines(pipelines: Optional[Sequence[Pipeline]]) -> None:
    """Raise ParseError if the line is missing or a pipeline has an empty stage."""
    if pipelines is None:
        raise ParseError()
    for pipeline in pipelines:
        if len(pipeline.commands) > 1 and any(c is None for c in pipeline.commands):
            raise ParseError()


def stdin_is_terminal() -> bool:
    """Whether standard input is a character device; exits if it cannot be examined."""
    try:
        mode = os.fstat(0).st_mode
    except OSError:
        sys.exit(1)
    return stat.S_ISCHR(mode)


def print_prompt(stream: Optional[TextIO] = None) -> None:
    if stdin_is_terminal():
        out = stream if stream is not None else sys.stdout
        out.write(PROMPT_STR)
        out.flush()