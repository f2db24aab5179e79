"""Parsed command-line structures and the line parser."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional

MAX_LINE_LENGTH = 2048
SYNTAX_ERROR_STR = "Syntax error."
EXEC_FAILURE = 127
PROMPT_STR = "$ "
DOESNT_EXIST_STR = ": no such file or directory\n"
PERMISSION_DENIED_STR = ": permission denied\n"
EXEC_ERROR_STR = ": exec error\n"


class RedirKind(IntEnum):
    """Kind of a redirection; values follow the parser's flag bits."""

    INPUT = 1
    OUTPUT = 2
    APPEND = 6

    @property
    def symbol(self) -> str:
        return _KIND_SYMBOLS[self]


_KIND_SYMBOLS = {RedirKind.INPUT: "<", RedirKind.OUTPUT: ">", RedirKind.APPEND: ">>"}
_SYMBOL_KINDS = {symbol: kind for kind, symbol in _KIND_SYMBOLS.items()}


class ParseError(ValueError):
    """Raised when a line is not a valid sequence of pipelines."""

    def __init__(self, message: str = SYNTAX_ERROR_STR) -> None:
        super().__init__(message)


@dataclass
class Redirection:
    filename: str
    kind: RedirKind


@dataclass
class Command:
    args: list[str]
    redirs: list[Redirection] = field(default_factory=list)

    @property
    def program(self) -> str:
        return self.args[0]


@dataclass
class Pipeline:
    commands: list[Optional[Command]]
    background: bool = False


_WORD_PATTERN = re.compile(r">>|[;|&<>]|[^\s;|&<>]+")


def _split(words: list[str], separator: str) -> list[list[str]]:
    parts: list[list[str]] = [[]]
    for word in words:
        if word == separator:
            parts.append([])
        else:
            parts[-1].append(word)
    return parts


def _parse_command(words: list[str]) -> Optional[Command]:
    if not words:
        return None
    args: list[str] = []
    redirs: list[Redirection] = []
    stream: Iterator[str] = iter(words)
    for word in stream:
        kind = _SYMBOL_KINDS.get(word)
        if kind is None:
            args.append(word)
            continue
        target = next(stream, None)
        if target is None or target in _SYMBOL_KINDS:
            raise ParseError()
        redirs.append(Redirection(target, kind))
    if not args:
        raise ParseError()
    return Command(args, redirs)


def _parse_pipeline(words: list[str]) -> Pipeline:
    background = words[-1] == "&"
    if background:
        words = words[:-1]
    if not words or "&" in words:
        raise ParseError()
    commands = [_parse_command(part) for part in _split(words, "|")]
    return Pipeline(commands, background)


def parse_line(line: str) -> list[Pipeline]:
    """Parse pipelines separated by ';', each made of commands separated by '|'.

    An empty line gives a single pipeline holding one empty command.
    Empty commands inside longer pipelines are kept as None.
    """
    if len(line) > MAX_LINE_LENGTH:
        raise ParseError()
    words = _WORD_PATTERN.findall(line)
    pipelines = [_parse_pipeline(seg) for seg in _split(words, ";") if seg]
    if not pipelines:
        if words:
            raise ParseError()
        return [Pipeline([None])]
    return pipelines