import pytest

from minishell.syntax import (
    MAX_LINE_LENGTH,
    SYNTAX_ERROR_STR,
    Command,
    ParseError,
    Pipeline,
    Redirection,
    RedirKind,
    parse_line,
)


def test_simple_command():
    pipelines = parse_line("ls -l /tmp")
    assert pipelines == [Pipeline([Command(["ls", "-l", "/tmp"])])]
    assert pipelines[0].commands[0].program == "ls"


def test_empty_line_gives_single_empty_command():
    assert parse_line("") == [Pipeline([None])]
    assert parse_line("   \t ") == [Pipeline([None])]


def test_pipeline_commands():
    (pipeline,) = parse_line("cat file | grep x | wc -l")
    assert [c.args for c in pipeline.commands] == [["cat", "file"], ["grep", "x"], ["wc", "-l"]]
    assert pipeline.background is False


def test_sequence_and_background():
    pipelines = parse_line("sleep 5 & ; echo done")
    assert len(pipelines) == 2
    assert pipelines[0].background is True
    assert pipelines[1].background is False
    assert pipelines[1].commands[0].args == ["echo", "done"]


def test_background_without_spaces():
    (pipeline,) = parse_line("sleep 1&")
    assert pipeline.background
    assert pipeline.commands[0].args == ["sleep", "1"]


def test_redirections():
    (pipeline,) = parse_line("sort < in.txt > out.txt")
    command = pipeline.commands[0]
    assert command.args == ["sort"]
    assert command.redirs == [
        Redirection("in.txt", RedirKind.INPUT),
        Redirection("out.txt", RedirKind.OUTPUT),
    ]


def test_append_redirection():
    (pipeline,) = parse_line("echo a >>log")
    assert pipeline.commands[0].redirs == [Redirection("log", RedirKind.APPEND)]


def test_parsed_redir_kind_values_match_flags():
    (pipeline,) = parse_line("cmd < a > b >> c")
    kinds = [r.kind for r in pipeline.commands[0].redirs]
    assert [int(k) for k in kinds] == [1, 1 << 1, (1 << 1) | (1 << 2)]


def test_parsed_redir_symbols():
    (pipeline,) = parse_line("cmd < a > b >> c")
    assert [r.kind.symbol for r in pipeline.commands[0].redirs] == ["<", ">", ">>"]


def test_empty_command_in_pipeline_kept_as_none():
    (pipeline,) = parse_line("ls | | wc")
    assert pipeline.commands[1] is None
    assert len(pipeline.commands) == 3


def test_trailing_semicolon_ignored():
    assert parse_line("ls ;") == parse_line("ls")


@pytest.mark.parametrize(
    "line",
    ["ls >", "cat < > x", "& ls", "ls & | wc", "&", ";", "> out"],
)
def test_syntax_errors(line):
    with pytest.raises(ParseError) as info:
        parse_line(line)
    assert str(info.value) == SYNTAX_ERROR_STR


def test_overlong_line_rejected():
    with pytest.raises(ParseError):
        parse_line("a" * (MAX_LINE_LENGTH + 1))
    assert parse_line("a" * MAX_LINE_LENGTH)[0].commands[0].args == ["a" * MAX_LINE_LENGTH]