# minishell

A small shell for POSIX systems. It reads command lines from standard input,
runs programs alone or in pipelines, redirects their input and output to
files, starts pipelines in the background and reports when background
processes finish.

## Installing

    pip install .

## Running

    minishell

When standard input is a terminal (a character device) the shell shows a
`$ ` prompt. It also reads commands from a pipe or a file, without the
prompt:

    echo 'lecho hello' | minishell

The shell stops at end of input, or at a NUL byte at the start of a line.
While it runs, the shell itself ignores SIGINT; the programs it starts get
the default SIGINT behaviour back.

## Command lines

Words are separated by white space and by the characters `;`, `|`, `&`,
`<` and `>`.

- `cmd arg ...`: run a program found on `PATH`.
- `a | b | c`: connect commands with pipes.
- `cmd < in`, `cmd > out`, `cmd >> out`: read input from a file, write
  output to a file (truncating it), append output to a file. Output files
  are created with mode 0644.
- `a ; b`: run pipelines one after another.
- `cmd &`: run a pipeline in the background, in a new session. When
  standard input is a terminal, the shell prints before the next prompt a
  line for each background process that has finished, for example
  `Background process 1234 terminated. (exited with status 0)` or
  `Background process 1234 terminated. (killed by signal 15)`.

`&` is only allowed at the end of a pipeline. A pipeline with an empty
stage (`a | | b`), a redirection without a file name, or a command made
only of redirections is a syntax error: the shell prints `Syntax error.` to
standard output and runs nothing from that line.

Lines longer than 2048 bytes are discarded with `Syntax error.` on
standard error.

## Builtins

A builtin runs inside the shell when it is the only command of its
pipeline; inside a longer pipeline its name is looked up on `PATH` like any
other program.

| Name    | Effect                                                        |
|---------|---------------------------------------------------------------|
| `exit`  | leave the shell                                               |
| `lecho` | print its arguments separated by single spaces                |
| `lcd`   | change directory (to `$HOME` when no argument is given)       |
| `lkill` | `lkill PID` sends SIGTERM, `lkill -SIG PID` sends signal SIG  |
| `lls`   | list a directory (default `.`), skipping names starting with `.` |

When a builtin fails (for example `lcd` with two arguments, or `lkill` with
an argument that is not a number) the shell prints `Builtin <name> error.`
to standard error. Errors from sending the signal itself are ignored.

## Error messages

If a program cannot be started the shell prints
`<name>: no such file or directory`, `<name>: permission denied` or
`<name>: exec error`. If a redirection file cannot be opened it prints
`<file>: no such file or directory`, `<file>: permission denied` or
`open: <reason>`. In each case the command ends with status 127.

## Use as a library

- `minishell.syntax.parse_line(line)` returns a list of `Pipeline` objects
  (each with `commands` and `background`); a `Command` has `args` and
  `redirs`, a `Redirection` has `filename` and a `RedirKind`. Invalid lines
  raise `ParseError`.
- `minishell.executor.Executor().run_line(pipelines)` runs them and returns
  0 or 1.
- `minishell.display.format_parsed_line(pipelines)` renders a parsed line
  as text.
- `minishell.line_reader.LineReader` splits a file descriptor or binary
  stream into lines.
- `minishell.jobs.JobTracker` and `minishell.proc_list.ProcList` keep track
  of child processes.

Example:

    from minishell.syntax import parse_line
    from minishell.executor import Executor

    Executor().run_line(parse_line("echo hi | tr a-z A-Z"))

## What it does not do

There is no quoting or escaping, no variables, no wildcard expansion, no
command history or line editing, and no job control beyond starting
pipelines in the background (no `fg`, `bg` or `jobs`). The exit status of
a finished foreground command is not reported.

## Tests

    pip install .[test]
    pytest