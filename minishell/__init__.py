"""A small POSIX shell: line parsing, pipelines, redirections, background jobs and builtins."""

__version__ = "0.1.0"