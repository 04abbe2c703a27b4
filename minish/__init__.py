"""A small interactive shell with pipes, redirections, heredocs and builtins."""

__version__ = "0.1.0"
__all__ = [
    "builtins",
    "env",
    "errors",
    "executor",
    "expand",
    "heredoc",
    "lexer",
    "models",
    "parser",
    "shell",
    "signals",
]