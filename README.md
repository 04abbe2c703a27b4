# minish

`minish` is a small interactive shell. It reads command lines at a
`minishell$ ` prompt and runs them much as a POSIX shell would.

## Installing

```
pip install .
```

## Running

```
minish
```

The command takes no arguments. If you give it any, it prints a usage line
and exits with status 1.

To leave the shell, press Ctrl-D at the prompt. The shell prints `exit` and
returns the status of the last command. You can also type `exit [n]`.

When Python's `readline` module is available, each line you enter is added
to the history.

## What it understands

- **Words and quoting**
  - A word in single quotes is taken literally.
  - A word in double quotes still has `$VAR` and `$?` expanded.
  - A quote that is never closed is a syntax error.
- **Expansion**
  - `$NAME` is replaced by the variable's value. An unset variable gives
    the empty string.
  - `$?` is replaced by the last exit status.
  - `$` followed by a digit expands to nothing.
  - `\$` gives a literal dollar sign.
  - A word that expands to nothing is dropped, unless it contained double
    quotes.
- **Pipes**: `cmd1 | cmd2 | cmd3`.
  - A pipe at the start or end of a line is a syntax error with status 2.
  - So are two pipes in a row.
- **Redirections**
  - `< file` reads input from a file.
  - `> file` writes output to a file.
  - `>> file` appends output to a file.
  - `<< EOF` starts a heredoc. Its body is read before the pipeline starts.
    The body is expanded unless some part of the delimiter is quoted.
    Pressing Ctrl-C while the body is being read cancels the line with
    status 130.
  - A redirection with no word after it is a syntax error with status 2.
  - A target that expands to nothing, or to several words, is reported as
    an ambiguous redirect. The line is then dropped.
- **Builtins**
  - `echo`, with one or more `-n` flags.
  - `cd`, with a directory, `~`, `-` or no argument. It updates `PWD` and
    `OLDPWD` when those variables exist.
  - `pwd` and `env`.
  - `export`, which with no arguments lists every variable.
  - `unset`.
  - `exit [n]`. A non-numeric argument gives status 2. Too many arguments
    give status 1.
  - `:`.
  - A builtin run on its own changes the shell itself. A builtin inside a
    pipeline works on a copy of the environment, so its changes are lost.
- **External commands**
  - Commands are looked up in `PATH`. A name containing `/` is used as it
    is.
  - A command that is not found gives status 127.
  - A directory gives status 126.
- **Signals**
  - Ctrl-C at the prompt starts a new line and sets status 130.
  - Ctrl-\ is ignored at the prompt.
  - A child killed by a signal reports 128 plus the signal number.

## What it does not do

`minish` has no:

- command lists with `;`, `&&` or `||`
- background jobs or job control
- subshells
- globbing or word splitting of expanded values
- scripts given as files

The `<>` operator is recognised by the lexer and parser, but it has no
effect when the command runs.

## Using it from Python

You can use the parts of the shell as a library:

```python
from minish.env import create_env
from minish.shell import Shell, parse_line

env = create_env(["PATH=/usr/bin:/bin", "HOME=/tmp"])
commands = parse_line("echo $HOME | tr a-z A-Z", env, 0)

shell = Shell(env)
status = shell.process_line("echo hello > /tmp/out.txt")
```

The main entry points are:

- `minish.lexer.tokenize_line` splits a line into `Token` objects.
- `minish.parser.parse` groups tokens into a list of `Command` objects.
  It raises `ShellSyntaxError` on bad syntax.
- `minish.expand.expand` and `minish.expand.remove_quotes` do variable
  expansion and quote removal.
- `minish.heredoc.process_heredocs` reads heredoc bodies. It takes a
  `read_line` callable, so you can supply input without a terminal.
- `minish.executor.execute_pipeline` runs the commands and returns the
  exit status.
- `minish.builtins.run_builtin` runs a builtin with its output sent to
  streams you choose.

`Shell` also takes a `read_line` callable. `Shell.run()` loops until input
ends or `exit` is run, and returns the final status.