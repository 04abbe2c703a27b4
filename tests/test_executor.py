import os
import sys

import pytest

from minish.env import Environment
from minish.errors import ShellExit
from minish.executor import execute_pipeline, find_cmd_path, status_from_returncode
from minish.models import Command, Redirect, TokenType

PY = sys.executable
UPPER = "import sys; sys.stdout.write(sys.stdin.read().upper())"


def _env(**extra):
    base = {"PATH": os.environ.get("PATH", "")}
    base.update(extra)
    return Environment(base)


def test_find_cmd_path_in_path(tmp_path):
    (tmp_path / "tool").write_text("")
    env = Environment({"PATH": f"::{tmp_path}"})
    assert find_cmd_path("tool", env) == f"{tmp_path}/tool"
    assert find_cmd_path("absent", env) is None


def test_find_cmd_path_with_slash_and_no_path(tmp_path):
    f = tmp_path / "x"
    f.write_text("")
    assert find_cmd_path(str(f), Environment()) == str(f)
    assert find_cmd_path("x", Environment()) is None
    assert find_cmd_path("", _env()) is None


def test_status_from_returncode():
    assert status_from_returncode(0) == 0
    assert status_from_returncode(3) == 3
    assert status_from_returncode(-9) == 137


def test_builtin_output_to_file(tmp_path):
    out = tmp_path / "o.txt"
    cmd = Command(["echo", "hi"], [Redirect(TokenType.REDIR_OUT, target=str(out))])
    assert execute_pipeline([cmd], _env(), 0) == 0
    assert out.read_text() == "hi\n"


def test_append(tmp_path):
    out = tmp_path / "o.txt"
    out.write_text("a\n")
    cmd = Command(["echo", "b"], [Redirect(TokenType.REDIR_APPEND, target=str(out))])
    execute_pipeline([cmd], _env(), 0)
    assert out.read_text() == "a\nb\n"


def test_pipe_builtin_into_external(tmp_path):
    out = tmp_path / "o.txt"
    cmds = [
        Command(["echo", "hi"]),
        Command([PY, "-c", UPPER], [Redirect(TokenType.REDIR_OUT, target=str(out))]),
    ]
    assert execute_pipeline(cmds, _env(), 0) == 0
    assert out.read_text() == "HI\n"


def test_heredoc_feeds_external(tmp_path):
    out = tmp_path / "o.txt"
    cmd = Command(
        [PY, "-c", UPPER],
        [Redirect(TokenType.HEREDOC, eof="E"), Redirect(TokenType.REDIR_OUT, target=str(out))],
        heredoc_input="abc\n",
    )
    assert execute_pipeline([cmd], _env(), 0) == 0
    assert out.read_text() == "ABC\n"


def test_exit_code_of_last_command():
    cmd = Command([PY, "-c", "raise SystemExit(3)"])
    assert execute_pipeline([Command(["echo", "x"]), cmd], _env(), 0) == 3


def test_command_not_found(capsys):
    assert execute_pipeline([Command(["no-such-cmd-zz"])], _env(), 0) == 127
    assert "command not found" in capsys.readouterr().err


def test_directory(tmp_path, capsys):
    assert execute_pipeline([Command([str(tmp_path)])], _env(), 0) == 126
    assert "Is a directory" in capsys.readouterr().err


def test_missing_input_file(tmp_path):
    cmd = Command(["echo"], [Redirect(TokenType.REDIR_IN, target=str(tmp_path / "none"))])
    assert execute_pipeline([cmd], _env(), 0) == 1


def test_redirect_only_creates_file(tmp_path):
    out = tmp_path / "new"
    assert execute_pipeline([Command([], [Redirect(TokenType.REDIR_OUT, target=str(out))])], _env(), 5) == 0
    assert out.exists()


def test_single_exit_raises():
    with pytest.raises(ShellExit) as info:
        execute_pipeline([Command(["exit", "4"])], _env(), 0)
    assert info.value.code == 4


def test_pipeline_builtins_do_not_change_env():
    env = _env()
    status = execute_pipeline([Command(["export", "A=1"]), Command(["exit", "7"])], env, 0)
    assert status == 7
    assert "A" not in env


def test_single_export_changes_env():
    env = _env()
    execute_pipeline([Command(["export", "A=1"])], env, 0)
    assert env.get("A") == "1"