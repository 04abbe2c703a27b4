import pytest

from minish.env import Environment
from minish.errors import ShellSyntaxError
from minish.lexer import tokenize_line
from minish.models import Token, TokenType
from minish.parser import AmbiguousRedirectError, create_redirect, is_ambiguous, parse


@pytest.fixture
def env():
    return Environment({"HOME": "/home/user", "SPACED": "a b", "EMPTY": ""})


def run(line, env, status=0):
    return parse(tokenize_line(line), env, status)


def test_simple_pipeline(env):
    cmds = run("echo hello | wc -l", env)
    assert [c.args for c in cmds] == [["echo", "hello"], ["wc", "-l"]]


def test_expansion_in_double_quotes(env):
    cmds = run('echo "$HOME"', env)
    assert cmds[0].args == ["echo", "/home/user"]


def test_status_expansion(env):
    cmds = run("echo $?", env, status=42)
    assert cmds[0].args == ["echo", "42"]


def test_empty_double_quotes_kept_single_quotes_dropped(env):
    assert run('echo ""', env)[0].args == ["echo", ""]
    assert run("echo ''", env)[0].args == ["echo"]


def test_unset_variable_vanishes(env):
    assert run("$NOPE", env)[0].args == []


def test_empty_token_list():
    assert parse([], None, 0) == []


@pytest.mark.parametrize("line", ["| ls", "ls |", "ls | | wc"])
def test_pipe_errors(env, line):
    with pytest.raises(ShellSyntaxError) as info:
        run(line, env)
    assert info.value.status == 2
    assert "`|'" in str(info.value)


def test_file_redirects(env):
    cmd = run("cat < in.txt > out.txt >> log.txt", env)[0]
    assert cmd.args == ["cat"]
    assert [(r.type, r.target) for r in cmd.redirects] == [
        (TokenType.REDIR_IN, "in.txt"),
        (TokenType.REDIR_OUT, "out.txt"),
        (TokenType.REDIR_APPEND, "log.txt"),
    ]


def test_redirect_target_expanded(env):
    cmd = run("echo hi > $HOME", env)[0]
    assert cmd.redirects[0].target == "/home/user"


def test_heredoc_quoted_delimiter(env):
    redir = run("cat << 'EOF'", env)[0].redirects[0]
    assert redir.is_heredoc
    assert redir.eof == "EOF"
    assert redir.expand_heredoc is False


def test_heredoc_plain_delimiter_not_expanded(env):
    redir = run("cat << $HOME", env)[0].redirects[0]
    assert redir.eof == "$HOME"
    assert redir.expand_heredoc is True


@pytest.mark.parametrize("line", ["echo > $SPACED", "echo > $EMPTY", "echo > $NOPE"])
def test_ambiguous_redirect(env, line):
    with pytest.raises(AmbiguousRedirectError) as info:
        run(line, env)
    assert "ambiguous redirect" in str(info.value)
    assert info.value.status == 0


def test_redirect_without_target(env):
    with pytest.raises(ShellSyntaxError):
        run("ls >", env)


def test_redirect_followed_by_pipe(env):
    with pytest.raises(ShellSyntaxError):
        run("ls > | wc", env)


@pytest.mark.parametrize(
    ("text", "expected"),
    [("a b", True), ("a\tb", True), ('"a b"', False), ("'a b'", False), ("ab", False)],
)
def test_is_ambiguous(text, expected):
    assert is_ambiguous(text) is expected


def test_create_redirect_without_target():
    redir = create_redirect(Token(">", TokenType.REDIR_OUT), None, None, 0)
    assert redir.type is TokenType.REDIR_OUT
    assert redir.target is None


def test_create_redirect_strips_quotes(env):
    redir = create_redirect(Token("<", TokenType.REDIR_IN), '"my file"', env, 0)
    assert redir.target == "my file"