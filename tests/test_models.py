from minish.models import Command, Redirect, Token, TokenType


def test_add_arg_keeps_order():
    cmd = Command()
    for word in ["ls", "-l", "/tmp"]:
        cmd.add_arg(word)
    assert cmd.args == ["ls", "-l", "/tmp"]
    assert cmd.name == "ls"


def test_add_arg_none_is_ignored():
    cmd = Command(args=["echo"])
    cmd.add_arg(None)
    assert cmd.args == ["echo"]


def test_empty_command_has_no_name():
    assert Command().name is None


def test_commands_do_not_share_lists():
    first = Command()
    second = Command()
    first.add_arg("x")
    assert second.args == []
    assert first.redirects is not second.redirects


def test_redirect_heredoc_flag():
    assert Redirect(TokenType.HEREDOC, eof="END").is_heredoc is True
    assert Redirect(TokenType.REDIR_OUT, target="out").is_heredoc is False


def test_token_type_matches_numbering():
    assert TokenType(5) is TokenType.PIPE
    assert TokenType.REDIR_APPEND.is_redirect
    assert not TokenType.PIPE.is_redirect
    assert not TokenType.WORD.is_redirect


def test_token_equality():
    assert Token("a", TokenType.WORD) == Token("a")
    assert Token("|", TokenType.PIPE).type is TokenType.PIPE