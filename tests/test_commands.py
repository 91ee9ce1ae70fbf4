from minishell.commands import Command, Redirection, build_commands
from minishell.tokens import Token, TokenKind, tokenize


def test_empty_input_gives_no_commands():
    assert build_commands([]) == []


def test_single_command():
    assert build_commands(tokenize("ls -l")) == [Command(["ls", "-l"], [])]


def test_pipeline():
    commands = build_commands(tokenize("ls -l | wc -c"))
    assert [c.argv for c in commands] == [["ls", "-l"], ["wc", "-c"]]
    assert all(c.redirections == [] for c in commands)


def test_redirections_in_order():
    commands = build_commands(tokenize("cat < in > out"))
    assert commands == [
        Command(
            ["cat"],
            [Redirection("in", TokenKind.INPUT), Redirection("out", TokenKind.TRUNC)],
        )
    ]


def test_append_and_heredoc():
    commands = build_commands(tokenize("cat << EOF >> log"))
    assert commands[0].argv == ["cat"]
    assert commands[0].redirections == [
        Redirection("EOF", TokenKind.HEREDOC),
        Redirection("log", TokenKind.APPEND),
    ]


def test_trailing_pipe_starts_no_command():
    assert len(build_commands(tokenize("ls |"))) == 1


def test_leading_pipe_gives_empty_command():
    commands = build_commands(tokenize("| ls"))
    assert [c.argv for c in commands] == [[], ["ls"]]


def test_redirection_without_target_is_dropped():
    commands = build_commands([Token("ls", TokenKind.CMD), Token(">", TokenKind.TRUNC)])
    assert commands == [Command(["ls"], [])]


def test_redirection_consumes_next_token_whatever_its_kind():
    tokens = [
        Token(">", TokenKind.TRUNC),
        Token("|", TokenKind.PIPE),
        Token("b", TokenKind.CMD),
    ]
    commands = build_commands(tokens)
    assert commands == [Command(["b"], [Redirection("|", TokenKind.TRUNC)])]


def test_empty_token_is_an_argument():
    tokens = [Token("echo", TokenKind.CMD), Token("", TokenKind.EMPTY)]
    assert build_commands(tokens)[0].argv == ["echo", ""]


def test_command_count_matches_pipes():
    line = "a | b | c | d"
    tokens = tokenize(line)
    pipes = sum(1 for t in tokens if t.kind is TokenKind.PIPE)
    assert len(build_commands(tokens)) == pipes + 1