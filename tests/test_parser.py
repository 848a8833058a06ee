import pytest

from minilexer.parser import ParseError, Parser, is_delimiter, tokenize
from minilexer.tokens import TokenType


def test_plain_words_split_on_spaces():
    assert tokenize("ls -l /tmp") == ["ls", "-l", "/tmp"]


def test_tabs_separate_words():
    assert tokenize("ls\t-a") == ["ls", "-a"]


def test_token_types_and_pipe_index():
    parser = Parser("cat < in | wc -l > out")
    tokens = parser.parse()
    assert [t.type for t in tokens] == [
        TokenType.CMD,
        TokenType.RED,
        TokenType.FILE,
        TokenType.PIPE,
        TokenType.CMD,
        TokenType.ARG,
        TokenType.RED,
        TokenType.FILE,
    ]
    assert [t.pipe_idx for t in tokens] == [0, 0, 0, 1, 1, 1, 1, 1]
    assert all(t.is_end for t in tokens)


def test_variable_expansion():
    assert tokenize("echo $HOME", {"HOME": "/home/user"}) == ["echo", "/home/user"]


def test_missing_variable_expands_to_empty():
    assert tokenize("echo $NOPE", {}) == ["echo", ""]


def test_variable_without_value_expands_to_empty():
    assert tokenize("echo $AA", {"AA": None}) == ["echo", ""]


def test_previous_status():
    assert tokenize("echo $?", {}, 42) == ["echo", "42"]


def test_lone_dollars_are_kept():
    assert tokenize("echo $ $$") == ["echo", "$", "$$"]


def test_dollar_before_closing_double_quote():
    assert tokenize('echo "$"') == ["echo", "$"]


def test_single_quotes_do_not_expand():
    parser = Parser("echo '$HOME'", {"HOME": "/home/user"})
    tokens = parser.parse()
    assert parser.words() == ["echo", "$HOME"]
    assert tokens[1].is_quote


def test_double_quotes_expand():
    assert tokenize('echo "hi $USER!"', {"USER": "alice"}) == ["echo", "hi alice!"]


def test_adjacent_quotes_join_into_one_word():
    assert tokenize("echo a\"b\"'c'") == ["echo", "abc"]


def test_empty_quotes_give_empty_argument():
    parser = Parser('echo ""')
    tokens = parser.parse()
    assert parser.words() == ["echo", ""]
    assert tokens[1].type is TokenType.ARG


def test_heredoc_delimiter_is_not_expanded():
    assert tokenize("cat << $EOF", {"EOF": "value"}) == ["cat", "<<", "$EOF"]


def test_redirect_attached_to_word():
    assert tokenize("echo hi>out") == ["echo", "hi", ">", "out"]


def test_parse_keeps_source_order():
    parser = Parser("> out echo")
    tokens = parser.parse()
    assert parser.words() == [">", "out", "echo"]
    assert [t.type for t in tokens] == [TokenType.RED, TokenType.FILE, TokenType.CMD]


def test_reorder_moves_command_first():
    assert tokenize("> out echo hi") == ["echo", "hi", ">", "out"]


def test_reorder_per_pipe_block():
    assert tokenize("< in cat | > out wc") == ["cat", "<", "in", "|", "wc", ">", "out"]


def test_reorder_keeps_all_tokens():
    line = "< a cat -e > b | grep x >> c"
    parser = Parser(line)
    before = sorted(parser.parse(), key=id)
    after = sorted(parser.reorder(), key=id)
    assert before == after


def test_words_match_tokenize_without_redirects():
    parser = Parser("ls -l | wc")
    parser.parse()
    parser.reorder()
    assert parser.words() == tokenize("ls -l | wc")


@pytest.mark.parametrize(
    "line, token",
    [
        ("| ls", "|"),
        ("ls |", "|"),
        ("ls | | wc", "|"),
        ("ls || wc", "|"),
        ("< | x", "|"),
        ("ls >", "newline"),
        ("ls > ", "newline"),
        ("ls >> >> x", ">>"),
        ("ls > > x", ">"),
        ('echo "abc', '"'),
        ("echo 'abc", "'"),
    ],
)
def test_syntax_errors(line, token):
    with pytest.raises(ParseError) as info:
        tokenize(line)
    assert info.value.token == token
    assert info.value.status == 2
    assert token in str(info.value)


@pytest.mark.parametrize("char", [" ", "|", "<", ">", "$", "\0", '"', "'", "\t"])
def test_delimiters(char):
    assert is_delimiter(char) is True


@pytest.mark.parametrize("char", ["a", "-", "/", "="])
def test_non_delimiters(char):
    assert is_delimiter(char) is False