from headerlint.tokens import Token, TokenType, tokenize
from headerlint.header import DEFAULT_TEMPLATE


def types(tokens):
    return [t.type for t in tokens]


def test_tokens_reproduce_source():
    source = (
        "<?php\r\n"
        "/**\r\n"
        " * @author  Someone <a@b.c>  \r\n"
        " */\r\n"
        "// comment\n"
        "/* block\n comment */ $x = 1; /**/\n"
        " odd\n"
    )
    assert ''.join(t.content for t in tokenize(source)) == source


def test_default_template_tokens():
    tokens = tokenize(DEFAULT_TEMPLATE)
    assert tokens[0] == Token(TokenType.T_OPEN_TAG, "<?php\n", 1)
    assert tokens[1] == Token(TokenType.T_DOC_COMMENT_OPEN_TAG, "/**", 2)
    assert tokens[2] == Token(TokenType.T_DOC_COMMENT_WHITESPACE, "\n", 2)
    assert types(tokens[3:10]) == [
        TokenType.T_DOC_COMMENT_WHITESPACE,
        TokenType.T_DOC_COMMENT_STAR,
        TokenType.T_DOC_COMMENT_WHITESPACE,
        TokenType.T_DOC_COMMENT_TAG,
        TokenType.T_DOC_COMMENT_WHITESPACE,
        TokenType.T_DOC_COMMENT_STRING,
        TokenType.T_DOC_COMMENT_WHITESPACE,
    ]
    assert tokens[6] == Token(TokenType.T_DOC_COMMENT_TAG, "@author", 3)
    assert tokens[7].content == "    "
    assert tokens[8] == Token(TokenType.T_DOC_COMMENT_STRING, "Blue Acorn iCi <code@blueacornici.com>", 3)
    assert tokens[15] == Token(TokenType.T_DOC_COMMENT_STRING, "YYYY OWNER. All Rights Reserved.", 4)
    assert tokens[-2] == Token(TokenType.T_DOC_COMMENT_CLOSE_TAG, "*/", 5)
    assert tokens[-1] == Token(TokenType.T_WHITESPACE, "\n", 5)
    assert len(tokens) == 20


def test_trailing_whitespace_in_doc_comment_is_separate():
    tokens = tokenize("/**\n * text   \n */")
    assert [t.content for t in tokens] == ["/**", "\n", " ", "*", " ", "text", "   ", "\n", " ", "*/"]


def test_whitespace_is_split_per_line():
    tokens = tokenize("x  \n\n  y")
    assert [(t.type, t.content, t.line) for t in tokens] == [
        (TokenType.T_CODE, "x", 1),
        (TokenType.T_WHITESPACE, "  \n", 1),
        (TokenType.T_WHITESPACE, "\n", 2),
        (TokenType.T_WHITESPACE, "  ", 3),
        (TokenType.T_CODE, "y", 3),
    ]


def test_crlf_line_numbers():
    tokens = tokenize("<?php\r\n/**\r\n * @see x\r\n */\r\n")
    assert tokens[0].content == "<?php\r\n"
    assert tokens[2] == Token(TokenType.T_DOC_COMMENT_WHITESPACE, "\r\n", 2)
    tag = next(t for t in tokens if t.type == TokenType.T_DOC_COMMENT_TAG)
    assert tag.line == 3
    assert tokens[-2] == Token(TokenType.T_DOC_COMMENT_CLOSE_TAG, "*/", 4)


def test_empty_comment_is_not_a_doc_comment():
    tokens = tokenize("/**/ /* a */")
    assert types(tokens) == [TokenType.T_COMMENT, TokenType.T_WHITESPACE, TokenType.T_COMMENT]


def test_doc_comment_after_code():
    tokens = tokenize("<?php\nnamespace Foo;\n\n/**\n * Class Foo\n */\nclass Foo {}\n")
    opener = [i for i, t in enumerate(tokens) if t.type == TokenType.T_DOC_COMMENT_OPEN_TAG]
    assert opener == [6]
    assert tokens[6].line == 4


def test_unterminated_doc_comment():
    tokens = tokenize("/**\n * @author X\n")
    assert TokenType.T_DOC_COMMENT_CLOSE_TAG not in types(tokens)
    assert tokens[-1] == Token(TokenType.T_DOC_COMMENT_WHITESPACE, "\n", 2)


def test_single_line_doc_comment():
    tokens = tokenize("/** @var int */")
    assert [(t.type, t.content) for t in tokens] == [
        (TokenType.T_DOC_COMMENT_OPEN_TAG, "/**"),
        (TokenType.T_DOC_COMMENT_WHITESPACE, " "),
        (TokenType.T_DOC_COMMENT_TAG, "@var"),
        (TokenType.T_DOC_COMMENT_WHITESPACE, " "),
        (TokenType.T_DOC_COMMENT_STRING, "int"),
        (TokenType.T_DOC_COMMENT_WHITESPACE, " "),
        (TokenType.T_DOC_COMMENT_CLOSE_TAG, "*/"),
    ]


def test_empty_text():
    assert tokenize("") == []
