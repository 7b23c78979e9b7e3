from tmpltranslate.scanner import Scanner, TokenKind, is_quoted, is_variable_rune, trim_quotes


def texts(scanner):
    return [token.text for token in scanner]


def test_default_rule_splits_template_variables():
    assert texts(Scanner("$.Name")) == ["$", ".", "Name"]


def test_variable_rule_keeps_references_whole():
    scanner = Scanner('_ "Hello" $.User.Name /* note */', ident_rune=is_variable_rune)
    assert texts(scanner) == ["_", '"Hello"', "$.User.Name", "/* note */"]


def test_blanks_become_tokens_when_not_whitespace():
    assert texts(Scanner("a b", whitespace="")) == ["a", " ", "b"]


def test_braces_inside_strings_stay_in_the_string():
    assert texts(Scanner('{"}}"}', whitespace="")) == ["{", '"}}"', "}"]


def test_token_kinds_and_positions():
    tokens = list(Scanner("x 42 1.5 .5 'c' `raw` | // tail"))
    assert [t.kind for t in tokens] == [
        TokenKind.IDENT,
        TokenKind.INT,
        TokenKind.FLOAT,
        TokenKind.FLOAT,
        TokenKind.CHAR,
        TokenKind.RAW_STRING,
        TokenKind.PUNCT,
        TokenKind.COMMENT,
    ]
    assert tokens[6].pos == 22


def test_unterminated_input_does_not_raise():
    tokens = list(Scanner('"abc\nx /* open'))
    assert [t.text for t in tokens] == ['"abc', "x", "/* open"]
    assert tokens[0].kind is TokenKind.STRING
    assert tokens[2].kind is TokenKind.COMMENT


def test_quotes():
    assert is_quoted('"a"')
    assert is_quoted("`a`")
    assert not is_quoted('"a')
    assert not is_quoted('"')
    assert trim_quotes("'abc'") == "abc"
    assert trim_quotes("abc") == "abc"
