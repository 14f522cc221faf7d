import pytest
import json_parser as jp
from json_parser import ErrorKind, JSONSyntaxError, Parser
from lexer import Token, TokenKind, lex

def _error(text, **options):
    with pytest.raises(JSONSyntaxError) as ei:
        jp.parse(text, **options)
    return ei.value

@pytest.mark.parametrize("text", [
    '{"a":1}',
    "[]",
    "{}",
    "[1,2]",
    "[true, false, null]",
    '{"a": [1, {"b": null}], "c": {}}',
    '[[1]]',
    '"bare string"',
    "-1.5e3",
    "true",
    "null\n",
])
def test_valid_documents(text):
    assert jp.parse(text) == 0

def test_duplicate_keys_accepted():
    assert jp.parse('{"a":1,"a":2}') == 0

def test_truncated_string_still_validates():
    assert jp.parse('{"a": "abc\n}') == 0

def test_empty_document():
    err = _error("")
    assert err.kind is ErrorKind.EMPTY_DOCUMENT
    assert str(err) == "empty JSON file"
    assert err.position is None

def test_missing_value_positioned_at_close():
    err = _error('{"a":}')
    assert err.kind is ErrorKind.UNEXPECTED_TOKEN
    assert err.position == 5
    assert str(err) == "Unexpected token at position 5."

def test_trailing_comma_in_object():
    err = _error('{"a":1,}')
    assert err.kind is ErrorKind.UNEXPECTED_TOKEN
    assert err.position == 7

def test_trailing_comma_in_array():
    assert _error("[1,]").kind is ErrorKind.UNEXPECTED_TOKEN

def test_missing_comma_in_object():
    err = _error('{"a":1 "b":2}')
    assert err.raw_value == "b"
    assert "Unexpected token b at position" in str(err)

def test_missing_colon():
    assert _error('{"a" 1}').raw_value == "1"

def test_non_string_key():
    assert _error("{1:2}").kind is ErrorKind.UNEXPECTED_TOKEN

def test_missing_closing_bracket_in_array():
    err = _error("[1,2")
    assert err.kind is ErrorKind.UNEXPECTED_TOKEN
    assert err.raw_value is None

@pytest.mark.parametrize("text", ["[1] 2", "{} {}", '{"a":1}}', "[],", "true false"])
def test_trailing_content(text):
    assert _error(text).kind is ErrorKind.TRAILING_CONTENT

def test_trailing_content_reports_trailing_token():
    err = _error("true false")
    assert str(err) == "Unexpected token false at position 9."

@pytest.mark.parametrize("raw", ["1", "-0", "+3", "1.", ".5", "1.5e-3", "2E+10", "inf", "NaN"])
def test_number_literals_accepted(raw):
    assert jp.parse(raw) == 0

@pytest.mark.parametrize("raw", ["1.2.3", "1_000", "0e", ".", "-", "abc", "0x10", "\u0661", "\u0661\u0662"])
def test_number_literals_rejected(raw):
    err = _error(f"[{raw}]")
    assert err.raw_value == raw

@pytest.mark.parametrize("text", ["tru", "True", "fals", "nul", "nulll"])
def test_keyword_literals_rejected(text):
    err = _error(text)
    assert err.raw_value == text
    assert err.kind is ErrorKind.UNEXPECTED_TOKEN

@pytest.mark.parametrize("text", ["[1,,2]", "[1,:]", "[,1]", '["a":1]'])
def test_array_rejects_missing_elements(text):
    assert _error(text).kind is ErrorKind.UNEXPECTED_TOKEN

@pytest.mark.parametrize("text", ["}", "]", ":", ","])
def test_bare_punctuation_rejected(text):
    assert _error(text).kind is ErrorKind.UNEXPECTED_TOKEN

def test_mirror_openers_rejects_closing_literal():
    assert jp.parse("[1]") == 0
    err = _error("[1]", mirror_openers=True)
    assert err.position == 2

def test_depth_limit():
    assert jp.parse("[[1]]", max_depth=2) == 0
    err = _error("[[[1]]]", max_depth=2)
    assert err.kind is ErrorKind.DEPTH_EXCEEDED
    assert "Maximum nesting depth 2" in str(err)

def test_default_depth_limit_stops_deep_nesting():
    deep = "[" * 300 + "]" * 300
    assert _error(deep).kind is ErrorKind.DEPTH_EXCEEDED

def test_error_is_a_syntax_error():
    with pytest.raises(SyntaxError):
        jp.parse("[")

def test_parser_is_reusable():
    parser = Parser(lex("[1, 2]"))
    assert parser.parse() == 0
    assert parser.parse() == 0
    assert parser.current == len(parser.tokens) - 1

def test_advance_stops_at_eof():
    parser = Parser(lex("1"))
    for _ in range(5):
        parser.advance()
    assert parser.token.kind is TokenKind.END_OF_FILE

def test_literal_token_without_raw_value_rejected():
    tokens = [Token(TokenKind.NUMBER, None, 0), Token(TokenKind.END_OF_FILE, None, 1)]
    with pytest.raises(JSONSyntaxError) as ei:
        Parser(tokens).parse()
    assert str(ei.value) == "Unexpected token at position 0."

def test_parser_requires_eof_terminated_tokens():
    with pytest.raises(ValueError):
        Parser([Token(TokenKind.LEFT_BRACE, None, 0)])

def test_depth_limit_above_interpreter_stack_reports_depth_error():
    deep = "[" * 5000 + "]" * 5000
    err = _error(deep, max_depth=10000)
    assert err.kind is ErrorKind.DEPTH_EXCEEDED
    assert "Nesting too deep for the interpreter" in str(err)
