"""
Tests for shell and JavaScript escaping.
"""
from harkit.codegen.escaping import escape_js, escape_shell, js_quote, shell_quote, shell_word


def test_shell_escapes_single_quote():
    assert escape_shell("O'Brien") == "O'\\''Brien"
    assert shell_quote("O'Brien") == "'O'\\''Brien'"


def test_shell_leaves_other_characters():
    assert escape_shell('a "b" $c \\d') == 'a "b" $c \\d'


def test_shell_none_is_empty():
    assert escape_shell(None) == ""
    assert shell_quote(None) == "''"


def test_js_escapes_specials():
    assert escape_js("a\\b") == "a\\\\b"
    assert escape_js("it's") == "it\\'s"
    assert escape_js("line1\nline2") == "line1\\nline2"
    assert escape_js("a\rb\tc") == "a\\rb\\tc"


def test_js_backslash_escaped_before_quote():
    # A literal backslash-quote must not collapse into an escaped quote
    assert escape_js("\\'") == "\\\\\\'"


def test_js_quote_wraps():
    assert js_quote("x'y") == "'x\\'y'"
    assert js_quote(None) == "''"


def test_escapers_are_not_interchangeable():
    value = "it's"
    assert escape_shell(value) != escape_js(value)


def test_shell_word_quotes_anything_but_plain_tokens():
    assert shell_word("PATCH") == "PATCH"
    assert shell_word("M-SEARCH") == "M-SEARCH"
    assert shell_word("A B") == "'A B'"
    assert shell_word("$(id)") == "'$(id)'"
    assert shell_word("") == "''"
