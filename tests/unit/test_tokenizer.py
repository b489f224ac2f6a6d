from inventory_tui.tokenizer import tokenize


def test_quoted_argument_keeps_spaces() -> None:
    assert tokenize(':acont "North Wall" 2 1 3') == [":acont", "North Wall", "2", "1", "3"]


def test_repeated_spaces_are_discarded() -> None:
    assert tokenize("  :atag   tools  ") == [":atag", "tools"]


def test_empty_line_has_no_tokens() -> None:
    assert tokenize("") == []
    assert tokenize("     ") == []


def test_empty_quotes_produce_empty_token() -> None:
    assert tokenize(':atag ""') == [":atag", ""]


def test_closing_quote_flushes_token() -> None:
    assert tokenize('"a b"c') == ["a b", "c"]


def test_opening_quote_mid_token_joins_text() -> None:
    assert tokenize('ab"c d"') == ["abc d"]


def test_unterminated_quote_keeps_accumulated_text() -> None:
    assert tokenize(':acomp "Garage North') == [":acomp", "Garage North"]


def test_unterminated_empty_quote_is_dropped() -> None:
    assert tokenize(':acomp "') == [":acomp"]


def test_non_ascii_text_is_preserved() -> None:
    assert tokenize(':atag "Küche ✓"') == [":atag", "Küche ✓"]
