"""Command line lexer.

Splits a typed line into tokens on spaces, with double quotes grouping text
that contains spaces. There is no escaping and no nesting: a ``"`` always
toggles quote mode.

Examples
--------
>>> tokenize(':acont "North Wall" 2 1 3')
[':acont', 'North Wall', '2', '1', '3']
>>> tokenize('""')
['']
"""

from typing import List

QUOTE = '"'
SEPARATOR = " "


def tokenize(line: str) -> List[str]:
    """Split ``line`` into tokens.

    Outside quotes a space ends the current token and empty tokens are
    dropped. Inside quotes spaces are kept. A closing quote always emits the
    current token, even an empty one. Text after an unterminated quote is
    emitted as a last token when non-empty.
    """
    tokens: List[str] = []
    current: List[str] = []
    quoted = False

    for ch in line:
        if ch == QUOTE:
            if quoted:
                tokens.append("".join(current))
                current = []
            quoted = not quoted
        elif ch == SEPARATOR and not quoted:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)

    if current:
        tokens.append("".join(current))
    return tokens
