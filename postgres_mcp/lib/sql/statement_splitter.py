"""Split raw SQL text into top-level statements.

The scanner is a five-state machine that walks the text once. It knows just
enough SQL lexing to tell statement-separating semicolons apart from
semicolons inside string literals, quoted identifiers and comments:

    NORMAL         '/*' -> BLOCK_COMMENT, '--' -> LINE_COMMENT,
                   "'" -> SINGLE_QUOTE, '"' -> DOUBLE_QUOTE,
                   ';' -> end of statement
    LINE_COMMENT   newline -> NORMAL
    BLOCK_COMMENT  '*/' -> NORMAL
    SINGLE_QUOTE   "''" stays (escaped quote), "'" -> NORMAL
    DOUBLE_QUOTE   '""' stays (escaped quote), '"' -> NORMAL

Comments and quotes are kept in the statement text. Input that ends inside a
string or comment is not an error; the pending text becomes the last
statement.
"""

import enum
from typing import List


class ScanState(enum.Enum):
    """Lexical state of the scanner at a given position."""

    NORMAL = "normal"
    SINGLE_QUOTE = "single_quote"
    DOUBLE_QUOTE = "double_quote"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


_QUOTE_STATES = {
    "'": ScanState.SINGLE_QUOTE,
    '"': ScanState.DOUBLE_QUOTE,
}

_QUOTE_DELIMITERS = {state: char for char, state in _QUOTE_STATES.items()}


def split_statements(query: str) -> List[str]:
    """Split a query into trimmed, non-empty statements in source order.

    Args:
        query: Raw SQL text, possibly holding several statements

    Returns:
        List of statements with surrounding whitespace removed
    """
    statements: List[str] = []
    current: List[str] = []
    state = ScanState.NORMAL
    length = len(query)
    i = 0

    def flush() -> None:
        statement = ''.join(current).strip()
        if statement:
            statements.append(statement)
        current.clear()

    while i < length:
        char = query[i]
        pair = query[i:i + 2]

        if state is ScanState.NORMAL:
            if pair == '/*':
                state = ScanState.BLOCK_COMMENT
                current.append(pair)
                i += 2
                continue
            if pair == '--':
                state = ScanState.LINE_COMMENT
                current.append(pair)
                i += 2
                continue
            if char in _QUOTE_STATES:
                state = _QUOTE_STATES[char]
            elif char == ';':
                flush()
                i += 1
                continue

        elif state is ScanState.LINE_COMMENT:
            if char == '\n':
                state = ScanState.NORMAL

        elif state is ScanState.BLOCK_COMMENT:
            if pair == '*/':
                state = ScanState.NORMAL
                current.append(pair)
                i += 2
                continue

        else:
            delimiter = _QUOTE_DELIMITERS[state]
            if pair == delimiter * 2:
                # Doubled delimiter is an escaped quote
                current.append(pair)
                i += 2
                continue
            if char == delimiter:
                state = ScanState.NORMAL

        current.append(char)
        i += 1

    flush()
    return statements
