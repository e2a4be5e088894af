"""Command line splitting for the shell.

Splits a line into arguments on whitespace, with double quotes grouping
text that contains spaces. Unlike ``shlex.split``, an unterminated quote
is not an error: it runs to the end of the line.
"""

from enum import Enum
from typing import List, Optional, Tuple


class _State(Enum):
    OUTSIDE = "outside"
    IN_WORD = "in_word"
    IN_QUOTE = "in_quote"


def split_args(line: str) -> List[str]:
    """Split a command line into arguments.

    Rules:
        - Runs of whitespace separate arguments
        - "..." groups text, spaces included, into the current argument
        - A quote next to other text joins onto it: do"I begin?" -> doI begin?
        - Inside quotes, \\" is a literal quote; other backslashes are kept
        - An unterminated quote consumes the rest of the line

    Args:
        line: Raw input line

    Returns:
        List of arguments (empty for a blank line)

    Examples:
        >>> split_args('put name "Ada Lovelace"')
        ['put', 'name', 'Ada Lovelace']
        >>> split_args('where do"I begin?"')
        ['where', 'doI begin?']
    """
    args, buff, _ = _scan(line)
    if buff:
        args.append("".join(buff))

    return args


def split_partial(line: str) -> Tuple[List[str], Optional[str], bool]:
    """Split a line that is still being typed.

    Returns:
        Tuple of (finished arguments, the argument being typed or None when
        the line ends between arguments, whether that argument is inside
        an open quote)

    Examples:
        >>> split_partial('cd "my b')
        (['cd'], 'my b', True)
        >>> split_partial("ls ")
        (['ls'], None, False)
    """
    args, buff, state = _scan(line)
    if state is _State.OUTSIDE:
        return args, None, False
    return args, "".join(buff), state is _State.IN_QUOTE


def _scan(line: str) -> Tuple[List[str], List[str], _State]:
    args: List[str] = []
    buff: List[str] = []
    state = _State.OUTSIDE

    i = 0
    while i < len(line):
        ch = line[i]

        if state is _State.OUTSIDE:
            if ch == '"':
                state = _State.IN_QUOTE
            elif not ch.isspace():
                state = _State.IN_WORD
                buff.append(ch)

        elif state is _State.IN_WORD:
            if ch == '"':
                state = _State.IN_QUOTE
            elif ch.isspace():
                state = _State.OUTSIDE
                args.append("".join(buff))
                buff = []
            else:
                buff.append(ch)

        else:
            if ch == '\\' and line[i + 1:i + 2] == '"':
                buff.append('"')
                i += 1
            elif ch == '"':
                # Closing quote keeps the argument open: "a"b -> ab
                state = _State.IN_WORD
            else:
                buff.append(ch)

        i += 1

    return args, buff, state
