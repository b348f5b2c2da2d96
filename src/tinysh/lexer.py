"""Split an input line into shell words and an optional redirection tail."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .exceptions import UnterminatedEscapeError

# Characters a backslash may escape inside double quotes
DOUBLE_QUOTE_ESCAPABLE = frozenset('\\$"\n')
WORD_BREAKS = frozenset(" \n")


class QuoteState(Enum):
    UNQUOTED = "unquoted"
    SINGLE = "single"
    DOUBLE = "double"


@dataclass
class Tokenized:
    tokens: List[str] = field(default_factory=list)
    redirection: Optional[str] = None


def _is_fd_prefix(word: str) -> bool:
    if word == "&":
        return True
    return bool(word) and all("0" <= ch <= "9" for ch in word)


def tokenize(line: str) -> Tokenized:
    """Split ``line`` into tokens, honoring quotes and backslash escapes.

    Scanning stops at the first unquoted ``>``; the rest of the line, with
    any file-descriptor prefix (``2``, ``&``) glued to it, is returned as the
    raw redirection tail.
    """
    result = Tokenized()
    state = QuoteState.UNQUOTED
    buf: List[str] = []
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]

        if ch == '"' and state is not QuoteState.SINGLE:
            state = QuoteState.UNQUOTED if state is QuoteState.DOUBLE else QuoteState.DOUBLE
            i += 1
            continue

        if ch == "'" and state is not QuoteState.DOUBLE:
            state = QuoteState.UNQUOTED if state is QuoteState.SINGLE else QuoteState.SINGLE
            i += 1
            continue

        if ch == "\\" and state is not QuoteState.SINGLE:
            if i + 1 >= n:
                raise UnterminatedEscapeError()
            nxt = line[i + 1]
            if state is QuoteState.UNQUOTED or nxt in DOUBLE_QUOTE_ESCAPABLE:
                buf.append(nxt)
                i += 2
            else:
                # Kept as-is; the following character is handled on its own
                buf.append(ch)
                i += 1
            continue

        if state is QuoteState.UNQUOTED:
            if ch in WORD_BREAKS:
                if buf:
                    result.tokens.append("".join(buf))
                    buf = []
                i += 1
                continue
            if ch == ">":
                word = "".join(buf)
                if _is_fd_prefix(word):
                    result.redirection = word + line[i:]
                else:
                    if word:
                        result.tokens.append(word)
                    result.redirection = line[i:]
                return result

        buf.append(ch)
        i += 1

    if buf:
        result.tokens.append("".join(buf))
    return result
