"""Lexer for query strings."""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Iterator

from .tokens import Token, TokenType, lookup_ident

logger = logging.getLogger(__name__)

# Stands in for the character past the end of the input
_EOF_CHAR = "\x00"

_WHITESPACE = " \t\n\r"

_PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
}


def is_letter(ch: str) -> bool:
    """Identifier characters: Unicode letters and letter-numbers (``Nl``, e.g.
    roman numerals) plus ``_``, ``.`` and ``$``.

    The dot is included so that field paths like ``bar.baz`` lex as one token.
    """
    return ch in "_.$" or ch.isalpha() or unicodedata.category(ch) == "Nl"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    """Turns a query string into tokens, one per ``next_token()`` call.

    The cursor indexes code points; ``position`` tracks the UTF-8 byte offset
    of the current character so tokens can report where they start.
    """

    def __init__(self, text: str):
        self.text = text
        # An embedded NUL ends the input like the sentinel does
        nul = text.find(_EOF_CHAR)
        self.length = len(text) if nul < 0 else nul
        self.index = 0
        self.position = 0
        self.ch = self._char_at(0)

    @property
    def input(self) -> str:
        return self.text

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """Scan and return the next token. Never raises."""
        self._skip_whitespace()

        ch = self.ch
        start = self.position

        if ch in _PUNCTUATION:
            token = Token(_PUNCTUATION[ch], pos=start)
        elif ch == '"':
            token = Token(TokenType.STR, self._read_string(), start)
        elif ch == _EOF_CHAR:
            token = Token(TokenType.EOF, pos=start)
        elif is_letter(ch):
            # Identifiers and numbers already stop on the character after them
            return lookup_ident(self._read_identifier(), start)
        elif is_digit(ch):
            integer_part = self._read_number()
            if self.ch == "." and is_digit(self._peek_char()):
                self._read_char()
                fractional_part = self._read_number()
                return Token(TokenType.FLOAT, f"{integer_part}.{fractional_part}", start)
            return Token(TokenType.INT, integer_part, start)
        else:
            logger.debug(f"Illegal character {ch!r} at position {start}")
            token = Token(TokenType.ILLEGAL, ch, start)

        self._read_char()
        return token

    def _read_identifier(self) -> str:
        start = self.index
        # First character is a letter, the rest may also be digits
        self._read_char()
        while is_letter(self.ch) or is_digit(self.ch):
            self._read_char()
        return self.text[start : self.index]

    def _read_number(self) -> str:
        start = self.index
        while is_digit(self.ch):
            self._read_char()
        return self.text[start : self.index]

    def _read_string(self) -> str:
        """Read up to the closing quote, or to end of input if there is none."""
        start = self.index + 1
        while True:
            self._read_char()
            if self.ch in ('"', _EOF_CHAR):
                break
        return self.text[start : self.index]

    def _skip_whitespace(self) -> None:
        while self.ch in _WHITESPACE:
            self._read_char()

    # -- Cursor primitives

    def _char_at(self, index: int) -> str:
        if index < self.length:
            return self.text[index]
        return _EOF_CHAR

    def _read_char(self) -> None:
        if self.ch != _EOF_CHAR:
            self.position += len(self.ch.encode("utf-8"))
        if self.index < self.length:
            self.index += 1
        self.ch = self._char_at(self.index)

    def _peek_char(self) -> str:
        return self._char_at(self.index + 1)


def tokenize(text: str) -> list[Token]:
    """Tokenize the entire string, ending with an EOF token."""
    return list(Lexer(text))
