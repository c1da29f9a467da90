#!/usr/bin/env python3
"""
MYDAEMON LEXER - Config Scanner
-------------------------------
Walks a raw config buffer one character at a time and recovers
`IDENT=VALUE` assignments. Understands leading whitespace, blank lines,
end-of-line comments, and double-quoted values with backslash-escaped
quotes. The first malformed construct raises a ConfigSyntaxError.

Grammar:
    line           := ws* ( comment | assignment | e ) EOL?
    comment        := '#' any-char-except-EOL*
    assignment     := ident ws* '=' ws* value
    ident          := [A-Za-z_] [A-Za-z0-9_-]*
    value          := '"' ( '\\"' | any-char-except-quote )* '"'
                    | any-char-except-EOL-or-'#'*
    ws             := ' ' | '\\t'
    EOL            := '\\n'

Author: mydaemon maintainers
Date: 2026-10-19
"""

import string
from typing import Iterator, Optional, Union

from mydaemon.core.errors import (
    ExpectedEquals,
    InvalidIdentifierStart,
    MalformedIdentifier,
    MissingValue,
    UnterminatedQuotedValue,
)
from mydaemon.core.models import ConfigPair

WHITESPACE = " \t"
EOL = "\n"
COMMENT = "#"
EQUALS = "="
QUOTE = '"'
ESCAPE = "\\"
TERMINATOR = "\0"

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = IDENT_START | frozenset(string.digits + "-")


class _Cursor:
    """Forward-only position into the decoded text, with line/column tracking."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    def peek(self) -> Optional[str]:
        """Current character, or None at end of input."""
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def advance(self) -> Optional[str]:
        """Consumes and returns the current character."""
        char = self.peek()
        if char is not None:
            self.pos += 1
            if char == EOL:
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return char

    def skip_while(self, chars) -> None:
        while self.peek() is not None and self.peek() in chars:
            self.advance()

    def skip_until(self, stops) -> None:
        while self.peek() is not None and self.peek() not in stops:
            self.advance()

    def since(self, start: int) -> str:
        return self.text[start:self.pos]


class ConfigLexer:
    """
    Turns a config buffer into a lazy stream of ConfigPairs.

    The lexer keeps no state between calls; each call to pairs() gets its
    own cursor, so one instance can serve any number of files.
    """

    def _decode(self, buffer: Union[bytes, str]) -> str:
        """
        Normalizes the buffer to text and applies the NUL terminator.
        Undecodable bytes are carried through as surrogates rather than dropped.
        """
        if isinstance(buffer, (bytes, bytearray)):
            buffer = bytes(buffer).decode("utf-8", errors="surrogateescape")
        # Anything after an embedded NUL is not part of the file
        return buffer.split(TERMINATOR, 1)[0]

    def pairs(self, buffer: Union[bytes, str]) -> Iterator[ConfigPair]:
        """
        Yields one ConfigPair per assignment, in file order.
        Syntax errors are raised from the generator at the offending position.
        """
        cursor = _Cursor(self._decode(buffer))

        while True:
            # 1. Skip indentation and blank lines
            cursor.skip_while(WHITESPACE + EOL)
            char = cursor.peek()

            # 2. Clean end of file
            if char is None:
                return

            # 3. Comment-only line
            if char == COMMENT:
                cursor.skip_until(EOL)
                continue

            yield self._read_assignment(cursor)

    def _read_assignment(self, cursor: _Cursor) -> ConfigPair:
        line, column = cursor.line, cursor.column
        char = cursor.peek()
        if char not in IDENT_START:
            raise InvalidIdentifierStart(char, line, column)

        # Identifier run
        start = cursor.pos
        cursor.skip_while(IDENT_CHARS)
        identifier = cursor.since(start)

        terminator = cursor.peek()
        if terminator is None:
            raise MalformedIdentifier(None, cursor.line, cursor.column)
        if terminator == EOL:
            raise ExpectedEquals(identifier, cursor.line, cursor.column)
        if terminator not in WHITESPACE and terminator != EQUALS:
            raise MalformedIdentifier(terminator, cursor.line, cursor.column)

        # '=' may be surrounded by spaces and tabs, never by newlines
        cursor.skip_while(WHITESPACE)
        if cursor.peek() != EQUALS:
            raise ExpectedEquals(identifier, cursor.line, cursor.column)
        cursor.advance()
        cursor.skip_while(WHITESPACE)

        char = cursor.peek()
        if char is None or char == EOL:
            raise MissingValue(identifier, cursor.line, cursor.column)

        if char == QUOTE:
            value = self._read_quoted(cursor)
        else:
            value = self._read_unquoted(cursor)
        return ConfigPair(identifier=identifier, value=value, line_no=line)

    def _read_quoted(self, cursor: _Cursor) -> str:
        """
        Reads up to the next quote not preceded by a backslash.
        Escape sequences are kept verbatim; the value may span lines.
        """
        line, column = cursor.line, cursor.column
        previous = cursor.advance()  # opening quote
        start = cursor.pos
        while True:
            char = cursor.peek()
            if char is None:
                raise UnterminatedQuotedValue(line, column)
            if char == QUOTE and previous != ESCAPE:
                value = cursor.since(start)
                cursor.advance()
                return value
            previous = cursor.advance()

    def _read_unquoted(self, cursor: _Cursor) -> str:
        """Everything up to EOL or '#', trailing whitespace included."""
        start = cursor.pos
        cursor.skip_until(EOL + COMMENT)
        return cursor.since(start)
