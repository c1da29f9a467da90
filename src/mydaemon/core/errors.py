#!/usr/bin/env python3
"""
MYDAEMON ERRORS
---------------
Failure taxonomy for config loading and the process lifecycle.

Syntax errors come from the scanner, value errors from the applier.
ResourceExhausted and ConfigReadError are system-level failures so the
CLI can tell "bad file" apart from "internal error".

Author: mydaemon maintainers
Date: 2026-10-19
"""

from typing import Optional


class ConfigError(Exception):
    """Base class for everything that stops a config file from loading."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"line {self.line}: {self.message}"
        return f"line {self.line}, column {self.column}: {self.message}"


class ConfigSyntaxError(ConfigError):
    """The file does not follow the IDENT=VALUE grammar."""


class InvalidIdentifierStart(ConfigSyntaxError):
    def __init__(self, char: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(f"invalid identifier start: {char!r}", line, column)
        self.char = char


class MalformedIdentifier(ConfigSyntaxError):
    def __init__(self, char: Optional[str], line: Optional[int] = None, column: Optional[int] = None):
        got = "EOF" if char is None else repr(char)
        super().__init__(f"expected whitespace or '=' after identifier, got: {got}", line, column)
        self.char = char


class ExpectedEquals(ConfigSyntaxError):
    def __init__(self, identifier: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(f"expected a '=' after \"{identifier}\"", line, column)
        self.identifier = identifier


class MissingValue(ConfigSyntaxError):
    def __init__(self, identifier: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(f"no value provided for {identifier}", line, column)
        self.identifier = identifier


class UnterminatedQuotedValue(ConfigSyntaxError):
    def __init__(self, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__("expected terminating '\"', got EOF", line, column)


class ConfigValueError(ConfigError):
    """The file is well formed but names something the daemon rejects."""


class UnknownIdentifier(ConfigValueError):
    def __init__(self, identifier: str, line: Optional[int] = None):
        super().__init__(f"invalid identifier: {identifier}", line)
        self.identifier = identifier


class InvalidBooleanLiteral(ConfigValueError):
    def __init__(self, identifier: str, value: str, line: Optional[int] = None):
        super().__init__(f"invalid boolean for {identifier}: {value!r}", line)
        self.identifier = identifier
        self.value = value


class ResourceExhausted(ConfigError):
    """Memory ran out while materializing a token."""


class ConfigReadError(ConfigError):
    """The config file could not be read from disk."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"could not read config file \"{path}\": {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class LifecycleError(Exception):
    """A fork/setsid/chdir step of daemon start-up failed."""
