#!/usr/bin/env python3
"""
MYDAEMON APPLIER
----------------
Maps scanned `IDENT=VALUE` pairs onto the Options record. The set of
identifiers is fixed; anything outside it is rejected so that typos in a
config file never go unnoticed.

Author: mydaemon maintainers
Date: 2026-10-19
"""

from typing import Callable, Dict, Optional

from mydaemon.core.errors import InvalidBooleanLiteral, UnknownIdentifier
from mydaemon.core.models import Options

TRUE_LITERALS = frozenset({"y", "1", "yes", "true"})
FALSE_LITERALS = frozenset({"n", "0", "no", "false"})


def parse_boolean(text: str) -> Optional[bool]:
    """
    Validates a boolean literal, case-insensitively.

    Returns True or False for a recognized literal and None otherwise;
    callers decide how to report the invalid case.
    """
    lowered = text.lower()
    if lowered in TRUE_LITERALS:
        return True
    if lowered in FALSE_LITERALS:
        return False
    return None


def _boolean_setter(field: str) -> Callable[[str, str, Options, Optional[int]], None]:
    def setter(identifier: str, value: str, options: Options, line_no: Optional[int]):
        flag = parse_boolean(value)
        if flag is None:
            raise InvalidBooleanLiteral(identifier, value, line_no)
        setattr(options, field, flag)
    return setter


def _set_syslog_ident(identifier: str, value: str, options: Options, line_no: Optional[int]):
    # Options truncates to the ident capacity on assignment
    options.syslog_ident = value


# Identifier -> handler. Matching is exact and case-sensitive.
HANDLERS: Dict[str, Callable[[str, str, Options, Optional[int]], None]] = {
    "daemonize": _boolean_setter("daemonize"),
    "verbose": _boolean_setter("verbose"),
    "syslog_ident": _set_syslog_ident,
}


def apply_pair(identifier: str, value: str, options: Options, line_no: Optional[int] = None):
    """
    Applies one assignment to `options` in place.

    Raises UnknownIdentifier or InvalidBooleanLiteral; the record is left
    untouched when a pair is rejected.
    """
    handler = HANDLERS.get(identifier)
    if handler is None:
        raise UnknownIdentifier(identifier, line_no)
    handler(identifier, value, options, line_no)
