#!/usr/bin/env python3
"""
MYDAEMON APPLIER SUITE
----------------------
Boolean literal table, the identifier dispatch and ident truncation.

Author: mydaemon maintainers
Date: 2026-10-19
"""

import pytest

from mydaemon.config.applier import apply_pair, parse_boolean
from mydaemon.core.errors import InvalidBooleanLiteral, UnknownIdentifier
from mydaemon.core.models import SYSLOG_IDENT_MAX, Options


@pytest.mark.parametrize("literal", ["y", "Y", "1", "yes", "YES", "Yes", "true", "TRUE", "tRuE"])
def test_true_literals(literal):
    assert parse_boolean(literal) is True


@pytest.mark.parametrize("literal", ["n", "N", "0", "no", "NO", "false", "False", "FALSE"])
def test_false_literals(literal):
    assert parse_boolean(literal) is False


@pytest.mark.parametrize("literal", ["", "maybe", "2", "ye", "tru", "falsey", "on", "off", " yes", "yes "])
def test_invalid_literals(literal):
    assert parse_boolean(literal) is None


def test_boolean_identifiers_are_applied():
    options = Options()
    apply_pair("daemonize", "yes", options)
    apply_pair("verbose", "1", options)
    assert options.daemonize is True
    assert options.verbose is True

    apply_pair("daemonize", "false", options)
    assert options.daemonize is False


def test_invalid_boolean_leaves_record_untouched():
    options = Options(daemonize=True)
    with pytest.raises(InvalidBooleanLiteral) as info:
        apply_pair("daemonize", "maybe", options, line_no=7)
    assert info.value.identifier == "daemonize"
    assert info.value.value == "maybe"
    assert info.value.line == 7
    assert options.daemonize is True


def test_unknown_identifier():
    with pytest.raises(UnknownIdentifier) as info:
        apply_pair("foo", "bar", Options())
    assert info.value.identifier == "foo"


def test_identifiers_are_case_sensitive():
    with pytest.raises(UnknownIdentifier):
        apply_pair("Daemonize", "yes", Options())


def test_syslog_ident_is_stored_verbatim():
    options = Options()
    apply_pair("syslog_ident", "  spaced ident ", options)
    assert options.syslog_ident == "  spaced ident "


def test_syslog_ident_is_truncated():
    options = Options()
    apply_pair("syslog_ident", "x" * 300, options)
    assert options.syslog_ident == "x" * SYSLOG_IDENT_MAX
    assert len(options.syslog_ident) == 255


def test_options_truncate_on_construction():
    assert len(Options(syslog_ident="y" * 1000).syslog_ident) == SYSLOG_IDENT_MAX
