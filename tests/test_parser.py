#!/usr/bin/env python3
"""
MYDAEMON PARSER SUITE
---------------------
End-to-end checks of parse(): scanner and applier together, fail-fast
behaviour, and the resource-exhaustion path.

Author: mydaemon maintainers
Date: 2026-10-19
"""

import pytest

from mydaemon.config import parser as config_parser
from mydaemon.config.parser import parse, parse_file
from mydaemon.core.errors import (
    ConfigSyntaxError,
    InvalidBooleanLiteral,
    ResourceExhausted,
    UnknownIdentifier,
    UnterminatedQuotedValue,
)
from mydaemon.core.models import DAEMON_NAME, Options

SAMPLE_CONFIG = b"""\
# mydaemon sample configuration
daemonize = yes
    # log more
verbose=Y

syslog_ident = "my daemon # 1"
"""


def test_sample_config():
    options = parse(SAMPLE_CONFIG, Options())
    assert options.daemonize is True
    assert options.verbose is True
    assert options.syslog_ident == "my daemon # 1"


def test_empty_file_changes_nothing():
    options = Options()
    parse(b"", options)
    assert options == Options()


def test_last_occurrence_wins():
    options = parse("verbose=yes\nverbose=no\nsyslog_ident=a\nsyslog_ident=b\n", Options())
    assert options.verbose is False
    assert options.syslog_ident == "b"


@pytest.mark.parametrize("literal", ["yes", "Y", "TRUE"])
def test_daemonize_boolean_coercion(literal):
    assert parse(f"daemonize={literal}", Options()).daemonize is True


def test_unquoted_value_round_trip():
    first = parse("syslog_ident=abc-def.ghi", Options()).syslog_ident
    again = parse(f"syslog_ident={first}", Options()).syslog_ident
    assert first == again == "abc-def.ghi"


def test_trailing_comment_keeps_whitespace():
    assert parse("syslog_ident=v # trailing comment", Options()).syslog_ident == "v "


def test_quoted_escape_is_not_unescaped():
    assert parse('syslog_ident="a\\"b"', Options()).syslog_ident == 'a\\"b'


def test_ident_truncated_to_capacity():
    options = parse("syslog_ident=" + "z" * 300, Options())
    assert options.syslog_ident == "z" * 255


def test_unknown_identifier_fails():
    with pytest.raises(UnknownIdentifier) as info:
        parse("foo=bar", Options())
    assert info.value.identifier == "foo"
    assert info.value.line == 1


def test_invalid_boolean_fails():
    with pytest.raises(InvalidBooleanLiteral):
        parse("daemonize=maybe", Options())


def test_boolean_before_comment_is_not_trimmed():
    """'yes ' is not a boolean literal; the space before '#' stays in the value."""
    with pytest.raises(InvalidBooleanLiteral) as info:
        parse("verbose=yes # on", Options())
    assert info.value.value == "yes "
    assert parse("verbose=yes# on", Options()).verbose is True


def test_unterminated_quote_fails():
    with pytest.raises(UnterminatedQuotedValue):
        parse('syslog_ident="abc', Options())


def test_first_error_stops_the_parse():
    """FAIL FAST: pairs after the bad line are never applied."""
    options = Options()
    with pytest.raises(UnknownIdentifier):
        parse("verbose=yes\nbogus=1\nsyslog_ident=late\n", options)
    assert options.verbose is True
    assert options.syslog_ident == DAEMON_NAME


def test_syntax_error_after_valid_lines():
    options = Options()
    with pytest.raises(ConfigSyntaxError):
        parse("daemonize=1\nverbose\n", options)
    assert options.daemonize is True


def test_memory_error_becomes_resource_exhausted(monkeypatch):
    def exhausted(*args, **kwargs):
        raise MemoryError()

    monkeypatch.setattr(config_parser, "apply_pair", exhausted)
    with pytest.raises(ResourceExhausted) as info:
        parse("verbose=1", Options())
    assert isinstance(info.value.__cause__, MemoryError)
    assert not isinstance(info.value, ConfigSyntaxError)


def test_parse_file(tmp_path):
    path = tmp_path / "mydaemon.conf"
    path.write_bytes(SAMPLE_CONFIG)
    options = parse_file(path, Options())
    assert options.daemonize is True


def test_parse_file_missing(tmp_path):
    with pytest.raises(OSError):
        parse_file(tmp_path / "missing.conf", Options())


def test_crlf_keeps_carriage_return_in_ident():
    """CRLF files: the \\r is an ordinary character of an unquoted value."""
    assert parse("syslog_ident=x\r\n", Options()).syslog_ident == "x\r"


def test_crlf_boolean_is_a_value_error():
    with pytest.raises(InvalidBooleanLiteral) as info:
        parse("verbose=1\r\n", Options())
    assert info.value.value == "1\r"
    assert not isinstance(info.value, ConfigSyntaxError)
