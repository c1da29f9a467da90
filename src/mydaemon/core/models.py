#!/usr/bin/env python3
"""
MYDAEMON CORE MODELS
--------------------
Defines the settings record shared by the command line, the config file
parser and the lifecycle engine, plus the transient pair emitted by the
config scanner.

Author: mydaemon maintainers
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Any, Optional

DAEMON_NAME = "mydaemon"
VERSION = "0.1.0"

# Visible characters kept in the syslog ident; longer values are cut here.
SYSLOG_IDENT_MAX = 255


@dataclass
class Options:
    """
    Daemon options, as provided on the command line or in a config file.

    The parser only touches the fields it recognizes; everything else is
    owned by the caller.
    """
    daemonize: bool = False          # Fork to the background before running
    verbose: bool = False            # Log session and exit details
    syslog_ident: str = DAEMON_NAME  # Ident passed to openlog()
    config_file: Optional[str] = None  # Config path (command line or default)

    def __setattr__(self, name: str, value: Any):
        # The ident is truncated on every assignment, including __init__.
        if name == "syslog_ident":
            value = str(value)[:SYSLOG_IDENT_MAX]
        super().__setattr__(name, value)


@dataclass
class ConfigPair:
    """
    One `IDENT=VALUE` assignment recovered by the scanner.

    Lives for a single loop iteration of the parser.
    """
    identifier: str
    value: str
    line_no: int  # Line the identifier started on (1-based)
