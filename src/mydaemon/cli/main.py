#!/usr/bin/env python3
"""
MYDAEMON CLI
------------
Command-line front end for the daemon template. Builds an Options record
from flags, overlays the config file, and either prints the effective
settings (--check) or hands over to the lifecycle engine.

Exit codes:
  0 - success (or the parent of a successful fork)
  1 - bad config file, unreadable config file, internal or start-up failure
  2 - bad command-line usage (argparse)

Author: mydaemon maintainers
Date: 2026-10-19
"""

import sys
import argparse
import logging
from typing import List, Optional

from mydaemon.cli.formatter import DaemonFormatter, err_console
from mydaemon.config.exporter import SettingsExporter
from mydaemon.core.engine import DaemonRunner
from mydaemon.core.errors import (
    ConfigError,
    ConfigReadError,
    LifecycleError,
    ResourceExhausted,
)
from mydaemon.core.models import DAEMON_NAME, VERSION, Options

logger = logging.getLogger("mydaemon.cli")


class MyDaemonCLI:
    """
    Translates command-line flags into an Options record and drives the
    DaemonRunner, mapping every failure onto an exit code.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog=DAEMON_NAME,
            description="A *nix daemon template with a simple IDENT=VALUE config file",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = DaemonFormatter()
        self._setup_args()

    def _setup_args(self):
        """Mirrors the classic getopt table: hvVdfc:Z:"""
        self.parser.add_argument("-v", "--version", action="version", version=f"v{VERSION}")
        self.parser.add_argument("-V", "--verbose", action="store_true", help="Enable more verbose logging")
        self.parser.add_argument("-d", "--daemonize", dest="daemonize", action="store_const", const=True,
                                 default=None, help="Fork and run in the background")
        self.parser.add_argument("-f", "--foreground", dest="daemonize", action="store_const", const=False,
                                 help="Run in the foreground (default)")
        self.parser.add_argument("-c", "--config", metavar="PATH", help="Use the specified config file")
        self.parser.add_argument("-Z", "--ident", metavar="IDENT", help="Use IDENT as the syslog ident")
        self.parser.add_argument("--check", action="store_true",
                                 help="Load the config, print the effective settings as YAML and exit")

    def build_options(self, args: argparse.Namespace) -> Options:
        options = Options()
        if args.verbose:
            options.verbose = True
        if args.daemonize is not None:
            options.daemonize = args.daemonize
        if args.config:
            options.config_file = args.config
        if args.ident is not None:
            options.syslog_ident = args.ident
        return options

    def _load(self, runner: DaemonRunner) -> bool:
        """Loads the config file; reports and returns False on any failure."""
        try:
            runner.load_config()
        except ConfigReadError as e:
            self.formatter.show_read_error(e)
            return False
        except ResourceExhausted as e:
            self.formatter.show_internal_error(e)
            return False
        except ConfigError as e:
            self.formatter.show_config_error(e, runner.options.config_file)
            return False
        return True

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        options = self.build_options(args)
        runner = DaemonRunner(options)

        # -V must already apply while the config file is parsed
        if options.verbose:
            logging.getLogger("mydaemon").setLevel(logging.DEBUG)

        # A broken config must never reach the fork
        if not self._load(runner):
            return 1

        # verbose=yes in the file turns it on from here
        if options.verbose:
            logging.getLogger("mydaemon").setLevel(logging.DEBUG)
        logger.debug(f"Effective options: {options}")

        if args.check:
            self.formatter.print_settings_yaml(SettingsExporter().export(options))
            if options.verbose:
                self.formatter.show_settings_table(options)
            return 0

        try:
            return runner.run()
        except LifecycleError as e:
            self.formatter.show_internal_error(e)
            return 1


def main(argv: Optional[List[str]] = None):
    """Application entry point with interrupt handling."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    try:
        sys.exit(MyDaemonCLI().run(argv))
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
