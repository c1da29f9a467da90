#!/usr/bin/env python3
"""
MYDAEMON ENGINE - Process Lifecycle
-----------------------------------
DaemonRunner takes an Options record from the command line and walks the
daemon through its start-up:

    1. Config load (command-line path, else $MYDAEMON_CONFIG if it exists)
    2. Detach (fork; the parent reports the child PID and leaves)
    3. Session setup (umask, syslog, setsid, chdir, /dev/null stdio)
    4. daemon_main()
    5. Exit logging and syslog teardown

A config failure always surfaces before step 2, so a bad file never
produces a background process.

Author: mydaemon maintainers
Date: 2026-10-19
"""

import logging
import os
import sys
import syslog
from typing import Callable, Optional

from mydaemon.config.parser import parse_file
from mydaemon.core.errors import ConfigReadError, LifecycleError
from mydaemon.core.models import Options

logger = logging.getLogger("mydaemon.engine")

CONFIG_ENV = "MYDAEMON_CONFIG"
WORKDIR_ENV = "MYDAEMON_WORKDIR"
DEFAULT_WORKING_DIR = "/"


def daemon_main(options: Options) -> int:
    """Main daemon functionality goes here. Returns the process exit code."""
    return 0


class SyslogHandler(logging.Handler):
    """
    Sends log records to the system logger via openlog()/syslog().
    Every message carries the PID, and the connection is opened immediately.
    """

    PRIORITIES = {
        logging.DEBUG: syslog.LOG_DEBUG,
        logging.INFO: syslog.LOG_INFO,
        logging.WARNING: syslog.LOG_WARNING,
        logging.ERROR: syslog.LOG_ERR,
        logging.CRITICAL: syslog.LOG_CRIT,
    }

    def __init__(self, ident: str, facility: int = syslog.LOG_DAEMON):
        super().__init__()
        self.ident = self.printable(ident)
        syslog.openlog(ident=self.ident, logoption=syslog.LOG_PID | syslog.LOG_NDELAY, facility=facility)

    @staticmethod
    def printable(text: str) -> str:
        """
        Undecodable config bytes survive parsing as lone surrogates, which
        openlog() cannot encode. They become U+FFFD here.
        """
        return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")

    def _priority(self, levelno: int) -> int:
        for level in sorted(self.PRIORITIES, reverse=True):
            if levelno >= level:
                return self.PRIORITIES[level]
        return syslog.LOG_DEBUG

    def emit(self, record: logging.LogRecord):
        try:
            syslog.syslog(self._priority(record.levelno), self.printable(self.format(record)))
        except Exception:
            self.handleError(record)

    def close(self):
        syslog.closelog()
        super().close()


class DaemonRunner:
    """
    Drives one daemon process from parsed options to exit code.
    """

    def __init__(self, options: Options, main: Optional[Callable[[Options], int]] = None,
                 working_dir: Optional[str] = None):
        self.options = options
        self.main = main or daemon_main
        self.working_dir = working_dir or os.environ.get(WORKDIR_ENV, DEFAULT_WORKING_DIR)
        self.syslog_handler: Optional[SyslogHandler] = None

    def resolve_config_path(self) -> Optional[str]:
        """
        The command-line path wins; otherwise the default path from the
        environment is used, but only when that file actually exists.
        """
        if self.options.config_file:
            return self.options.config_file

        default_path = os.environ.get(CONFIG_ENV)
        if default_path and os.path.exists(default_path):
            self.options.config_file = default_path
        return self.options.config_file

    def load_config(self) -> Options:
        """
        Parses the config file, if any, over the command-line options.
        Raises ConfigReadError when the file cannot be read; syntax and value
        errors from the parser propagate unchanged.
        """
        path = self.resolve_config_path()
        if not path:
            logger.debug("No config file to load")
            return self.options

        try:
            parse_file(path, self.options)
        except OSError as e:
            logger.error(f"Unable to read config file {path}: {e}")
            raise ConfigReadError(path, e) from e

        logger.debug(f"Loaded config file {path}")
        return self.options

    def detach(self) -> bool:
        """
        Forks to the background when daemonize is set.
        Returns True in the parent, which should exit straight away.
        """
        if not self.options.daemonize:
            return False

        try:
            pid = os.fork()
        except OSError as e:
            raise LifecycleError(f"fork: {e.strerror}") from e

        if pid > 0:
            print(f"Forked, background PID: {pid}")
            sys.stdout.flush()
            return True
        return False

    def setup_session(self):
        """
        Prepares the (possibly detached) process: umask, syslog, a new
        session, the working directory and silenced stdio.
        """
        os.umask(0)

        self.syslog_handler = SyslogHandler(self.options.syslog_ident)
        logging.getLogger("mydaemon").addHandler(self.syslog_handler)

        if self.options.daemonize:
            # A forked child is never a process group leader, so this holds
            try:
                sid = os.setsid()
            except OSError as e:
                self._fail("setsid", e)
        else:
            sid = os.getsid(0)

        if self.options.verbose:
            logger.info(f"Got session ID: {sid}")

        try:
            os.chdir(self.working_dir)
        except OSError as e:
            self._fail("chdir", e)

        if self.options.verbose:
            logger.info(f"Working directory is now {self.working_dir}")

        if self.options.daemonize:
            try:
                self._redirect_std_streams()
            except OSError as e:
                self._fail("stdio", e)

    def _fail(self, step: str, error: OSError):
        logger.error(f"{step}: {error.strerror}")
        self.close()
        raise LifecycleError(f"{step}: {error.strerror}") from error

    def _redirect_std_streams(self):
        """Points stdin, stdout and stderr at /dev/null."""
        sys.stdout.flush()
        sys.stderr.flush()
        new_stdin_fd = os.open(os.devnull, os.O_RDONLY)
        new_stdout_fd = os.open(os.devnull, os.O_WRONLY)
        os.dup2(new_stdin_fd, 0)
        os.dup2(new_stdout_fd, 1)
        os.dup2(new_stdout_fd, 2)
        os.close(new_stdin_fd)
        os.close(new_stdout_fd)

    def close(self):
        """Detaches and closes the syslog handler, if one is open."""
        if self.syslog_handler is None:
            return
        logging.getLogger("mydaemon").removeHandler(self.syslog_handler)
        self.syslog_handler.close()
        self.syslog_handler = None

    def run(self) -> int:
        """
        Runs the lifecycle after config loading. Returns the exit code for
        this process (0 in a parent that just forked).
        """
        if self.detach():
            return 0

        self.setup_session()
        try:
            ret = self.main(self.options)
            if self.options.verbose:
                mode = "background" if self.options.daemonize else "foreground"
                logger.info(f"Exiting {mode} process with return code {ret}")
        finally:
            self.close()
        return ret
