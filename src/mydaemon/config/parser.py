#!/usr/bin/env python3
"""
MYDAEMON CONFIG PIPELINE
------------------------
Entry point for loading a config file into an Options record.

The pipeline pulls pairs from the lexer one at a time and hands each to
the applier. It fails fast: the first syntax or value error aborts the
whole parse and the rest of the buffer is never scanned. No I/O happens
here except in parse_file(), which only reads the bytes.

Author: mydaemon maintainers
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Union

from mydaemon.config.applier import apply_pair
from mydaemon.config.lexer import ConfigLexer
from mydaemon.core.errors import ResourceExhausted
from mydaemon.core.models import Options

logger = logging.getLogger("mydaemon.parser")


class ConfigPipeline:
    """
    Couples the scanner and the applier.
    Either every pair is applied or an exception leaves the parse unfinished.
    """

    def __init__(self):
        self.lexer = ConfigLexer()

    def run(self, buffer: Union[bytes, str], options: Options) -> Options:
        count = 0
        try:
            for pair in self.lexer.pairs(buffer):
                apply_pair(pair.identifier, pair.value, options, pair.line_no)
                logger.debug(f"line {pair.line_no}: {pair.identifier} = {pair.value!r}")
                count += 1
        except MemoryError as e:
            raise ResourceExhausted("out of memory while reading config tokens") from e

        logger.debug(f"Applied {count} config assignment(s)")
        return options


def parse(buffer: Union[bytes, str], options: Options) -> Options:
    """Parses an in-memory config buffer into `options`."""
    return ConfigPipeline().run(buffer, options)


def parse_file(path: Union[str, Path], options: Options) -> Options:
    """
    Reads `path` as raw bytes and parses it into `options`.
    OSError from the read is left to the caller.
    """
    data = Path(path).read_bytes()
    return parse(data, options)
