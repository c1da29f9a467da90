#!/usr/bin/env python3
"""
MYDAEMON EXPORTER - Effective Settings
--------------------------------------
Renders the Options record as YAML so an operator can see what a config
file plus command-line flags resolve to before starting the daemon.

Author: mydaemon maintainers
Date: 2026-10-19
"""

import io

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from mydaemon.core.models import Options


class SettingsExporter:
    """Dumps Options in a stable, human-oriented key order."""

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096
        self.preferred_order = ["daemonize", "verbose", "syslog_ident", "config_file"]

    def _to_map(self, options: Options) -> CommentedMap:
        data = CommentedMap()
        for key in self.preferred_order:
            value = getattr(options, key)
            # config_file is only meaningful when one was given
            if key == "config_file" and value is None:
                continue
            data[key] = value
        return data

    def export(self, options: Options) -> str:
        stream = io.StringIO()
        self.yaml.dump(self._to_map(options), stream)
        return stream.getvalue()
