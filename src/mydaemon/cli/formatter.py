# src/mydaemon/cli/formatter.py
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from mydaemon.core.errors import ConfigError, ConfigSyntaxError
from mydaemon.core.models import Options

# Settings go to stdout; every diagnostic goes to stderr
console = Console()
err_console = Console(stderr=True)


class DaemonFormatter:
    """
    Renders config diagnostics and settings for the terminal.
    The library raises; only this class decides how failures look.
    """

    def _source_excerpt(self, path: Optional[str], line: int) -> Optional[Syntax]:
        """Shows the offending line with one line of context on each side."""
        if not path:
            return None
        try:
            source = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None
        return Syntax(
            source,
            "ini",
            theme="ansi_dark",
            line_numbers=True,
            line_range=(max(1, line - 1), line + 1),
            highlight_lines={line},
        )

    def show_config_error(self, error: ConfigError, path: Optional[str] = None):
        """A file the user has to fix: syntax or unsupported setting."""
        kind = "Syntax error" if isinstance(error, ConfigSyntaxError) else "Invalid setting"
        where = f" in {path}" if path else ""
        err_console.print(f"[bold red]config:[/bold red] {kind}{escape(where)}: {escape(str(error))}", highlight=False, soft_wrap=True, emoji=False)

        if error.line is not None:
            excerpt = self._source_excerpt(path, error.line)
            if excerpt is not None:
                err_console.print(Panel(excerpt, title=f"[bold red]{escape(path)}[/bold red]", border_style="red", expand=False))

    def show_read_error(self, error: ConfigError):
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", highlight=False, soft_wrap=True, emoji=False)

    def show_internal_error(self, error: Exception):
        """Not the user's fault: memory or OS-level failures."""
        err_console.print(f"[bold red]Internal error:[/bold red] {escape(str(error))}", highlight=False, soft_wrap=True, emoji=False)

    def print_settings_yaml(self, text: str):
        # Plain output so `--check` can be piped into other tools
        console.print(text.rstrip("\n"), markup=False, highlight=False, soft_wrap=True, emoji=False)

    def show_settings_table(self, options: Options):
        """Human view of the settings, kept off stdout."""
        table = Table(title="Effective Settings", show_header=True, header_style="bold magenta")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        table.add_row("daemonize", str(options.daemonize))
        table.add_row("verbose", str(options.verbose))
        table.add_row("syslog_ident", options.syslog_ident)
        table.add_row("config_file", options.config_file or "-")
        err_console.print(table)
