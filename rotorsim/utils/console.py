"""
Console output utilities with color support

Prefixed log lines, section headers, tables and rotor power bars for the CLI.
CLI用のカラー対応コンソール出力（ログ行、見出し、表、ロータ出力バー）
"""

import os
import sys
from typing import Optional, Sequence


class Console:
    """Console output with ANSI color support"""

    # ANSI color codes
    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "red": "\033[31m",
        "green": "\033[32m",
        "yellow": "\033[33m",
        "blue": "\033[34m",
        "cyan": "\033[36m",
        "gray": "\033[90m",
    }

    # level -> (prefix, color, to stderr)
    LEVELS = {
        "info": ("INFO", "blue", False),
        "success": ("OK", "green", False),
        "warning": ("WARN", "yellow", True),
        "error": ("ERROR", "red", True),
        "debug": ("DEBUG", "gray", False),
    }

    BAR_FILLED = "█"
    BAR_EMPTY = "░"

    def __init__(self):
        self._verbose = False
        self._color_enabled = (
            sys.stdout.isatty() and not os.environ.get("NO_COLOR")
        )

    def _colorize(self, text: str, color: str) -> str:
        if not self._color_enabled:
            return text
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def _log(self, level: str, message: str, prefix: Optional[str] = None) -> None:
        default_prefix, color, to_stderr = self.LEVELS[level]
        tag = self._colorize(f"[{prefix or default_prefix}]", color)
        print(f"{tag} {message}", file=sys.stderr if to_stderr else sys.stdout)

    @property
    def verbose(self) -> bool:
        return self._verbose

    def set_verbose(self, enabled: bool) -> None:
        self._verbose = enabled

    def set_color(self, enabled: bool) -> None:
        self._color_enabled = enabled

    def info(self, message: str, prefix: Optional[str] = None) -> None:
        self._log("info", message, prefix)

    def success(self, message: str, prefix: Optional[str] = None) -> None:
        self._log("success", message, prefix)

    def warning(self, message: str, prefix: Optional[str] = None) -> None:
        """Warnings go to stderr"""
        self._log("warning", message, prefix)

    def error(self, message: str, prefix: Optional[str] = None) -> None:
        """Errors go to stderr"""
        self._log("error", message, prefix)

    def debug(self, message: str, prefix: Optional[str] = None) -> None:
        """Only printed in verbose mode"""
        if self._verbose:
            self._log("debug", message, prefix)

    def print(self, message: str = "", end: str = "\n") -> None:
        print(message, end=end)

    def header(self, title: str, char: str = "=", width: int = 60) -> None:
        """Section header framed by rule lines"""
        rule = self._colorize(char * width, "cyan")
        print(rule)
        print(self._colorize(f" {title}", "bold"))
        print(rule)

    def table(self, headers: Sequence, rows: Sequence, col_widths: Optional[list] = None) -> None:
        """Left-aligned table, columns sized to the widest cell"""
        columns = [headers] + [list(row) for row in rows]
        widths = col_widths or [
            max(len(str(row[i])) for row in columns) for i in range(len(headers))
        ]

        def line(cells):
            return " | ".join(str(c).ljust(w) for c, w in zip(cells, widths))

        head = line(headers)
        print(self._colorize(head, "bold"))
        print("-" * len(head))
        for row in rows:
            print(line(row))

    def power_bar(self, label: str, value: float, width: int = 30, suffix: str = "") -> None:
        """Rotor power bar, value in [0, 1]"""
        value = min(1.0, max(0.0, value))
        filled = int(round(width * value))
        bar = self.BAR_FILLED * filled + self.BAR_EMPTY * (width - filled)
        if value >= 0.66:
            color = "green"
        elif value >= 0.33:
            color = "blue"
        else:
            color = "gray"
        pct = f"{int(value * 100 + 0.5):3d}%"
        print(f"{label:>4s} {self._colorize(bar, color)} {pct} {suffix}".rstrip())


# Global console instance
console = Console()
