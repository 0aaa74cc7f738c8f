"""Diagnostics reported by the engine and the sinks that deliver them."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .logging import get_audit_logger, get_debug_logger


class DiagnosticLevel(Enum):
    """Severity of a diagnostic."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Diagnostic:
    """Something the engine wants the host to know about."""

    level: DiagnosticLevel
    code: str
    message: str
    line: Optional[int] = None  # 1-based
    path: Optional[Path] = None

    def location(self) -> str:
        where = str(self.path) if self.path else "<text>"
        if self.line is not None:
            where = f"{where}:{self.line}"
        return where


class DiagnosticSink(ABC):
    """Base class for diagnostic channels."""

    @abstractmethod
    def report(self, diagnostic: Diagnostic) -> None:
        """Deliver a diagnostic."""
        pass

    def report_all(self, diagnostics: List[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.report(diagnostic)


class NullSink(DiagnosticSink):
    """Discards everything."""

    def report(self, diagnostic: Diagnostic) -> None:
        pass


class CollectingSink(DiagnosticSink):
    """Keeps diagnostics in memory."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def has_errors(self) -> bool:
        return any(d.level is DiagnosticLevel.ERROR for d in self.diagnostics)


class LoggingSink(DiagnosticSink):
    """Forwards diagnostics to the debug logger; errors also go to the audit log."""

    def __init__(self):
        self.debug_log = get_debug_logger()
        self.audit_log = get_audit_logger()

    def report(self, diagnostic: Diagnostic) -> None:
        message = f"{diagnostic.location()}: [{diagnostic.code}] {diagnostic.message}"
        if diagnostic.level is DiagnosticLevel.ERROR:
            self.debug_log.error(message)
            self.audit_log.error(message)
        elif diagnostic.level is DiagnosticLevel.WARNING:
            self.debug_log.warning(message)
        else:
            self.debug_log.info(message)


class ConsoleSink(DiagnosticSink):
    """Prints diagnostics with rich."""

    STYLES = {
        DiagnosticLevel.INFO: "blue",
        DiagnosticLevel.WARNING: "yellow",
        DiagnosticLevel.ERROR: "red",
    }

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def report(self, diagnostic: Diagnostic) -> None:
        style = self.STYLES[diagnostic.level]
        self.console.print(
            f"[{style}]{diagnostic.level.value}[/{style}] "
            f"{diagnostic.location()}: {diagnostic.message} [dim]({diagnostic.code})[/dim]"
        )
