"""Save-event handling and file formatting around the engine."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .config import Config
from .diagnostics import DiagnosticSink, NullSink
from .engine import EngineOutcome, ImportEngine, has_linkage_keyword
from .logging import audit_rewrite
from .types import LanguageVariant, Replace

logger = logging.getLogger(__name__)

TYPED_EXTENSIONS = {".ts", ".tsx", ".mts", ".cts"}


class SaveReason(Enum):
    """Why the editor is saving a document."""
    MANUAL = "manual"
    AFTER_DELAY = "after_delay"
    FOCUS_OUT = "focus_out"


@dataclass
class SaveEvent:
    """A document that is about to be saved."""

    path: Path
    text: str
    reason: SaveReason = SaveReason.MANUAL
    attempt: Optional[int] = None  # editor-assigned id of the save attempt


def variant_for_path(path: Path) -> LanguageVariant:
    """Pick the language variant from a file extension."""
    if Path(path).suffix.lower() in TYPED_EXTENSIONS:
        return LanguageVariant.WITH_TYPES
    return LanguageVariant.PLAIN


class SaveHandler:
    """Runs the engine for save events and hands back the edit to apply."""

    def __init__(self, config: Optional[Config] = None, sink: Optional[DiagnosticSink] = None):
        self.config = config or Config()
        self.sink = sink or NullSink()
        self.engine = ImportEngine(self.config.policy)
        self._last_attempt: Dict[Path, int] = {}

    def should_handle(self, event: SaveEvent) -> bool:
        """Apply the call discipline for save events."""
        if self.config.manual_saves_only and event.reason is not SaveReason.MANUAL:
            return False
        if event.path.suffix.lower() not in self.config.extensions:
            return False

        if event.attempt is not None:
            last = self._last_attempt.get(event.path)
            if last is not None and event.attempt <= last:
                logger.debug(f"Ignoring repeated save attempt {event.attempt} for {event.path}")
                return False
            self._last_attempt[event.path] = event.attempt

        return has_linkage_keyword(event.text)

    def on_will_save(self, event: SaveEvent) -> Optional[Replace]:
        """Return the edit for a save event, or None to leave the document alone."""
        if not self.should_handle(event):
            return None

        outcome = self.run(event.path, event.text)
        if isinstance(outcome.edit, Replace):
            return outcome.edit
        return None

    def run(self, path: Path, text: str) -> EngineOutcome:
        outcome = self.engine.run(text, variant_for_path(path))
        for diagnostic in outcome.diagnostics:
            diagnostic.path = path
        self.sink.report_all(outcome.diagnostics)
        return outcome


def read_source(path: Path) -> str:
    # newline="" keeps \r\n intact so offsets match the file on disk
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def format_file(
    path: Path,
    config: Optional[Config] = None,
    sink: Optional[DiagnosticSink] = None,
    check: bool = False,
) -> bool:
    """Tidy the imports of one file. Returns whether the file changed (or would)."""
    handler = SaveHandler(config, sink)
    return format_with_handler(handler, path, check=check) is not None


def format_with_handler(handler: SaveHandler, path: Path, check: bool = False) -> Optional[str]:
    """Run a handler over a file; returns the new text when it differs."""
    path = Path(path)
    original = read_source(path)
    if not has_linkage_keyword(original):
        return None

    outcome = handler.run(path, original)
    if not isinstance(outcome.edit, Replace):
        return None

    edit = outcome.edit
    updated = edit.apply(original)
    if not check:
        write_source(path, updated)
        audit_rewrite(path, edit.start, edit.end, len(edit.new_text))
    return updated


def iter_source_files(paths: List[Path], extensions: List[str]) -> Iterator[Path]:
    """Yield the files under paths that have one of the extensions."""
    suffixes = {ext.lower() for ext in extensions}
    for path in paths:
        path = Path(path)
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if "node_modules" in child.parts:
                    continue
                if child.is_file() and child.suffix.lower() in suffixes:
                    yield child
        elif path.is_file():
            yield path
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
