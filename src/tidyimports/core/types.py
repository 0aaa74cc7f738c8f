"""Data model shared by the scanner, locator, grouper and reconstructor."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union

LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")
MODULE_PATH_RE = re.compile(r"""(?:\bfrom|^\s*import|\brequire\s*\()\s*(['"])(?P<path>[^'"\n]*)\1""")


class LanguageVariant(Enum):
    """Source flavours the engine understands."""
    PLAIN = "plain"            # JavaScript, no type syntax
    WITH_TYPES = "with_types"  # TypeScript, `import type` and `type` members


class SpanKind(Enum):
    """Kinds of spans produced by a scanner."""
    IMPORT = "import"
    TYPE_ONLY_IMPORT = "type_only_import"
    RE_EXPORT = "re_export"
    RE_EXPORT_ALL = "re_export_all"
    DYNAMIC_LOAD = "dynamic_load"   # const x = import(...)
    REQUIRE_LOAD = "require_load"   # const x = require(...)
    COMMENT = "comment"

    @property
    def is_separator(self) -> bool:
        if self in (SpanKind.DYNAMIC_LOAD, SpanKind.REQUIRE_LOAD, SpanKind.COMMENT):
            return True
        if self in (
            SpanKind.IMPORT,
            SpanKind.TYPE_ONLY_IMPORT,
            SpanKind.RE_EXPORT,
            SpanKind.RE_EXPORT_ALL,
        ):
            return False
        raise ValueError(f"Unhandled span kind: {self}")


class SourceLine(NamedTuple):
    """One physical line of the input, without its line ending."""
    index: int
    start: int
    end: int
    text: str

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


def split_lines(text: str) -> List[SourceLine]:
    """Split text into lines keeping exact offsets.

    `end` includes the line ending, so `text[line.start:line.end]` is the
    original line verbatim. Only LF and CRLF end a line.
    """
    return [
        SourceLine(index, match.start(), match.end(), match.group().rstrip("\r\n"))
        for index, match in enumerate(LINE_RE.finditer(text))
    ]


def detect_eol(text: str) -> str:
    """Return the line ending used by most lines of the text."""
    crlf = text.count("\r\n")
    return "\r\n" if crlf > text.count("\n") - crlf else "\n"


@dataclass
class Member:
    """A named member of a brace-delimited import/export list."""
    name: str
    alias: Optional[str] = None
    type_only: bool = False

    @property
    def text(self) -> str:
        rendered = f"type {self.name}" if self.type_only else self.name
        if self.alias:
            rendered = f"{rendered} as {self.alias}"
        return rendered


@dataclass
class Statement:
    """One sortable linkage declaration."""
    kind: SpanKind
    start: int
    end: int
    start_line: int
    lines: List[str]
    members: List[Member] = field(default_factory=list)
    terminated: bool = True
    opaque: bool = False

    @property
    def end_line(self) -> int:
        return self.start_line + len(self.lines) - 1

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def length_key(self) -> int:
        """Length of the last physical line, trimmed."""
        return len(self.lines[-1].strip())

    @property
    def module_path(self) -> str:
        match = MODULE_PATH_RE.search(self.text)
        return match.group("path") if match else ""

    @property
    def sort_key(self) -> Tuple[int, str, str]:
        # The full text is a last resort so that equal paths never tie.
        return (self.length_key, self.module_path, self.text)


@dataclass
class Separator:
    """A comment or load assignment that is emitted verbatim."""
    kind: SpanKind
    start: int
    end: int
    start_line: int
    lines: List[str]

    @property
    def end_line(self) -> int:
        return self.start_line + len(self.lines) - 1

    @property
    def literal_text(self) -> str:
        return "\n".join(self.lines)


Span = Union[Statement, Separator]


@dataclass
class Group:
    """A maximal run of statements between separators."""
    statements: List[Statement] = field(default_factory=list)


Element = Union[Group, Separator]


@dataclass
class Block:
    """The region of a file holding the import section."""
    start: int
    end: int
    prefix_text: str
    suffix_text: str
    spans: List[Span] = field(default_factory=list)
    elements: List[Element] = field(default_factory=list)
    eol: str = "\n"

    @property
    def statements(self) -> List[Statement]:
        return [span for span in self.spans if isinstance(span, Statement)]


@dataclass(frozen=True)
class NoChange:
    """The engine left the text alone."""

    def apply(self, text: str) -> str:
        return text


@dataclass(frozen=True)
class Replace:
    """Replace `text[start:end]` with `new_text`."""
    start: int
    end: int
    new_text: str

    def apply(self, text: str) -> str:
        return text[:self.start] + self.new_text + text[self.end:]


NO_CHANGE = NoChange()

EditResult = Union[NoChange, Replace]
