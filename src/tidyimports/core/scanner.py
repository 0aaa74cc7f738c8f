"""Statement scanners: turn raw source text into typed spans."""

import re
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .types import (
    MODULE_PATH_RE,
    LanguageVariant,
    Separator,
    SourceLine,
    Span,
    SpanKind,
    Statement,
    split_lines,
)

IMPORT_START_RE = re.compile(r"""^import(?=[\s{*'"])""")
TYPE_IMPORT_START_RE = re.compile(r"^import\s+type(?=\s*\{|\s+\*|\s+(?!from\b)[\w$])")
EXPORT_ALL_START_RE = re.compile(r"^export\s*\*")
EXPORT_LIST_START_RE = re.compile(r"^export\s*\{")
TYPE_EXPORT_ALL_START_RE = re.compile(r"^export\s+type\s*\*")
TYPE_EXPORT_LIST_START_RE = re.compile(r"^export\s+type\s*\{")
LOAD_START_RE = re.compile(
    r"^const\s+(?:[\w$]+|\{[^}]*\}|\[[^\]]*\])\s*(?::[^=]+)?=\s*(?:await\s+)?"
    r"(?P<loader>import|require)\s*\("
)
FROM_CLAUSE_RE = re.compile(r"""\bfrom\s*(['"])[^'"\n]*\1""")

# Line endings that mean the statement goes on.
CONTINUATION_SUFFIXES = (",", "{", "=")
CONTINUATION_PREFIXES = ("from", "{", ",")


def strip_comments(line: str) -> str:
    """Drop a trailing `//` or `/*` comment that is not inside a string."""
    quote = None
    i = 0
    while i < len(line):
        char = line[i]
        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif line.startswith("//", i) or line.startswith("/*", i):
            return line[:i]
        i += 1
    return line


class StatementScanner(ABC):
    """Base class for statement scanners.

    A scanner reports every statement and separator it can find, in source
    order, with exact offsets. It never reorders or groups anything.
    """

    @staticmethod
    def create_scanner(name: str = "line") -> "StatementScanner":
        """Factory method to create the named scanner back end."""
        scanners = {
            "line": LineScanner,
            # A full-grammar back end plugs in here under its own name.
        }
        scanner_cls = scanners.get(name)
        if scanner_cls is None:
            raise ValueError(f"Unknown scanner: {name}")
        return scanner_cls()

    @abstractmethod
    def scan(self, text: str, variant: LanguageVariant) -> List[Span]:
        """Return the spans found in text."""
        pass


class LineScanner(StatementScanner):
    """Line-oriented scanner built on regular expressions."""

    def scan(self, text: str, variant: LanguageVariant) -> List[Span]:
        lines = split_lines(text)
        spans: List[Span] = []
        index = 0

        while index < len(lines):
            kind = self.classify(lines[index].text.strip(), variant)
            if kind is None:
                index += 1
                continue

            if kind is SpanKind.COMMENT:
                last, terminated = self._comment_end(lines, index)
                # `/* setup */ init();` is code, not a standalone comment
                if terminated and self._code_after_comment(lines, index, last):
                    index = last + 1
                    continue
            elif kind.is_separator:
                last, terminated = self._load_end(lines, index)
            else:
                last, terminated = self._statement_end(lines, index)

            chunk = lines[index:last + 1]
            index = last + 1

            # `export { x }` without a from clause is a local export.
            if kind in (SpanKind.RE_EXPORT, SpanKind.RE_EXPORT_ALL):
                code = "\n".join(strip_comments(line.text) for line in chunk)
                if not FROM_CLAUSE_RE.search(code):
                    continue

            spans.append(self._make_span(kind, chunk, terminated))

        return spans

    def classify(self, stripped: str, variant: LanguageVariant) -> Optional[SpanKind]:
        """Return the kind of span that a trimmed line starts, if any."""
        with_types = variant is LanguageVariant.WITH_TYPES

        if stripped.startswith(("//", "/*")):
            return SpanKind.COMMENT
        if IMPORT_START_RE.match(stripped):
            if with_types and TYPE_IMPORT_START_RE.match(stripped):
                return SpanKind.TYPE_ONLY_IMPORT
            return SpanKind.IMPORT
        if EXPORT_ALL_START_RE.match(stripped):
            return SpanKind.RE_EXPORT_ALL
        if EXPORT_LIST_START_RE.match(stripped):
            return SpanKind.RE_EXPORT
        if with_types and TYPE_EXPORT_ALL_START_RE.match(stripped):
            return SpanKind.RE_EXPORT_ALL
        if with_types and TYPE_EXPORT_LIST_START_RE.match(stripped):
            return SpanKind.RE_EXPORT

        match = LOAD_START_RE.match(stripped)
        if match:
            if match.group("loader") == "import":
                return SpanKind.DYNAMIC_LOAD
            return SpanKind.REQUIRE_LOAD
        return None

    def _statement_end(self, lines: List[SourceLine], index: int) -> Tuple[int, bool]:
        """Find the last line of a statement starting at index."""
        depth = 0
        seen = []
        for pos in range(index, len(lines)):
            code = strip_comments(lines[pos].text)
            seen.append(code)
            depth += code.count("{") - code.count("}")
            if depth > 0:
                continue

            joined = "\n".join(seen).strip()
            if joined.endswith(";") or MODULE_PATH_RE.search(joined):
                return pos, True
            if not self._continues(lines, pos, code):
                return pos, True

        return len(lines) - 1, False

    @staticmethod
    def _continues(lines: List[SourceLine], pos: int, code: str) -> bool:
        if code.rstrip().endswith(CONTINUATION_SUFFIXES):
            return True
        for line in lines[pos + 1:]:
            if line.is_blank:
                continue
            return line.text.strip().startswith(CONTINUATION_PREFIXES)
        return False

    @staticmethod
    def _comment_end(lines: List[SourceLine], index: int) -> Tuple[int, bool]:
        """Find the last line of a comment starting at index."""
        first = lines[index].text.strip()
        if first.startswith("//"):
            return index, True

        if "*/" in first[2:]:
            return index, True
        for pos in range(index + 1, len(lines)):
            if "*/" in lines[pos].text:
                return pos, True
        return len(lines) - 1, False

    @staticmethod
    def _code_after_comment(lines: List[SourceLine], index: int, last: int) -> bool:
        """Whether anything but whitespace or comments follows a block comment's `*/`."""
        first = lines[index].text
        if first.lstrip().startswith("//"):
            return False

        line = lines[last].text
        search_from = first.index("/*") + 2 if last == index else 0
        close = line.find("*/", search_from)
        return bool(strip_comments(line[close + 2:]).strip())

    @staticmethod
    def _load_end(lines: List[SourceLine], index: int) -> Tuple[int, bool]:
        """Find the line that closes the call of a load assignment."""
        depth = 0
        for pos in range(index, len(lines)):
            code = strip_comments(lines[pos].text)
            depth += code.count("(") - code.count(")")
            if depth <= 0:
                return pos, True
        return len(lines) - 1, False

    @staticmethod
    def _make_span(kind: SpanKind, chunk: List[SourceLine], terminated: bool) -> Span:
        start = chunk[0].start
        end = chunk[-1].end
        text_lines = [line.text for line in chunk]

        if kind.is_separator:
            return Separator(
                kind=kind, start=start, end=end, start_line=chunk[0].index, lines=text_lines
            )
        return Statement(
            kind=kind,
            start=start,
            end=end,
            start_line=chunk[0].index,
            lines=text_lines,
            terminated=terminated,
            opaque=not terminated,
        )
