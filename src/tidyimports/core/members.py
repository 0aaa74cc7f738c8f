"""Sorting of named members inside brace lists."""

import re
from dataclasses import replace
from typing import List, Optional, Tuple

from .errors import UnparsableFragment
from .ordering import two_level_key
from .types import LanguageVariant, Member, SpanKind, Statement

NAME = r"[A-Za-z_$][\w$]*"
STRING_NAME = r"""'[^'\n]*'|"[^"\n]*\""""
MEMBER_RE = re.compile(
    rf"^(?:(?P<type>type)\s+)?(?P<name>{NAME}|{STRING_NAME})(?:\s+as\s+(?P<alias>{NAME}))?$"
)
DEFAULT_INDENT = "  "

Position = Tuple[int, int]


class MemberSorter:
    """Sorts the named members of a single statement."""

    def __init__(self, variant: LanguageVariant = LanguageVariant.WITH_TYPES):
        self.variant = variant

    def sort_statement(self, statement: Statement) -> Statement:
        """Return the statement with its brace list sorted and re-rendered.

        Raises UnparsableFragment when the member list cannot be read; the
        caller decides how to degrade.
        """
        if statement.opaque or statement.kind is SpanKind.RE_EXPORT_ALL:
            return statement

        braces = self.find_brace_list(statement.lines, statement.start_line)
        if braces is None:
            return statement

        inner = self._inner_text(statement.lines, braces)
        members = self.parse_members(inner, line=statement.start_line + braces[0][0])
        if not members:
            return statement

        ordered = sorted(members, key=lambda member: two_level_key(member.text))
        lines = self._render(statement.lines, braces, ordered)
        return replace(statement, lines=lines, members=ordered)

    def parse_members(self, inner: str, line: Optional[int] = None) -> List[Member]:
        """Parse the text between the braces into members."""
        if "//" in inner or "/*" in inner:
            raise UnparsableFragment("Comment inside member list", line)

        items = [item.strip() for item in inner.split(",")]
        if items and not items[-1]:
            items.pop()

        members = []
        for item in items:
            match = MEMBER_RE.match(item)
            if not match:
                raise UnparsableFragment(f"Cannot read member {item!r}", line)
            type_only = match.group("type") is not None
            if type_only and self.variant is not LanguageVariant.WITH_TYPES:
                raise UnparsableFragment(f"Type member in plain source: {item!r}", line)
            members.append(
                Member(name=match.group("name"), alias=match.group("alias"), type_only=type_only)
            )
        return members

    @staticmethod
    def find_brace_list(
        lines: List[str], first_line: int = 0
    ) -> Optional[Tuple[Position, Position]]:
        """Locate the first brace list as (row, column) of `{` and its `}`."""
        opening = None
        depth = 0
        for row, line in enumerate(lines):
            quote = None
            col = 0
            while col < len(line):
                char = line[col]
                if quote:
                    if char == "\\":
                        col += 2
                        continue
                    if char == quote:
                        quote = None
                elif char in "'\"`":
                    quote = char
                elif line.startswith("//", col):
                    break
                elif char == "{":
                    if opening is None:
                        opening = (row, col)
                    depth += 1
                elif char == "}" and opening is not None:
                    depth -= 1
                    if depth == 0:
                        return opening, (row, col)
                col += 1

        if opening is not None:
            raise UnparsableFragment("Unclosed member list", first_line + opening[0])
        return None

    @staticmethod
    def _inner_text(lines: List[str], braces: Tuple[Position, Position]) -> str:
        (open_row, open_col), (close_row, close_col) = braces
        if open_row == close_row:
            return lines[open_row][open_col + 1:close_col]
        return "\n".join(
            [lines[open_row][open_col + 1:]]
            + lines[open_row + 1:close_row]
            + [lines[close_row][:close_col]]
        )

    def _render(
        self, lines: List[str], braces: Tuple[Position, Position], members: List[Member]
    ) -> List[str]:
        (open_row, open_col), (close_row, close_col) = braces
        texts = [member.text for member in members]

        if open_row == close_row:
            line = lines[open_row]
            pad = " " if line[open_col + 1:close_col][:1].isspace() else ""
            rendered = line[:open_col + 1] + pad + ", ".join(texts) + pad + line[close_col:]
            return lines[:open_row] + [rendered] + lines[open_row + 1:]

        opening = lines[open_row][:open_col + 1]
        closing = lines[close_row]
        if closing[:close_col].strip():
            closing = _leading_whitespace(lines[open_row]) + closing[close_col:]

        indent = self._member_indent(lines, open_row, close_row)
        body = [f"{indent}{text}," for text in texts]
        return lines[:open_row] + [opening] + body + [closing] + lines[close_row + 1:]

    @staticmethod
    def _member_indent(lines: List[str], open_row: int, close_row: int) -> str:
        for line in lines[open_row + 1:close_row]:
            if line.strip():
                return _leading_whitespace(line)
        return _leading_whitespace(lines[open_row]) + DEFAULT_INDENT


def _leading_whitespace(line: str) -> str:
    return line[:len(line) - len(line.lstrip())]
