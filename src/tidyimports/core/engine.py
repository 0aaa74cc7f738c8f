"""The import block engine: source text in, edit out.

The engine is a pure function of its input. It never touches files or
loggers; anything worth reporting comes back as diagnostics on the outcome.
"""

import re
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .diagnostics import Diagnostic, DiagnosticLevel
from .errors import EngineFault, UnparsableFragment
from .grouper import Grouper
from .locator import BlockLocator
from .members import MemberSorter
from .ordering import StatementSorter
from .policy import SortPolicy
from .reconstructor import Reconstructor
from .scanner import StatementScanner
from .types import (
    NO_CHANGE,
    EditResult,
    Element,
    Group,
    LanguageVariant,
    Replace,
)

LINKAGE_RE = re.compile(r"\b(?:import|export)\b")


def has_linkage_keyword(text: str) -> bool:
    """Whether the text mentions `import` or `export` at all."""
    return LINKAGE_RE.search(text) is not None


@dataclass
class EngineOutcome:
    """Result of one engine run."""

    edit: EditResult
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return isinstance(self.edit, Replace)


class ImportEngine:
    """Reorganizes the leading import/export block of a file."""

    def __init__(
        self, policy: Optional[SortPolicy] = None, scanner: Optional[StatementScanner] = None
    ):
        self.policy = policy or SortPolicy()
        self.scanner = scanner or StatementScanner.create_scanner(self.policy.scanner)
        self.locator = BlockLocator(self.policy.max_blank_lines)
        self.grouper = Grouper(self.policy.type_marker)
        self.statement_sorter = StatementSorter()
        self.reconstructor = Reconstructor(self.policy.type_marker, self.policy.type_anchor)

    def run(self, text: str, variant: LanguageVariant = LanguageVariant.WITH_TYPES) -> EngineOutcome:
        """Compute the edit for a snapshot of text.

        Any fault inside the pipeline abandons the run: the outcome is then
        NoChange with an error diagnostic, never a partial rewrite.
        """
        diagnostics: List[Diagnostic] = []
        if not has_linkage_keyword(text):
            return EngineOutcome(NO_CHANGE, diagnostics)

        try:
            edit = self._rearrange(text, variant, diagnostics)
        except EngineFault as e:
            diagnostics.append(Diagnostic(DiagnosticLevel.ERROR, "engine-fault", str(e)))
            return EngineOutcome(NO_CHANGE, diagnostics)

        return EngineOutcome(edit, diagnostics)

    def _rearrange(
        self, text: str, variant: LanguageVariant, diagnostics: List[Diagnostic]
    ) -> EditResult:
        try:
            spans = self.scanner.scan(text, variant)
            block = self.locator.locate(text, spans)
            if block is None or not block.statements:
                return NO_CHANGE

            for statement in block.statements:
                if not statement.terminated:
                    diagnostics.append(
                        Diagnostic(
                            DiagnosticLevel.WARNING,
                            "unterminated-statement",
                            "Statement runs to end of file; left as is",
                            line=statement.start_line + 1,
                        )
                    )

            elements = self.grouper.group(block, variant)
            member_sorter = MemberSorter(variant)
            elements = [self._sort_members(e, member_sorter, diagnostics) for e in elements]
            elements, bucket = self.statement_sorter.extract_type_bucket(elements)
            elements = self.statement_sorter.sort_groups(elements)

            rendered = self.reconstructor.render_block(block, elements, bucket)
            candidate = self.reconstructor.splice(block, rendered)
        except Exception as e:
            raise EngineFault(f"Import rearrangement abandoned: {e}") from e

        if candidate == text:
            return NO_CHANGE
        return Replace(block.start, block.end, rendered)

    @staticmethod
    def _sort_members(
        element: Element, sorter: MemberSorter, diagnostics: List[Diagnostic]
    ) -> Element:
        if not isinstance(element, Group):
            return element

        statements = []
        for statement in element.statements:
            try:
                statements.append(sorter.sort_statement(statement))
            except UnparsableFragment as e:
                line = e.line + 1 if e.line is not None else statement.start_line + 1
                diagnostics.append(
                    Diagnostic(DiagnosticLevel.WARNING, "unparsable-fragment", str(e), line=line)
                )
                statements.append(replace(statement, opaque=True))
        return Group(statements)


def rearrange_imports(
    text: str,
    variant: LanguageVariant = LanguageVariant.WITH_TYPES,
    policy: Optional[SortPolicy] = None,
) -> EditResult:
    """Convenience wrapper returning only the edit."""
    return ImportEngine(policy).run(text, variant).edit
