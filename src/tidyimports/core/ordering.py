"""Ordering rules shared by members and statements."""

from typing import List, Tuple

from .types import Element, Group, SpanKind, Statement


def two_level_key(text: str) -> Tuple[int, str]:
    """Sort by length first, then lexicographically."""
    return (len(text), text)


def statement_key(statement: Statement) -> Tuple[int, str, str]:
    """Length of the last line, then module path, then full text."""
    return statement.sort_key


class StatementSorter:
    """Orders the statements of a group."""

    def sort(self, statements: List[Statement]) -> List[Statement]:
        """Return the statements in canonical order.

        Opaque statements keep their position; the others are sorted into the
        remaining slots.
        """
        movable = iter(sorted((s for s in statements if not s.opaque), key=statement_key))
        return [statement if statement.opaque else next(movable) for statement in statements]

    def sort_groups(self, elements: List[Element]) -> List[Element]:
        sorted_elements: List[Element] = []
        for element in elements:
            if isinstance(element, Group):
                sorted_elements.append(Group(self.sort(element.statements)))
            else:
                sorted_elements.append(element)
        return sorted_elements

    def extract_type_bucket(self, elements: List[Element]) -> Tuple[List[Element], List[Statement]]:
        """Pull type-only imports out of every group.

        Returns the elements without them and the sorted bucket.
        """
        remaining: List[Element] = []
        bucket: List[Statement] = []

        for element in elements:
            if not isinstance(element, Group):
                remaining.append(element)
                continue

            kept = []
            for statement in element.statements:
                if statement.kind is SpanKind.TYPE_ONLY_IMPORT and not statement.opaque:
                    bucket.append(statement)
                else:
                    kept.append(statement)
            remaining.append(Group(kept))

        return remaining, sorted(bucket, key=statement_key)
