"""Serialize sorted groups back into text."""

from typing import List

from .types import Block, Element, Group, Separator, Statement

DEFAULT_TYPE_MARKER = "// types"


class Reconstructor:
    """Renders groups, separators and the type bucket as one block of text."""

    def __init__(self, type_marker: str = DEFAULT_TYPE_MARKER, type_anchor: str = "shortest"):
        self.type_marker = type_marker
        self.type_anchor = type_anchor

    def representative_length(self, bucket: List[Statement]) -> int:
        """Length used to decide where the type bucket goes."""
        lengths = [statement.length_key for statement in bucket]
        if self.type_anchor == "shortest":
            return min(lengths)
        if self.type_anchor == "longest":
            return max(lengths)
        raise ValueError(f"Unknown type anchor: {self.type_anchor}")

    def render_lines(self, elements: List[Element], bucket: List[Statement]) -> List[str]:
        """Return the block's output lines, without line endings."""
        out: List[str] = []
        pending = bool(bucket)
        threshold = self.representative_length(bucket) if bucket else 0

        for element in elements:
            if isinstance(element, Group):
                for statement in element.statements:
                    if pending and statement.length_key > threshold:
                        out.extend(self._bucket_lines(bucket))
                        pending = False
                    out.extend(statement.lines)
            elif isinstance(element, Separator):
                out.extend(element.lines)
            else:
                raise TypeError(f"Unexpected element: {element!r}")

        if pending:
            out.extend(self._bucket_lines(bucket))
        return out

    def render_block(self, block: Block, elements: List[Element], bucket: List[Statement]) -> str:
        """Render the replacement for `text[block.start:block.end]`.

        Ends with one blank line when code follows the block, or a single line
        ending when the block runs to the end of the file.
        """
        eol = block.eol
        rendered = eol.join(self.render_lines(elements, bucket)) + eol
        if block.suffix_text:
            rendered += eol
        return rendered

    def splice(self, block: Block, rendered: str) -> str:
        return block.prefix_text + rendered + block.suffix_text

    def _bucket_lines(self, bucket: List[Statement]) -> List[str]:
        lines = [self.type_marker] if len(bucket) > 1 else []
        for statement in bucket:
            lines.extend(statement.lines)
        return lines
