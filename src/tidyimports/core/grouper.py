"""Split a block into statement groups and separators."""

from typing import List, Optional

from .types import Block, Element, Group, LanguageVariant, Separator, Span, SpanKind, Statement

# A generated marker always heads a bucket of at least this many statements.
MIN_MARKED_BUCKET = 2


class Grouper:
    """Partitions the block's spans into groups.

    Every separator closes the open group, even an empty one, so groups and
    separators alternate and always start and end with a group.
    """

    def __init__(self, type_marker: Optional[str] = None):
        self.type_marker = type_marker

    def group(
        self, block: Block, variant: LanguageVariant = LanguageVariant.WITH_TYPES
    ) -> List[Element]:
        elements: List[Element] = []
        current = Group()
        drop_markers = variant is LanguageVariant.WITH_TYPES

        for index, span in enumerate(block.spans):
            if isinstance(span, Statement):
                current.statements.append(span)
            elif isinstance(span, Separator):
                if drop_markers and self.is_type_marker(block.spans, index):
                    continue
                elements.append(current)
                elements.append(span)
                current = Group()
            else:
                raise TypeError(f"Unexpected span: {span!r}")

        elements.append(current)
        block.elements = elements
        return elements

    def is_type_marker(self, spans: List[Span], index: int) -> bool:
        """Whether spans[index] is a marker line emitted by an earlier run.

        Only a comment equal to the marker that directly heads a run of
        type-only imports long enough to get a marker counts; any other
        comment with the same text belongs to the user.
        """
        separator = spans[index]
        if self.type_marker is None or separator.kind is not SpanKind.COMMENT:
            return False
        if separator.literal_text.strip() != self.type_marker:
            return False

        following = spans[index + 1:index + 1 + MIN_MARKED_BUCKET]
        return len(following) == MIN_MARKED_BUCKET and all(
            span.kind is SpanKind.TYPE_ONLY_IMPORT and span.terminated for span in following
        )
