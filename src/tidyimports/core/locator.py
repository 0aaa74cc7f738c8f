"""Locate the import section of a file."""

from typing import Dict, List, Optional

from .types import Block, SourceLine, Span, SpanKind, detect_eol, split_lines

DEFAULT_MAX_BLANK_LINES = 2


class BlockLocator:
    """Finds the single contiguous block of linkage statements.

    The block starts at the first span and runs over spans, blank lines and
    comments. It ends at the first non-blank line that no span starts on, or
    at a run of more than `max_blank_lines` blank lines. Comments left over
    after the last statement are handed back to the suffix, so a doc comment
    stays attached to the declaration below it.
    """

    def __init__(self, max_blank_lines: int = DEFAULT_MAX_BLANK_LINES):
        self.max_blank_lines = max_blank_lines

    def locate(self, text: str, spans: List[Span]) -> Optional[Block]:
        """Return the block, or None when the text has no spans."""
        if not spans:
            return None

        lines = split_lines(text)
        by_start: Dict[int, Span] = {span.start_line: span for span in spans}

        first = spans[0]
        block_spans = [first]
        index = first.end_line + 1
        end_line = len(lines)
        blank_run = 0

        while index < len(lines):
            if lines[index].is_blank:
                blank_run += 1
                if blank_run > self.max_blank_lines:
                    # Keep one blank line; the rest of the gap stays in the suffix.
                    end_line = index - blank_run + 2
                    break
                index += 1
                continue

            span = by_start.get(index)
            if span is None:
                end_line = index
                break

            block_spans.append(span)
            blank_run = 0
            index = span.end_line + 1

        # Comments after the last statement belong to the code that follows.
        while len(block_spans) > 1 and block_spans[-1].kind is SpanKind.COMMENT:
            end_line = block_spans.pop().start_line

        start = lines[first.start_line].start
        end = self._offset_of(lines, end_line, len(text))
        region = text[start:end]

        return Block(
            start=start,
            end=end,
            prefix_text=text[:start],
            suffix_text=text[end:],
            spans=block_spans,
            eol=detect_eol(region if "\n" in region else text),
        )

    @staticmethod
    def _offset_of(lines: List[SourceLine], line_index: int, text_length: int) -> int:
        if line_index < len(lines):
            return lines[line_index].start
        return text_length
