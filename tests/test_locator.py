"""Tests for locating the import block."""

from tidyimports.core.locator import BlockLocator
from tidyimports.core.scanner import LineScanner
from tidyimports.core.types import LanguageVariant


def locate(text, max_blank_lines=2):
    spans = LineScanner().scan(text, LanguageVariant.WITH_TYPES)
    return BlockLocator(max_blank_lines).locate(text, spans)


def test_no_spans_means_no_block():
    """Test text without statements has no block."""
    assert locate("const x = 1;\n") is None


def test_prefix_and_suffix():
    """Test the untouched text around the block."""
    text = "'use strict';\nimport b from 'b';\n\nconst x = 1;\n"
    block = locate(text)

    assert block.start == 14
    assert block.prefix_text == "'use strict';\n"
    assert block.suffix_text == "const x = 1;\n"
    assert len(block.spans) == 1
    assert block.prefix_text + text[block.start:block.end] + block.suffix_text == text


def test_first_unrelated_line_ends_block():
    """Test a later import after code is not part of the block."""
    text = "import a from 'a';\nfoo();\nimport b from 'b';\n"
    block = locate(text)

    assert len(block.spans) == 1
    assert block.suffix_text == "foo();\nimport b from 'b';\n"


def test_blank_lines_and_comments_stay_inside():
    """Test blank lines and comments do not end the block."""
    text = "import a from 'a';\n\n// group two\nimport b from 'b';\n\n\nrun();\n"
    block = locate(text)

    assert len(block.spans) == 3
    assert block.suffix_text == "run();\n"


def test_long_blank_gap_ends_block():
    """Test more than two blank lines end the block and keep the gap in the suffix."""
    text = "import a from 'a';\n\n\n\nimport b from 'b';\n"
    block = locate(text)

    assert len(block.spans) == 1
    assert text[block.start:block.end] == "import a from 'a';\n\n"
    assert block.suffix_text == "\n\nimport b from 'b';\n"


def test_two_blank_lines_are_allowed():
    """Test a gap of exactly two blank lines keeps the block open."""
    text = "import a from 'a';\n\n\nimport b from 'b';\n"
    block = locate(text)

    assert len(block.spans) == 2
    assert block.suffix_text == ""


def test_max_blank_lines_is_configurable():
    """Test a stricter blank line limit."""
    text = "import a from 'a';\n\nimport b from 'b';\n"
    assert len(locate(text, max_blank_lines=0).spans) == 1
    assert len(locate(text, max_blank_lines=1).spans) == 2


def test_block_reaching_end_of_file():
    """Test a block that runs to the end of the text."""
    text = "import a from 'a';\nimport b from 'b';"
    block = locate(text)

    assert block.end == len(text)
    assert block.suffix_text == ""


def test_crlf_is_detected():
    """Test the block remembers the line ending."""
    block = locate("import a from 'a';\r\nrun();\r\n")
    assert block.eol == "\r\n"
    assert block.suffix_text == "run();\r\n"


def test_trailing_comment_goes_to_suffix():
    """Test a doc comment after the last statement stays with the code below."""
    text = "import a from 'a';\n/** Docs */\nexport function f() {}\n"
    block = locate(text)

    assert len(block.spans) == 1
    assert text[block.start:block.end] == "import a from 'a';\n"
    assert block.suffix_text == "/** Docs */\nexport function f() {}\n"


def test_trailing_comments_after_blank_line():
    """Test every trailing comment is handed back, blank lines stay in the block."""
    text = "import a from 'a';\n\n// one\n// two\nrun();\n"
    block = locate(text)

    assert text[block.start:block.end] == "import a from 'a';\n\n"
    assert block.suffix_text == "// one\n// two\nrun();\n"


def test_lone_comment_block_is_kept():
    """Test a block holding only a comment is not emptied."""
    block = locate("// note\nrun();\n")
    assert len(block.spans) == 1


def test_mixed_line_endings_use_the_block_majority():
    """Test one CRLF elsewhere does not switch an LF block to CRLF."""
    block = locate("import b from 'bb';\nimport a from 'a';\n\nrun();\r\n")
    assert block.eol == "\n"


def test_single_line_block_uses_file_line_ending():
    """Test a block without a line ending of its own follows the file."""
    block = locate("run();\r\nimport a from 'a';")
    assert block.eol == "\r\n"
