"""Tests for the comparator and statement sorting."""

from tidyimports.core.ordering import StatementSorter, two_level_key
from tidyimports.core.types import Group, Separator, SpanKind, Statement


def stmt(*lines, kind=SpanKind.IMPORT, opaque=False):
    return Statement(kind=kind, start=0, end=0, start_line=0, lines=list(lines), opaque=opaque)


def texts(statements):
    return [s.text for s in statements]


def test_two_level_key():
    """Test length first, then lexicographic."""
    assert sorted(["bb", "c", "a", "aa"], key=two_level_key) == ["a", "c", "aa", "bb"]


def test_shorter_module_path_first():
    """Test statements are ordered by length of their line."""
    statements = [stmt("import z from 'aa';"), stmt("import a from 'b';")]
    assert texts(StatementSorter().sort(statements)) == [
        "import a from 'b';",
        "import z from 'aa';",
    ]


def test_equal_length_breaks_on_module_path():
    """Test the module path decides between equal lengths."""
    statements = [stmt("import x from 'ab';"), stmt("import y from 'aa';")]
    assert texts(StatementSorter().sort(statements)) == [
        "import y from 'aa';",
        "import x from 'ab';",
    ]


def test_equal_length_and_path_is_still_deterministic():
    """Test identical keys fall back to the full text."""
    a = stmt("import b from 'x';")
    b = stmt("import a from 'x';")
    assert texts(StatementSorter().sort([a, b])) == texts(StatementSorter().sort([b, a]))


def test_multi_line_statements_use_last_line():
    """Test a multi-line statement is measured by its closing line."""
    multi = stmt("import {", "  alpha,", "  beta,", "} from 'x';")
    single = stmt("import b from 'bbbb';")
    assert StatementSorter().sort([single, multi])[0] is multi


def test_opaque_statements_keep_their_slot():
    """Test statements that could not be parsed are not moved."""
    pinned = stmt("import { a b } from 'something-long';", opaque=True)
    long = stmt("import bb from 'bb';")
    short = stmt("import a from 'a';")

    result = StatementSorter().sort([pinned, long, short])
    assert result == [pinned, short, long]


def test_sort_groups_leaves_separators():
    """Test separators pass through sort_groups untouched."""
    separator = Separator(SpanKind.COMMENT, 0, 0, 0, ["// x"])
    elements = [Group([stmt("import bb from 'bb';"), stmt("import a from 'a';")]), separator]

    result = StatementSorter().sort_groups(elements)
    assert texts(result[0].statements) == ["import a from 'a';", "import bb from 'bb';"]
    assert result[1] is separator


def test_extract_type_bucket():
    """Test type-only imports leave their groups and come back sorted."""
    long_type = stmt("import type { Props } from './props';", kind=SpanKind.TYPE_ONLY_IMPORT)
    short_type = stmt("import type { T } from 't';", kind=SpanKind.TYPE_ONLY_IMPORT)
    value = stmt("import a from 'a';")
    separator = Separator(SpanKind.COMMENT, 0, 0, 0, ["// x"])

    elements, bucket = StatementSorter().extract_type_bucket(
        [Group([long_type, value]), separator, Group([short_type])]
    )

    assert bucket == [short_type, long_type]
    assert elements[0].statements == [value]
    assert elements[1] is separator
    assert elements[2].statements == []


def test_opaque_type_import_stays_in_group():
    """Test an unparsable type import is not moved into the bucket."""
    broken = stmt("import type { A B } from 'x';", kind=SpanKind.TYPE_ONLY_IMPORT, opaque=True)
    elements, bucket = StatementSorter().extract_type_bucket([Group([broken])])

    assert bucket == []
    assert elements[0].statements == [broken]
