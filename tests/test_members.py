"""Tests for sorting members inside brace lists."""

import pytest

from tidyimports.core.errors import UnparsableFragment
from tidyimports.core.members import MemberSorter
from tidyimports.core.scanner import LineScanner
from tidyimports.core.types import LanguageVariant


def statement_of(text, variant=LanguageVariant.WITH_TYPES):
    return LineScanner().scan(text, variant)[0]


def sort_lines(text, variant=LanguageVariant.WITH_TYPES):
    sorter = MemberSorter(variant)
    return sorter.sort_statement(statement_of(text, variant)).lines


class TestSingleLine:
    def test_sorted_and_joined(self):
        """Test members are re-joined with comma and space."""
        assert sort_lines("import {D,C} from 'y';") == ["import {C, D} from 'y';"]

    def test_padding_is_kept(self):
        """Test braces padded with spaces stay padded."""
        assert sort_lines("import { bb, a } from 'x';") == ["import { a, bb } from 'x';"]

    def test_length_then_lexicographic(self):
        """Test the two-level member comparator."""
        lines = sort_lines("import { ccc, b, dd, a } from 'x';")
        assert lines == ["import { a, b, dd, ccc } from 'x';"]

    def test_aliases_and_type_members(self):
        """Test renamed and type-qualified members sort by rendered text."""
        lines = sort_lines("import { type Zed, a as b } from 'x';")
        assert lines == ["import { a as b, type Zed } from 'x';"]

    def test_default_specifier_stays_in_front(self):
        """Test a default import keeps its place before the brace list."""
        lines = sort_lines("import React, { useState, act } from 'react';")
        assert lines == ["import React, { act, useState } from 'react';"]

    def test_trailing_comma_is_dropped(self):
        """Test a trailing comma in a one-line list."""
        assert sort_lines("import { b, a, } from 'x';") == ["import { a, b } from 'x';"]

    def test_members_are_recorded(self):
        """Test the sorted members are stored on the statement."""
        sorter = MemberSorter()
        statement = sorter.sort_statement(statement_of("import { b as c, a } from 'x';"))
        assert [m.name for m in statement.members] == ["a", "b"]
        assert statement.members[1].alias == "c"


class TestMultiLine:
    def test_members_reordered(self):
        """Test one member per line with trailing commas, outer lines kept."""
        lines = sort_lines("import {\n  bb,\n  a\n} from 'x';")
        assert lines == ["import {", "  a,", "  bb,", "} from 'x';"]

    def test_indentation_is_kept(self):
        """Test member indentation follows the original."""
        lines = sort_lines("export {\n    zeta,\n    b,\n} from './z';")
        assert lines == ["export {", "    b,", "    zeta,", "} from './z';"]

    def test_members_on_brace_lines(self):
        """Test members sharing the opening and closing lines are moved onto their own."""
        lines = sort_lines("import { b,\n  a } from 'x';")
        assert lines == ["import {", "  a,", "  b,", "} from 'x';"]

    def test_idempotent(self):
        """Test sorting a sorted statement changes nothing."""
        sorter = MemberSorter()
        once = sorter.sort_statement(statement_of("import {\n  ccc,\n  a,\n  bb\n} from 'x';"))
        twice = sorter.sort_statement(once)
        assert twice.lines == once.lines


class TestUnchanged:
    def test_no_brace_list(self):
        """Test default and namespace imports are returned as is."""
        sorter = MemberSorter()
        for text in ("import a from 'a';", "import * as ns from 'ns';", "import 'polyfill';"):
            statement = statement_of(text)
            assert sorter.sort_statement(statement) is statement

    def test_re_export_all(self):
        """Test `export *` has no members."""
        statement = statement_of("export * from './all';")
        assert MemberSorter().sort_statement(statement) is statement

    def test_empty_list(self):
        """Test an empty brace list."""
        statement = statement_of("import {} from 'x';")
        assert MemberSorter().sort_statement(statement) is statement


class TestUnparsable:
    def test_malformed_member(self):
        """Test a member that is not an identifier."""
        with pytest.raises(UnparsableFragment):
            MemberSorter().sort_statement(statement_of("import { a b } from 'x';"))

    def test_comment_in_list(self):
        """Test comments inside the member list are not reordered."""
        with pytest.raises(UnparsableFragment) as excinfo:
            MemberSorter().sort_statement(statement_of("import {\n  b, // keep\n  a,\n} from 'x';"))
        assert excinfo.value.line == 0

    def test_type_member_in_plain_source(self):
        """Test `type` qualifiers are rejected for plain sources."""
        sorter = MemberSorter(LanguageVariant.PLAIN)
        with pytest.raises(UnparsableFragment):
            sorter.sort_statement(statement_of("import { type A } from 'x';", LanguageVariant.PLAIN))

    def test_member_named_type_in_plain_source(self):
        """Test a member literally called `type` is fine everywhere."""
        lines = sort_lines("import { type as t, a } from 'x';", LanguageVariant.PLAIN)
        assert lines == ["import { a, type as t } from 'x';"]

    def test_unclosed_list(self):
        """Test a brace list that never closes."""
        with pytest.raises(UnparsableFragment):
            MemberSorter.find_brace_list(["import { a, b from 'x';"])
