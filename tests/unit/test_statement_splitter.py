"""Unit tests for the SQL statement splitter."""

import pytest

from postgres_mcp.lib.sql.statement_splitter import split_statements


class TestSplitBasics:
    """Splitting on top-level semicolons."""

    def test_single_statement_without_semicolon(self):
        """Text without a separator is one trimmed statement."""
        assert split_statements("  SELECT 1  ") == ["SELECT 1"]

    @pytest.mark.parametrize("query", ["", "   ", "\n\t", ";", " ; ;; "])
    def test_empty_input_yields_nothing(self, query):
        """Whitespace and bare separators produce no statements."""
        assert split_statements(query) == []

    def test_two_statements(self):
        """Each side of a semicolon becomes a statement."""
        assert split_statements("SELECT 1; SELECT 2") == ["SELECT 1", "SELECT 2"]

    def test_trailing_semicolon(self):
        """A trailing separator does not add an empty statement."""
        assert split_statements("SELECT 1;") == ["SELECT 1"]

    @pytest.mark.parametrize("text", ["SELECT a FROM t", "  x  ", "update t set a = 1\n"])
    def test_repeated_plain_text(self, text):
        """text;text splits into two copies of the trimmed text."""
        assert split_statements(text + ";" + text) == [text.strip(), text.strip()]

    def test_source_order_preserved(self):
        """Statements come back in the order they were written."""
        assert split_statements("a;b;c") == ["a", "b", "c"]


class TestQuotedText:
    """Semicolons inside quotes do not separate statements."""

    def test_semicolon_in_single_quotes(self):
        """A semicolon in a string literal is kept."""
        assert split_statements("SELECT 'a;b'") == ["SELECT 'a;b'"]

    def test_semicolon_in_double_quotes(self):
        """A semicolon in a quoted identifier is kept."""
        assert split_statements('SELECT "we;ird" FROM t') == ['SELECT "we;ird" FROM t']

    def test_escaped_single_quote(self):
        """A doubled quote does not close the string."""
        query = "SELECT 'it''s fine; really'"
        assert split_statements(query) == [query]

    def test_escaped_double_quote(self):
        """A doubled double quote does not close the identifier."""
        query = 'SELECT "a"";b" FROM t; SELECT 2'
        assert split_statements(query) == ['SELECT "a"";b" FROM t', "SELECT 2"]

    def test_other_quote_inside_string_is_ignored(self):
        """A double quote inside a single-quoted string has no effect."""
        query = """SELECT 'say "hi"; bye'; SELECT 2"""
        assert split_statements(query) == ["""SELECT 'say "hi"; bye'""", "SELECT 2"]

    def test_comment_markers_inside_string(self):
        """Comment markers inside a string do not open comments."""
        query = "SELECT '--not a comment'; SELECT '/* nor this'; SELECT 3"
        assert split_statements(query) == [
            "SELECT '--not a comment'",
            "SELECT '/* nor this'",
            "SELECT 3",
        ]

    def test_unterminated_string_is_flushed(self):
        """Input ending inside a string keeps everything as one statement."""
        assert split_statements("SELECT 'open; DROP TABLE t") == ["SELECT 'open; DROP TABLE t"]


class TestComments:
    """Comments stay in the text but hide their semicolons."""

    def test_line_comment_semicolon(self):
        """A semicolon inside a line comment is not a separator."""
        query = "SELECT 1 -- first; second\nFROM t"
        assert split_statements(query) == [query]

    def test_line_comment_ends_at_newline(self):
        """After the newline, semicolons separate again."""
        assert split_statements("-- note\nSELECT 1; SELECT 2") == ["-- note\nSELECT 1", "SELECT 2"]

    def test_block_comment_semicolon(self):
        """A semicolon inside a block comment is not a separator."""
        query = "SELECT /* a; b */ 1"
        assert split_statements(query) == [query]

    def test_block_comment_spanning_lines(self):
        """Block comments may span several lines."""
        query = "SELECT 1 /* one;\ntwo; */; SELECT 2"
        assert split_statements(query) == ["SELECT 1 /* one;\ntwo; */", "SELECT 2"]

    def test_quote_inside_comment_is_ignored(self):
        """An apostrophe inside a comment does not open a string."""
        assert split_statements("SELECT 1 -- don't\n; SELECT 2") == ["SELECT 1 -- don't", "SELECT 2"]
        assert split_statements("SELECT 1 /* it's */; SELECT 2") == ["SELECT 1 /* it's */", "SELECT 2"]

    def test_comment_only_statement_is_kept(self):
        """A trailing comment becomes its own statement text."""
        assert split_statements("SELECT 1; /* delete from t */") == ["SELECT 1", "/* delete from t */"]

    def test_unterminated_block_comment_is_flushed(self):
        """Input ending inside a block comment is not an error."""
        assert split_statements("SELECT 1 /* open; DROP") == ["SELECT 1 /* open; DROP"]

    def test_comments_are_copied_verbatim(self):
        """Comment markers are part of the statement text."""
        statements = split_statements("/* head */ SELECT 1 -- tail")
        assert statements == ["/* head */ SELECT 1 -- tail"]
