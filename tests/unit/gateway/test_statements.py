"""
Tests for statement classification.

Classification must depend only on the leading keyword: case-insensitive,
leading whitespace ignored, keyword ending at a word boundary.
"""

import pytest

from sql_gateway.statements import StatementClass, classify, is_insert, is_select


class TestClassifySelect:
    """SELECT-class detection."""

    @pytest.mark.parametrize(
        "statement",
        [
            "SELECT 1",
            "select * from patient",
            "SeLeCt name FROM patient",
            "   SELECT 1",
            "\n\t SELECT 1",
            "SELECT",
            "SELECT(1)",
            "SELECT*FROM patient",
        ],
    )
    def test_classify_selectKeyword_returnsSelect(self, statement):
        assert classify(statement) is StatementClass.SELECT
        assert is_select(statement)
        assert not is_insert(statement)


class TestClassifyInsert:
    """INSERT-class detection."""

    @pytest.mark.parametrize(
        "statement",
        [
            "INSERT INTO patient (name) VALUES ('x')",
            "insert into patient values (1, 'x', NULL)",
            "  Insert INTO patient (name) VALUES ('x')",
            "\r\nINSERT INTO patient (name) VALUES ('x')",
        ],
    )
    def test_classify_insertKeyword_returnsInsert(self, statement):
        assert classify(statement) is StatementClass.INSERT
        assert is_insert(statement)
        assert not is_select(statement)


class TestClassifyUnclassified:
    """Everything else is unclassified."""

    @pytest.mark.parametrize(
        "statement",
        [
            "UPDATE patient SET name = 'x'",
            "DELETE FROM patient",
            "CREATE TABLE t (id INT)",
            "DROP TABLE patient",
            "WITH x AS (SELECT 1) SELECT * FROM x",
            "SELECTED",
            "INSERTION",
            "SELECT_ALL",
            "/* note */ SELECT 1",
            "-- note\nSELECT 1",
            "(SELECT 1)",
            "",
            None,
        ],
    )
    def test_classify_otherLeadingToken_returnsUnclassified(self, statement):
        assert classify(statement) is StatementClass.UNCLASSIFIED

    def test_classify_keywordNotAtStart_returnsUnclassified(self):
        """A keyword later in the text does not count."""
        assert classify("EXPLAIN SELECT 1") is StatementClass.UNCLASSIFIED
        assert classify("REPLACE INTO patient (name) VALUES ('x')") is StatementClass.UNCLASSIFIED

    def test_classify_multiStatement_usesFirstKeywordOnly(self):
        """Only the leading keyword is inspected; the rest passes through."""
        assert classify("INSERT INTO patient (name) VALUES ('x'); SELECT 1") is StatementClass.INSERT
        assert classify("SELECT 1; DELETE FROM patient") is StatementClass.SELECT
