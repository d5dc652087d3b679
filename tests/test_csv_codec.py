import pytest

from csv_codec import escape_field, parse_line, quote_field


class TestParseLine:
    """Tests for parse_line."""

    def test_simple_fields(self):
        """Test splitting unquoted fields."""
        assert parse_line("2025-01-15,50.00,Food,Lunch") == [
            "2025-01-15",
            "50.00",
            "Food",
            "Lunch",
        ]

    def test_quoted_comma(self):
        """Test that commas inside quotes do not split."""
        assert parse_line('a,"b, c",d') == ["a", "b, c", "d"]

    def test_doubled_quote_is_unescaped(self):
        """Test that "" inside quotes becomes a single quote."""
        assert parse_line('"say ""hi""",x') == ['say "hi"', "x"]

    def test_trailing_comma_yields_empty_field(self):
        """Test that a line ending in a comma has a trailing empty field."""
        assert parse_line("Date,Amount,Category,Notes,") == [
            "Date",
            "Amount",
            "Category",
            "Notes",
            "",
        ]

    def test_empty_fields_are_kept(self):
        """Test consecutive commas."""
        assert parse_line(",,") == ["", "", ""]

    def test_empty_line(self):
        """Test that an empty line is one empty field."""
        assert parse_line("") == [""]

    def test_quoted_newline(self):
        """Test that a newline inside quotes is content."""
        assert parse_line('"line1\nline2",x') == ["line1\nline2", "x"]

    def test_quotes_mid_field_toggle(self):
        """Test that quotes in the middle of a field still toggle quoting."""
        assert parse_line('ab"c,d"e,f') == ["abc,de", "f"]

    def test_single_quote_prefix_is_literal(self):
        """Test that a formula-neutralizing prefix is not removed."""
        assert parse_line("'=1+1,x") == ["'=1+1", "x"]


class TestEscapeField:
    """Tests for escape_field and quote_field."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty(self, value):
        """Test that absent or empty values become an empty string."""
        assert escape_field(value) == ""

    def test_plain_value_unchanged(self):
        """Test that safe values pass through."""
        assert escape_field("Lunch at cafe") == "Lunch at cafe"

    @pytest.mark.parametrize("prefix", ["=", "+", "-", "@", "\t", "\r"])
    def test_formula_prefixes(self, prefix):
        """Test that formula-like values get a single quote prefix."""
        assert escape_field(prefix + "1") == "'" + prefix + "1"

    def test_quoting(self):
        """Test wrapping values with commas, quotes or newlines."""
        assert escape_field("a,b") == '"a,b"'
        assert escape_field('a"b') == '"a""b"'
        assert escape_field("a\nb") == '"a\nb"'

    def test_prefix_then_quote(self):
        """Test that the prefix is added before quoting."""
        assert escape_field('=HYPERLINK("x")') == '"\'=HYPERLINK(""x"")"'

    def test_quote_field_has_no_prefix(self):
        """Test that quote_field only quotes."""
        assert quote_field("-5, more") == '"-5, more"'
        assert quote_field("-5") == "-5"

    @pytest.mark.parametrize(
        "value",
        [
            "plain",
            "a,b",
            '"quoted"',
            'mix, of "all"\nthree',
            ",,,",
            '""',
            "multi\nline, text",
        ],
    )
    def test_escaped_field_parses_back(self, value):
        """Test that an escaped field inside a row parses back to the value."""
        row = ",".join(["first", escape_field(value), "last"])

        assert parse_line(row) == ["first", value, "last"]
