"""Tests for the submissions CSV codec."""
import pytest

from app.intake.csv_codec import CsvDocument, decode_document, decode_line, encode_field, encode_row

HEADER = "timestamp,name,phone,email,symptoms,source"


class TestEncodeField:
    def test_plain_value_unchanged(self):
        assert encode_field("hello") == "hello"

    def test_none_is_empty(self):
        assert encode_field(None) == ""

    def test_comma_is_quoted(self):
        assert encode_field("Jo, Ann") == '"Jo, Ann"'

    def test_quotes_are_doubled(self):
        assert encode_field('say "hi"') == '"say ""hi"""'

    def test_newlines_become_spaces(self):
        assert encode_field("cough\nfever") == "cough fever"
        assert encode_field("a\r\nb") == "a  b"

    def test_whitespace_trimmed(self):
        assert encode_field("  padded \n") == "padded"

    def test_non_string_values(self):
        assert encode_field(555) == "555"


class TestEncodeRow:
    def test_joins_and_terminates(self):
        assert encode_row(["a", "b,c", ""]) == 'a,"b,c",\n'

    def test_single_physical_line(self):
        line = encode_row(["x\ny", 'q"\r\nz', "multi\n\nline"])
        assert line.count("\n") == 1
        assert line.endswith("\n")
        assert "\r" not in line


class TestDecodeLine:
    def test_simple(self):
        assert decode_line("a,b,c") == ["a", "b", "c"]

    def test_quoted_comma(self):
        assert decode_line('x,"Jo, Ann",y') == ["x", "Jo, Ann", "y"]

    def test_escaped_quote(self):
        assert decode_line('"say ""hi""",z') == ['say "hi"', "z"]

    def test_trailing_empty_field(self):
        assert decode_line("a,b,") == ["a", "b", ""]

    def test_empty_line(self):
        assert decode_line("") == [""]


class TestDecodeDocument:
    def test_empty_document(self):
        doc = decode_document("")
        assert doc == CsvDocument()
        assert len(doc) == 0

    def test_header_only(self):
        doc = decode_document(HEADER + "\n")
        assert doc.headers == HEADER.split(",")
        assert doc.records == []

    def test_crlf_lines(self):
        doc = decode_document("a,b\r\n1,2\r\n3,4\r\n")
        assert doc.records == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_short_row_padded(self):
        doc = decode_document(HEADER + "\n2024-01-01T00:00:00.000Z,Jo,555\n")
        rec = doc.records[0]
        assert rec["phone"] == "555"
        assert rec["email"] == ""
        assert rec["symptoms"] == ""
        assert rec["source"] == ""
        assert set(rec) == set(doc.headers)

    def test_extra_fields_dropped(self):
        doc = decode_document("a,b\n1,2,3,4\n")
        assert doc.records == [{"a": "1", "b": "2"}]

    def test_record_count_matches_lines(self):
        rows = [encode_row([f"t{i}", f"n,{i}", "555", "e@x", 'he said "ow"', "web"]) for i in range(7)]
        text = HEADER + "\n" + "".join(rows)
        doc = decode_document(text)
        assert len(doc.records) == len(text.strip().splitlines()) - 1


@pytest.mark.parametrize(
    "values",
    [
        ["2024-01-01T00:00:00.000Z", "Jo, Ann", "555", "a@b.com", "cough\nfever", "hero"],
        ["t", 'The "Boss"', "+1 (555) 010", "x@y.z", 'comma, and "quote"', ""],
        ["t", "", "", "", "", "unknown"],
    ],
)
def test_round_trip(values):
    doc = decode_document(HEADER + "\n" + encode_row(values))
    expected = [" ".join(v.replace("\r", " ").split("\n")).strip() for v in values]
    assert [doc.records[0][h] for h in doc.headers] == expected
