"""Tests for document assembly and the parse entry points."""

from __future__ import annotations

import pytest

from inidoc import ParseError, parse, try_parse
from inidoc.core.models import (
    Document,
    ErrorKind,
    KeyValuePair,
    ParseOptions,
    Section,
    TokenType,
)
from inidoc.parsers.builder import DocumentBuilder, build_document
from inidoc.parsers.types import Token

# ===================================================================
# Helpers
# ===================================================================


def _tok(ttype: TokenType, value: str = "", line: int = 1, column: int = 1) -> Token:
    return Token(type=ttype, value=value, line=line, column=column)


def _shape(doc: Document):
    """(section name, [(key, value), ...]) for every section."""
    return [(s.name, [(kv.key, kv.value) for kv in s.pairs]) for s in doc.sections]


# ===================================================================
# Documents
# ===================================================================


class TestParseDocuments:
    """Section and pair assembly for valid input."""

    def test_empty_input_has_one_unnamed_section(self):
        doc = parse("t", "")
        assert doc.name == "t"
        assert _shape(doc) == [("", [])]

    def test_preamble_only(self):
        doc = parse("t", "key=abcdefg\n")
        assert _shape(doc) == [("", [("key", "abcdefg")])]

    def test_empty_preamble_is_not_materialized(self):
        doc = parse("t", "[user]\nname=Adam\n")
        assert _shape(doc) == [("user", [("name", "Adam")])]

    def test_preamble_and_two_sections(self, sample_text):
        doc = parse("t", sample_text)
        assert _shape(doc) == [
            ("", [("key", "abcdefg")]),
            ("user", [("name", "Adam Eury"), ("age", "35")]),
            ("address", [("street", "1800 Test Lane"), ("city", "Testy")]),
        ]

    def test_trailing_empty_section_is_kept(self):
        doc = parse("t", "a=1\n[last]\n")
        assert doc.section_names() == ["", "last"]
        assert doc.section("last").pairs == ()

    def test_header_only_document(self):
        assert _shape(parse("t", "[a]\n")) == [("a", [])]

    def test_duplicate_keys_are_all_retained(self):
        doc = parse("t", "[s]\nk=1\nk=2\n")
        section = doc.section("s")
        assert section.keys() == ["k", "k"]
        assert section.get("k") == "2"

    def test_repeated_section_names_stay_separate(self):
        doc = parse("t", "[s]\na=1\n[s]\nb=2\n")
        assert _shape(doc) == [("s", [("a", "1")]), ("s", [("b", "2")])]

    def test_windows_line_endings_keep_carriage_return(self):
        doc = parse("t", "k=v\r\n")
        assert doc.sections[0].pairs[0].value == "v\r"

    def test_parse_is_repeatable(self, sample_text):
        assert parse("t", sample_text) == parse("t", sample_text)


class TestEmptySections:
    """Headers that collect no pairs before the next header."""

    def test_dropped_by_default(self):
        doc = parse("t", "[a]\n[b]\nk=v\n")
        assert doc.section_names() == ["b"]

    def test_kept_with_option(self):
        doc = parse("t", "[a]\n[b]\nk=v\n", ParseOptions(keep_empty_sections=True))
        assert _shape(doc) == [("a", []), ("b", [("k", "v")])]

    def test_option_never_keeps_an_empty_preamble(self):
        doc = parse("t", "[a]\nk=v\n", ParseOptions(keep_empty_sections=True))
        assert doc.section_names() == ["a"]


class TestDocumentModel:
    def test_frozen(self):
        doc = parse("t", "k=v\n")
        with pytest.raises(Exception):
            doc.name = "other"  # type: ignore[misc]

    def test_sections_and_pairs_cannot_be_changed_in_place(self):
        doc = parse("t", "k=v\n")
        with pytest.raises(AttributeError):
            doc.sections.append(doc.sections[0])  # type: ignore[attr-defined]
        with pytest.raises(AttributeError):
            doc.sections[0].pairs.clear()  # type: ignore[attr-defined]
        with pytest.raises(TypeError):
            doc.sections[0].pairs[0] = KeyValuePair(key="x", value="y")  # type: ignore[index]
        assert _shape(doc) == [("", [("k", "v")])]

    def test_wire_field_names(self):
        doc = Document(name="t", sections=[Section(name="s", pairs=[KeyValuePair(key="k", value="v")])])
        dumped = doc.model_dump(mode="json", by_alias=True)
        assert dumped == {
            "name": "t",
            "sections": [{"name": "s", "keyValuePairs": [{"key": "k", "value": "v"}]}],
        }

    def test_section_accepts_wire_name(self):
        s = Section.model_validate({"name": "s", "keyValuePairs": [{"key": "k", "value": "v"}]})
        assert s.get("k") == "v"
        assert s.get("missing", "d") == "d"

    def test_pair_count(self, sample_text):
        assert parse("t", sample_text).pair_count() == 5


# ===================================================================
# Errors
# ===================================================================


class TestParseErrors:
    """Malformed input is reported, never returned as a shorter document."""

    def test_unclosed_section(self):
        with pytest.raises(ParseError) as exc:
            parse("t", "[user\nname=x\n")
        assert exc.value.kind == ErrorKind.UNCLOSED_SECTION
        assert (exc.value.line, exc.value.column) == (1, 6)

    def test_value_without_newline(self):
        with pytest.raises(ParseError) as exc:
            parse("t", "key=abc")
        assert exc.value.kind == ErrorKind.UNEXPECTED_END_OF_INPUT

    def test_error_after_valid_sections(self, sample_text):
        with pytest.raises(ParseError) as exc:
            parse("t", sample_text + "[broken\n")
        assert exc.value.line == 10

    def test_error_string_includes_position(self):
        with pytest.raises(ParseError) as exc:
            parse("app", "ke y=1\n")
        assert str(exc.value).startswith("app:1:3: invalid key")

    def test_skip_policy_is_not_comment_support(self):
        with pytest.raises(ParseError) as exc:
            parse("t", "# note\n[a]\nk=v\n")
        assert exc.value.kind == ErrorKind.UNEXPECTED_CHARACTER

        # "note" still reads as a key once "#" is skipped
        with pytest.raises(ParseError) as exc:
            parse("t", "# note\n[a]\nk=v\n", ParseOptions(stray_characters="skip"))
        assert exc.value.kind == ErrorKind.UNASSIGNED_KEY

    def test_skip_policy_matches_stripped_input(self):
        opts = ParseOptions(stray_characters="skip")
        assert parse("t", "[a]\n;;k=v\n", opts) == parse("t", "[a]\nk=v\n")


class TestTryParse:
    def test_success(self):
        result = try_parse("t", "k=v\n")
        assert result.ok
        assert result.error is None
        assert result.document.sections[0].get("k") == "v"

    def test_failure(self):
        result = try_parse("t", "[x")
        assert not result.ok
        assert result.document is None
        assert result.error.kind == ErrorKind.UNCLOSED_SECTION
        assert result.error.name == "t"


# ===================================================================
# Hand-built token streams
# ===================================================================


class TestBuilderStreams:
    """Streams the bundled lexer never produces."""

    def test_dangling_key_before_another_key(self):
        stream = [_tok(TokenType.KEY, "a"), _tok(TokenType.KEY, "b", column=3)]
        with pytest.raises(ParseError) as exc:
            build_document("t", stream)
        assert exc.value.kind == ErrorKind.DANGLING_KEY
        assert "'a'" in exc.value.message

    def test_dangling_key_before_section(self):
        stream = [_tok(TokenType.KEY, "a"), _tok(TokenType.SECTION_NAME, "s")]
        with pytest.raises(ParseError) as exc:
            build_document("t", stream)
        assert exc.value.kind == ErrorKind.DANGLING_KEY

    def test_dangling_key_at_eof(self):
        stream = [_tok(TokenType.KEY, "a"), _tok(TokenType.EOF)]
        with pytest.raises(ParseError) as exc:
            build_document("t", stream)
        assert exc.value.kind == ErrorKind.DANGLING_KEY

    def test_orphan_value(self):
        with pytest.raises(ParseError) as exc:
            build_document("t", [_tok(TokenType.VALUE, "v")])
        assert exc.value.kind == ErrorKind.ORPHAN_VALUE

    def test_error_token_is_raised(self):
        err = Token(
            type=TokenType.ERROR,
            value="invalid key",
            line=2,
            column=4,
            error_kind=ErrorKind.INVALID_KEY,
        )
        with pytest.raises(ParseError) as exc:
            build_document("t", [err])
        assert exc.value.kind == ErrorKind.INVALID_KEY
        assert (exc.value.line, exc.value.column) == (2, 4)

    def test_stream_without_eof(self):
        with pytest.raises(RuntimeError):
            build_document("t", [_tok(TokenType.KEY, "a"), _tok(TokenType.VALUE, "v")])

    def test_structural_tokens_are_ignored(self):
        stream = [
            _tok(TokenType.SECTION_OPEN, "["),
            _tok(TokenType.SECTION_NAME, "s"),
            _tok(TokenType.SECTION_CLOSE, "]"),
            _tok(TokenType.KEY, "k"),
            _tok(TokenType.SEPARATOR, "="),
            _tok(TokenType.VALUE, "v"),
            _tok(TokenType.EOF),
        ]
        assert _shape(build_document("t", stream)) == [("s", [("k", "v")])]

    def test_feed_after_finish(self):
        builder = DocumentBuilder("t")
        assert builder.feed(_tok(TokenType.EOF))
        with pytest.raises(RuntimeError):
            builder.feed(_tok(TokenType.EOF))
