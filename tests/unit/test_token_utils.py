#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for token tree traversal utilities."""
import copy

import pytest

from panbridge.ast import Token, TokenType, collect_text, find_tokens, for_each_token, is_token, map_tokens


def _inline_sample():
    return [
        Token("Str", "Hello"),
        Token("Space"),
        Token("Strong", [Token("Emph", [Token("Str", "nested")])]),
        Token("Space"),
        Token("Code", [["", [], []], "print()"]),
    ]


@pytest.mark.unit
class TestToken:
    """Test the token type."""

    def test_enum_tag_stored_as_string(self):
        """Test that a TokenType tag compares equal to a plain tag."""
        assert Token(TokenType.Str, "x") == Token("Str", "x")
        assert Token(TokenType.Space).t == "Space"

    def test_payload_flags(self):
        """Test payload inspection helpers."""
        assert not Token("Space").has_payload
        assert Token("Str", "x").has_payload
        assert Token("Para", []).has_children
        assert not Token("Str", "x").has_children

    def test_is_type(self):
        """Test tag checks with enum and string."""
        token = Token("Emph", [])
        assert token.is_type(TokenType.Emph)
        assert token.is_type("Emph")
        assert not token.is_type(TokenType.Strong)

    def test_is_token(self):
        """Test telling tokens from opaque payload."""
        assert is_token(Token("Space"))
        assert not is_token({"t": "Space"})
        assert not is_token("Space")


@pytest.mark.unit
class TestCollectText:
    """Test plain-text flattening."""

    def test_str_and_space(self):
        """Test the basic case."""
        assert collect_text([Token("Str", "a"), Token("Space"), Token("Str", "b")]) == "a b"

    def test_marks_are_dropped(self):
        """Test that formatting contributes only its content."""
        tokens = [Token("Str", "a"), Token("Space"), Token("Strong", [Token("Emph", [Token("Str", "b")])])]
        assert collect_text(tokens) == "a b"

    def test_empty(self):
        """Test an empty sequence."""
        assert collect_text([]) == ""

    def test_no_separators_inserted(self):
        """Test that adjacent strings are joined directly."""
        assert collect_text([Token("Str", "foo"), Token("Str", "bar")]) == "foobar"

    def test_plain_strings_in_payload_ignored(self):
        """Test that code text and attributes contribute nothing."""
        assert collect_text(_inline_sample()) == "Hello nested "

    def test_link_text_included(self):
        """Test that text nested in a list payload is collected."""
        link = Token("Link", [["", [], []], [Token("Str", "click")], ["http://example.com", ""]])
        assert collect_text([Token("Str", "see"), Token("Space"), link]) == "see click"

    def test_line_breaks_contribute_nothing(self):
        """Test that tokens without payload other than Space are empty."""
        assert collect_text([Token("Str", "a"), Token("SoftBreak"), Token("Str", "b")]) == "ab"

    def test_sample_document(self, sample_ast):
        """Test flattening a parsed document block by block."""
        assert [collect_text([block]) for block in sample_ast.blocks] == ["Intro", "Hello bold link."]


@pytest.mark.unit
class TestForEachToken:
    """Test depth-first visiting."""

    def test_pre_order(self):
        """Test that parents are visited before children in document order."""
        tags = []
        for_each_token(_inline_sample(), lambda tok: tags.append(tok.t))
        assert tags == ["Str", "Space", "Strong", "Emph", "Str", "Space", "Code"]

    def test_visits_every_token_once(self, sample_ast):
        """Test the visit count on a full document."""
        visited = []
        for_each_token(sample_ast.blocks, visited.append)

        assert len(visited) == 11
        assert len({id(tok) for tok in visited}) == len(visited)

    def test_nested_lists(self):
        """Test tokens inside lists of lists, as in BulletList payloads."""
        bullet = Token("BulletList", [[Token("Plain", [Token("Str", "one")])], [Token("Plain", [Token("Str", "two")])]])
        texts = []
        for_each_token([bullet], lambda tok: texts.append(tok.c) if tok.t == "Str" else None)
        assert texts == ["one", "two"]

    def test_dicts_are_opaque(self):
        """Test that tokens inside dictionaries are not visited."""
        tags = []
        for_each_token([Token("Div", [{"inner": Token("Str", "x")}])], lambda tok: tags.append(tok.t))
        assert tags == ["Div"]

    def test_empty(self):
        """Test visiting nothing."""
        visited = []
        for_each_token([], visited.append)
        assert visited == []


@pytest.mark.unit
class TestMapTokens:
    """Test tree rebuilding."""

    def test_identity_is_deep_equal(self, sample_ast):
        """Test that an identity transform rebuilds an equal tree."""
        assert map_tokens(sample_ast.blocks, lambda tok: tok) == sample_ast.blocks

    def test_input_not_mutated(self):
        """Test that the original tree is left unchanged."""
        tokens = _inline_sample()
        snapshot = copy.deepcopy(tokens)

        def upper(tok):
            if tok.t == "Str":
                return Token("Str", tok.c.upper())
            return tok

        result = map_tokens(tokens, upper)

        assert tokens == snapshot
        assert collect_text(result) == "HELLO NESTED "

    def test_parents_are_copied(self):
        """Test that a token whose payload is rebuilt is a new object."""
        tokens = [Token("Emph", [Token("Str", "x")])]
        result = map_tokens(tokens, lambda tok: tok)
        assert result[0] is not tokens[0]

    def test_transform_sees_children_of_its_result(self):
        """Test that replacement payloads are themselves transformed."""
        seen = []

        def replace_emph(tok):
            seen.append(tok.t)
            if tok.t == "Emph":
                return Token("Strong", [Token("Str", "new")])
            return tok

        result = map_tokens([Token("Emph", [Token("Str", "old")])], replace_emph)

        assert seen == ["Emph", "Str"]
        assert result == [Token("Strong", [Token("Str", "new")])]

    def test_header_promotion(self, sample_ast):
        """Test rewriting header levels across a document."""

        def promote(tok):
            if tok.t == "Header":
                return Token("Header", [tok.c[0] + 1, *tok.c[1:]])
            return tok

        result = map_tokens(sample_ast.blocks, promote)
        assert result[0].c[0] == 2
        assert sample_ast.blocks[0].c[0] == 1

    def test_idempotent_transform(self):
        """Test that applying an idempotent transform twice changes nothing."""

        def drop_emph(tok):
            return Token("Span", [["", [], []], tok.c]) if tok.t == "Emph" else tok

        once = map_tokens(_inline_sample(), drop_emph)
        twice = map_tokens(once, drop_emph)
        assert once == twice

    def test_non_token_values_preserved(self):
        """Test that primitives and dictionaries pass through."""
        tokens = [Token("Div", [{"k": "v"}, 3, "text"])]
        assert map_tokens(tokens, lambda tok: tok) == tokens


@pytest.mark.unit
class TestFindTokens:
    """Test searching by tag."""

    def test_find_nested(self, sample_ast):
        """Test finding every Str token in a document."""
        strs = find_tokens(sample_ast.blocks, TokenType.Str)
        assert [tok.c for tok in strs] == ["Intro", "Hello", "bold", "link", "."]

    def test_find_none(self, sample_ast):
        """Test a tag that does not occur."""
        assert find_tokens(sample_ast.blocks, "Table") == []
