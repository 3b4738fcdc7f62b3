"""
Fragment codec tests.
"""

import pytest

from digibook.reader import hashcodec, ForeignBookId, MalformedHash
from digibook.schemas import NavigationRequest


class TestDecode:
    """Test fragment decoding."""

    def test_decode_full_fragment(self):
        assert hashcodec.decode("#h5pbookid=42&chapter=2&section=intro") == {
            "h5pbookid": "42",
            "chapter": "2",
            "section": "intro",
        }

    def test_decode_without_leading_hash(self):
        assert hashcodec.decode("h5pbookid=42&chapter=0") == {"h5pbookid": "42", "chapter": "0"}

    def test_decode_key_without_value(self):
        assert hashcodec.decode("#chapter&h5pbookid=1") == {"chapter": None, "h5pbookid": "1"}

    def test_decode_empty(self):
        assert hashcodec.decode("") == {}
        assert hashcodec.decode("#") == {}
        assert hashcodec.decode(None) == {}

    def test_decode_malformed_never_raises(self):
        assert hashcodec.decode("&&=&==x&a=b") == {"a": "b"}
        assert hashcodec.decode(42) == {}

    def test_decode_keeps_extra_equals_in_value(self):
        assert hashcodec.decode("#section=a=b") == {"section": "a=b"}


class TestEncode:
    """Test fragment building."""

    def test_encode_without_section(self):
        request = NavigationRequest(h5pbookid=42, chapter=1)
        assert hashcodec.encode(request) == "h5pbookid=42&chapter=1"

    def test_encode_with_section(self):
        request = NavigationRequest(h5pbookid=42, chapter=1, section="quiz-3")
        assert hashcodec.encode(request) == "h5pbookid=42&chapter=1&section=quiz-3"

    def test_to_fragment(self):
        request = NavigationRequest(h5pbookid=7, chapter=0)
        assert hashcodec.to_fragment(request) == "#h5pbookid=7&chapter=0"

    @pytest.mark.parametrize("section", [None, "5", "h5p-section-abc"])
    def test_round_trip(self, section):
        request = NavigationRequest(h5pbookid=42, chapter=3, section=section)
        decoded = hashcodec.decode(hashcodec.encode(request))
        assert decoded["h5pbookid"] == "42"
        assert decoded["chapter"] == "3"
        assert decoded.get("section") == section


class TestBookId:
    """Test the book id check."""

    def test_belongs(self):
        assert hashcodec.belongs_to_this_book({"h5pbookid": "42"}, 42)

    def test_loose_numeric_equality(self):
        assert hashcodec.belongs_to_this_book({"h5pbookid": " 42"}, 42)

    def test_other_book(self):
        assert not hashcodec.belongs_to_this_book({"h5pbookid": "99"}, 42)

    def test_missing_or_garbage(self):
        assert not hashcodec.belongs_to_this_book({}, 42)
        assert not hashcodec.belongs_to_this_book({"h5pbookid": None}, 42)
        assert not hashcodec.belongs_to_this_book({"h5pbookid": "forty-two"}, 42)

    def test_has_book_id(self):
        assert hashcodec.has_book_id({"h5pbookid": "99"})
        assert not hashcodec.has_book_id({"chapter": "1"})
        assert not hashcodec.has_book_id({"h5pbookid": ""})


class TestParseRequest:
    """Test turning fragments into requests."""

    def test_parse_valid(self):
        request = hashcodec.parse_request(hashcodec.decode("#h5pbookid=42&chapter=2&section=s1"), 42)
        assert request.chapter == 2
        assert request.section == "s1"
        assert request.h5pbookid == 42
        assert request.redirect_from_component is False

    def test_parse_empty_section_is_none(self):
        request = hashcodec.parse_request(hashcodec.decode("#h5pbookid=42&chapter=2&section="), 42)
        assert request.section is None

    def test_parse_foreign_book(self):
        with pytest.raises(ForeignBookId):
            hashcodec.parse_request({"h5pbookid": "99", "chapter": "1"}, 42)

    def test_parse_missing_chapter(self):
        with pytest.raises(MalformedHash):
            hashcodec.parse_request({"h5pbookid": "42"}, 42)

    def test_parse_non_numeric_chapter(self):
        with pytest.raises(MalformedHash):
            hashcodec.parse_request({"h5pbookid": "42", "chapter": "two"}, 42)

    def test_parse_negative_chapter(self):
        with pytest.raises(MalformedHash):
            hashcodec.parse_request({"h5pbookid": "42", "chapter": "-1"}, 42)


class TestSameTarget:
    """Test field-by-field fragment comparison."""

    def test_key_order_irrelevant(self):
        request = NavigationRequest(h5pbookid=42, chapter=1, section="5")
        decoded = hashcodec.decode("#section=5&chapter=1&h5pbookid=42")
        assert hashcodec.is_same_target(decoded, request)

    def test_different_section(self):
        request = NavigationRequest(h5pbookid=42, chapter=1, section="5")
        assert not hashcodec.is_same_target(hashcodec.decode("#h5pbookid=42&chapter=1&section=6"), request)

    def test_missing_section_vs_section(self):
        request = NavigationRequest(h5pbookid=42, chapter=1, section="5")
        assert not hashcodec.is_same_target(hashcodec.decode("#h5pbookid=42&chapter=1"), request)

    def test_empty_fragment(self):
        request = NavigationRequest(h5pbookid=42, chapter=0)
        assert not hashcodec.is_same_target({}, request)

    def test_ignores_origin_flag(self):
        request = NavigationRequest(h5pbookid=42, chapter=0, redirect_from_component=True)
        assert hashcodec.is_same_target(hashcodec.decode("#h5pbookid=42&chapter=0"), request)
