"""Tests for identifiers, ContentHash and utf16_length."""

import pytest

from tenx_cards.domain.common.value_objects import (
    CandidateId,
    ContentHash,
    FlashcardId,
    GenerationId,
    utf16_length,
)


class TestContentHash:
    """Test suite for ContentHash."""

    def test_compute_is_sha256_hex(self) -> None:
        digest = ContentHash.compute("hello")

        assert str(digest) == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"

    @pytest.mark.parametrize("value", ["abc", "z" * 64])
    def test_rejects_invalid_value(self, value: str) -> None:
        with pytest.raises(ValueError):
            ContentHash(value)


class TestUtf16Length:
    """Test suite for utf16_length."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("", 0), ("abc", 3), ("zażółć", 6), ("😀", 2), ("a😀b", 4)],
    )
    def test_counts_code_units(self, text: str, expected: int) -> None:
        assert utf16_length(text) == expected


class TestIds:
    """Test suite for typed identifiers."""

    def test_ids_of_different_kinds_never_compare_equal(self) -> None:
        assert FlashcardId(1) != GenerationId(1)
        assert CandidateId(1) != FlashcardId(1)
        assert FlashcardId(1) == FlashcardId(1)

    def test_candidate_id_is_one_based(self) -> None:
        assert int(CandidateId(1)) == 1
        with pytest.raises(ValueError):
            CandidateId(0)

    def test_entity_id_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            FlashcardId(-1)
