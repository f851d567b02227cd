"""
Test suite for cosine similarity and ranking.

System role: Verification of retrieval ranking
"""

import pytest

from knowledge_chat.core.similarity import cosine_similarity, rank
from knowledge_chat.models.knowledge import KnowledgeItem

QUERY = [1.0, 0.0]


class TestCosineSimilarity:
    """Test suite for cosine_similarity()."""

    def test_identical_vectors_should_score_one(self) -> None:
        assert cosine_similarity([1, 0], [1, 0]) == pytest.approx(1.0)

    def test_orthogonal_vectors_should_score_zero(self) -> None:
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)

    def test_opposite_vectors_should_score_minus_one(self) -> None:
        assert cosine_similarity([1, 2], [-1, -2]) == pytest.approx(-1.0)

    @pytest.mark.parametrize(
        "a, b",
        [
            ([1, 0], [1]),
            ([], []),
            (None, [1, 0]),
            ([0, 0], [1, 0]),
            (["x", "y"], [1, 0]),
        ],
    )
    def test_degenerate_inputs_should_score_zero(self, a, b) -> None:
        """Test mismatch, empty, missing, zero-norm and non-numeric vectors."""
        assert cosine_similarity(a, b) == 0.0

    def test_score_should_ignore_magnitude(self) -> None:
        assert cosine_similarity([3, 4], [6, 8]) == pytest.approx(1.0)


class TestRank:
    """Test suite for rank()."""

    def test_rank_should_sort_descending_and_apply_threshold(self, make_item) -> None:
        """Test the 0.2 candidate is dropped and the rest ordered."""
        # Arrange
        candidates = [make_item(s) for s in [0.9, 0.5, 0.2, 0.75, 0.31]]

        # Act
        results = rank(QUERY, candidates)

        # Assert
        assert [r.score for r in results] == [0.9, 0.75, 0.5, 0.31]

    def test_rank_should_return_at_most_top_k(self, make_item) -> None:
        # Arrange
        candidates = [make_item(s) for s in [0.95, 0.9, 0.85, 0.8, 0.75, 0.7, 0.65]]

        # Act
        results = rank(QUERY, candidates, top_k=5)

        # Assert
        assert len(results) == 5
        assert results[0].score == 0.95
        assert results[-1].score == 0.75

    def test_rank_should_threshold_after_top_k(self, make_item) -> None:
        """Test top-k is taken before thresholding, so fewer than k may remain."""
        # Arrange
        candidates = [make_item(s) for s in [0.9, 0.1, 0.05]]

        # Act
        results = rank(QUERY, candidates, top_k=2)

        # Assert
        assert [r.score for r in results] == [0.9]

    def test_rank_should_exclude_score_equal_to_threshold(self) -> None:
        # Arrange
        at_threshold = KnowledgeItem(id="at", content="0.6", embedding=[3.0, 4.0])
        above = KnowledgeItem(id="above", content="0.8", embedding=[4.0, 3.0])

        # Act
        results = rank(QUERY, [at_threshold, above], threshold=0.6)

        # Assert
        assert [r.id for r in results] == ["above"]

    def test_rank_should_round_scores_to_four_decimals(self, make_item) -> None:
        # Act
        results = rank(QUERY, [make_item(0.623456789)])

        # Assert
        assert results[0].score == 0.6235

    def test_rank_should_keep_candidate_order_on_ties(self, make_item) -> None:
        # Arrange
        first = make_item(0.8, content="first")
        second = make_item(0.8, content="second")

        # Act
        results = rank(QUERY, [first, second])

        # Assert
        assert [r.content for r in results] == ["first", "second"]

    def test_rank_should_tag_results_and_carry_metadata(self, make_item) -> None:
        # Arrange
        item = make_item(0.9)

        # Act
        result = rank(QUERY, [item])[0]

        # Assert
        assert result.type == "knowledge_base"
        assert result.id == item.id
        assert result.metadata["source_name"] == "kb.txt"

    def test_rank_should_treat_mismatched_embeddings_as_unrelated(self, make_item) -> None:
        # Arrange
        odd = KnowledgeItem(id="odd", content="three dims", embedding=[1.0, 0.0, 0.0])

        # Act
        results = rank(QUERY, [odd, make_item(0.9)])

        # Assert
        assert all(r.id != "odd" for r in results)
        assert len(results) == 1

    def test_rank_should_return_empty_for_no_candidates(self) -> None:
        assert rank(QUERY, []) == []
