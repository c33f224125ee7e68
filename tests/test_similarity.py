"""
Tests for term-vector cosine similarity and similar-product ranking
"""
import itertools
import math
from collections import Counter

import pytest

from app.domain.services.similarity_svc import cosine_similarity, magnitude, similar
from app.domain.services.term_vector import build_vector, similarity_fields
from conftest import make_product


class TestCosineSimilarity:

    @pytest.mark.unit
    def test_identical_vectors(self):
        v = Counter({"a": 1, "b": 1})
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    @pytest.mark.unit
    def test_disjoint_vectors(self):
        assert cosine_similarity(Counter({"a": 1}), Counter({"b": 3})) == 0.0

    @pytest.mark.unit
    def test_empty_vector_is_zero(self):
        assert cosine_similarity(Counter(), Counter({"a": 1})) == 0.0
        assert cosine_similarity(Counter(), Counter()) == 0.0

    @pytest.mark.unit
    def test_counts_weight_the_dot_product(self):
        a = Counter({"wireless": 2, "bluetooth": 1, "headphones": 1, "audio": 1})
        b = Counter({"bluetooth": 1, "speaker": 1, "audio": 1, "wireless": 1})
        assert magnitude(a) == pytest.approx(math.sqrt(7))
        assert cosine_similarity(a, b) == pytest.approx(4 / (math.sqrt(7) * 2))

    @pytest.mark.unit
    def test_symmetric_over_catalog(self, catalog):
        vectors = [build_vector(similarity_fields(p)) for p in catalog]
        for a, b in itertools.combinations(vectors, 2):
            assert cosine_similarity(a, b) == cosine_similarity(b, a)


class TestSimilar:

    @pytest.mark.unit
    def test_ranks_by_similarity(self, headphones, catalog):
        results = similar(headphones, catalog)
        assert [r.product_id for r in results] == ["C", "D"]
        assert results[0].score == pytest.approx(4 / (math.sqrt(7) * 2))
        assert results[1].score == pytest.approx(2 / (math.sqrt(7) * math.sqrt(3)))

    @pytest.mark.unit
    def test_target_never_included(self, headphones, catalog):
        assert "A" not in [r.product_id for r in similar(headphones, catalog)]

    @pytest.mark.unit
    def test_no_overlap_gives_nothing(self, headphones, mouse):
        assert similar(headphones, [mouse]) == []

    @pytest.mark.unit
    def test_threshold_is_strict(self):
        target = make_product("T", "x")
        other = make_product("O", "x y z w")  # cosine exactly 0.5
        assert similar(target, [other], threshold=0.5) == []
        assert [r.product_id for r in similar(target, [other], threshold=0.49)] == ["O"]

    @pytest.mark.unit
    def test_empty_target_text(self, catalog):
        target = make_product("T", "!!!")
        assert similar(target, catalog) == []

    @pytest.mark.unit
    def test_truncates_to_ten_with_id_tiebreak(self):
        target = make_product("T", "desk lamp")
        others = [make_product(f"p{i:02d}", "desk lamp") for i in range(12, 0, -1)]
        results = similar(target, others)
        assert len(results) == 10
        assert [r.product_id for r in results] == [f"p{i:02d}" for i in range(1, 11)]
