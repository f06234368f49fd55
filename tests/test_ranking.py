"""
propscore tests - Ranking
"""

import sys
sys.path.insert(0, ".")

from datetime import datetime, timezone

from propscore.domain.ranking import rank_scores
from propscore.schemas.results import PropertyScore

AS_OF = datetime(2025, 6, 1, tzinfo=timezone.utc)


def score(property_id: str, total: int) -> PropertyScore:
    return PropertyScore(property_id=property_id, total_score=total, calculated_at=AS_OF)


class TestRanking:
    """rank_scores tests"""

    def test_sorted_descending_with_contiguous_ranks(self):
        ranked = rank_scores([score("a", 40), score("b", 90), score("c", 65)])

        assert [s.property_id for s in ranked] == ["b", "c", "a"]
        assert [s.rank for s in ranked] == [1, 2, 3]

    def test_ties_keep_input_order(self):
        ranked = rank_scores([
            score("first", 70),
            score("top", 95),
            score("second", 70),
            score("third", 70),
        ])

        assert [s.property_id for s in ranked] == ["top", "first", "second", "third"]
        assert [s.rank for s in ranked] == [1, 2, 3, 4]

    def test_input_untouched(self):
        scores = [score("a", 10), score("b", 20)]

        rank_scores(scores)

        assert [s.property_id for s in scores] == ["a", "b"]
        assert all(s.rank is None for s in scores)

    def test_empty(self):
        assert rank_scores([]) == []
