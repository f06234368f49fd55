"""
Ranking
Orders scored candidates by total score.
"""

from propscore.schemas.results import PropertyScore


def rank_scores(scores: list[PropertyScore]) -> list[PropertyScore]:
    """
    Sorts scores descending by total_score and assigns rank 1..n.

    The sort is stable, so tied scores keep their input order.
    Returns copies; the input scores are left untouched.
    """
    ordered = sorted(scores, key=lambda s: s.total_score, reverse=True)
    return [
        score.model_copy(update={"rank": position})
        for position, score in enumerate(ordered, start=1)
    ]
