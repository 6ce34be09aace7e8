"""Weightage-based distribution of questions across topics"""

import math
from typing import List, Sequence

from models.schemas import TopicDistribution, TopicWeight


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def distribute(topics: Sequence[TopicWeight], total: int) -> List[TopicDistribution]:
    """
    Split `total` questions across topics in proportion to their weightage.

    Every topic gets at least one question. Whatever the rounding leaves over
    (or overshoots) is added to the single highest-weightage topic, so the
    quotas always add up to `total`. That topic's quota is not clamped and can
    go negative when many zero-weightage topics each claim their minimum.

    Args:
        topics: Topics in display order
        total: Number of questions to plan

    Returns:
        One TopicDistribution per topic, in input order
    """
    if not topics:
        return []

    total_weightage = sum(topic.weightage for topic in topics)

    quotas = []
    for topic in topics:
        if topic.weightage == 0:
            quota = 1
        elif total_weightage == 0:
            quota = math.ceil(total / len(topics))
        else:
            quota = _round_half_up((topic.weightage / total_weightage) * total)
            if quota == 0 and topic.weightage > 0:
                quota = 1
        quotas.append(quota)

    difference = total - sum(quotas)
    if difference != 0:
        # sorted() is stable, so ties keep input order
        ranked = sorted(range(len(topics)), key=lambda idx: topics[idx].weightage, reverse=True)
        quotas[ranked[0]] += difference

    return [
        TopicDistribution(
            topic_id=topic.id,
            topic_name=topic.name,
            weightage=topic.weightage,
            questions_to_generate=quota,
        )
        for topic, quota in zip(topics, quotas)
    ]


def total_from_distribution(distribution: Sequence[TopicDistribution]) -> int:
    """Total number of questions a distribution plans for"""
    return sum(item.questions_to_generate for item in distribution)
