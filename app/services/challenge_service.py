from __future__ import annotations

from typing import Iterable, Sequence

from app.schemas.catalog import Challenge, Portrait
from app.services.assessment_constants import (
    CAPABILITY_TYPE,
    CHALLENGE_CATEGORIES,
    INTERPERSONAL_TYPE,
    SELF_AWARENESS_TYPE,
)

ChallengeKey = tuple[int, int, bool, bool]


def challenge_key(item: Challenge | Portrait) -> ChallengeKey:
    return (item.like_id, item.talent_id, item.like_obvious, item.talent_obvious)


class ChallengeMatcher:
    """按 (喜欢ID, 天赋ID, 喜欢是否明显, 天赋是否明显) 四元组查找挑战与策略。"""

    def __init__(self, challenges: Sequence[Challenge]) -> None:
        self.challenges = list(challenges)

    def match(self, like_id: int, talent_id: int, like_obvious: bool, talent_obvious: bool) -> list[Challenge]:
        key = (like_id, talent_id, like_obvious, talent_obvious)
        return [challenge for challenge in self.challenges if challenge_key(challenge) == key]

    def for_portrait(self, portrait: Portrait) -> list[Challenge]:
        return self.match(*challenge_key(portrait))

    def primary(self) -> list[Challenge]:
        """热爱高潜能象限下的自我认知类挑战，作为首屏展示。"""
        return [
            challenge
            for challenge in self.challenges
            if challenge.like_obvious and challenge.talent_obvious and challenge.type == SELF_AWARENESS_TYPE
        ]

    def more_like(self, challenge: Challenge) -> list[Challenge]:
        """同一显著性组合下的人际协作与能力构建类挑战。"""
        return [
            other
            for other in self.challenges
            if other.type in (INTERPERSONAL_TYPE, CAPABILITY_TYPE)
            and other.like_obvious == challenge.like_obvious
            and other.talent_obvious == challenge.talent_obvious
        ]

    def find(self, challenge_id: int) -> Challenge | None:
        return next((challenge for challenge in self.challenges if challenge.id == challenge_id), None)


def group_by_category(challenges: Iterable[Challenge]) -> dict[str, list[Challenge]]:
    grouped: dict[str, list[Challenge]] = {category: [] for category in CHALLENGE_CATEGORIES.values()}
    for challenge in challenges:
        category = CHALLENGE_CATEGORIES.get(challenge.type)
        if category is not None:
            grouped[category].append(challenge)
    return grouped
