from __future__ import annotations

from typing import Iterable

from app.schemas.assessment import PortraitGroup, PortraitQuadrant
from app.schemas.catalog import Portrait
from app.services.assessment_constants import QUADRANT_LABELS


def classify_portrait(like_obvious: bool, talent_obvious: bool) -> PortraitQuadrant:
    """将 喜欢/天赋 是否明显 交叉映射到四个画像象限之一。"""
    if like_obvious and talent_obvious:
        return PortraitQuadrant.high_passion_high_potential
    if like_obvious:
        return PortraitQuadrant.interest_driven
    if talent_obvious:
        return PortraitQuadrant.ability_efficient
    return PortraitQuadrant.unexplored


def quadrant_label(quadrant: PortraitQuadrant) -> str:
    return QUADRANT_LABELS[quadrant]


def group_by_quadrant(portraits: Iterable[Portrait]) -> list[PortraitGroup]:
    """按每条画像自身的显著性标记分组，四个象限始终全部返回。"""
    buckets: dict[PortraitQuadrant, list[Portrait]] = {quadrant: [] for quadrant in PortraitQuadrant}
    for portrait in portraits:
        buckets[classify_portrait(portrait.like_obvious, portrait.talent_obvious)].append(portrait)
    return [
        PortraitGroup(quadrant=quadrant, label=quadrant_label(quadrant), portraits=items)
        for quadrant, items in buckets.items()
    ]
