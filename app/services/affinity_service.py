from __future__ import annotations

import random
from typing import Iterable, Mapping, Optional, Sequence

from app.core.logger import logger
from app.schemas.assessment import AffinityBreakdown, AnalysisCounts
from app.schemas.catalog import MajorElementAnalysis, MajorScore, Question
from app.services.assessment_constants import (
    NEGATIVE_ANALYSIS_TYPES,
    NEGATIVE_GROUP,
    POSITIVE_ANALYSIS_TYPES,
    POSITIVE_GROUP,
    UNCATEGORIZED_GROUP,
)


def _sum_present(*values: Optional[float]) -> float:
    return sum(value for value in values if value is not None)


def breakdown(major: MajorScore) -> AffinityBreakdown:
    """展示预计算的热爱能量，score 原样返回，不做重新计算。"""
    return AffinityBreakdown(
        score=major.score,
        lexue_score=major.lexue_score,
        shanxue_score=major.shanxue_score,
        yanxue_deduction=major.yanxue_deduction,
        tiaozhan_deduction=major.tiaozhan_deduction,
        positive_total=_sum_present(major.lexue_score, major.shanxue_score),
        negative_total=_sum_present(major.yanxue_deduction, major.tiaozhan_deduction),
    )


def count_items(analyses: Iterable[MajorElementAnalysis]) -> AnalysisCounts:
    positive = negative = 0
    for analysis in analyses:
        if analysis.type in POSITIVE_ANALYSIS_TYPES:
            positive += 1
        elif analysis.type in NEGATIVE_ANALYSIS_TYPES:
            negative += 1
    return AnalysisCounts(positive=positive, negative=negative)


def group_analyses(analyses: Sequence[MajorElementAnalysis]) -> dict[str, list[MajorElementAnalysis]]:
    """按展示分组归类：乐学/善学 为积极助力，厌学/阻学 为潜在挑战，其余按原类型。"""
    grouped: dict[str, list[MajorElementAnalysis]] = {}
    for analysis in analyses:
        if analysis.type in POSITIVE_ANALYSIS_TYPES:
            group = POSITIVE_GROUP
        elif analysis.type in NEGATIVE_ANALYSIS_TYPES:
            group = NEGATIVE_GROUP
        else:
            group = analysis.type or UNCATEGORIZED_GROUP
        grouped.setdefault(group, []).append(analysis)
    return {group: grouped[group] for group in sorted(grouped)}


class AffinityScorer:
    """热爱能量的实时计分，所有快速测评入口共用，题量由参数决定。"""

    def __init__(
        self,
        *,
        question_count: int = 8,
        value_min: float = -2.0,
        value_max: float = 2.0,
    ) -> None:
        if value_max <= value_min:
            raise ValueError("value_max 必须大于 value_min")
        self.question_count = question_count
        self.value_min = value_min
        self.value_max = value_max

    def draw_questions(self, questions: Sequence[Question], rng: Optional[random.Random] = None) -> list[Question]:
        """随机抽取本次测评的题目，不放回。"""
        size = min(self.question_count, len(questions))
        return (rng or random).sample(list(questions), size)

    def score(
        self,
        answers: Mapping[int, float],
        question_ids: Optional[Sequence[int]] = None,
    ) -> Optional[float]:
        """计算热爱能量，答题不完整时返回 None。

        Args:
            answers: 题目ID到选项分值的映射。
            question_ids: 本次抽取的题目ID；提供时只统计这些题目，去重后不少于题量且必须全部作答。

        Returns:
            0-1 之间的热爱能量；答案为空、题量不足或有题目未作答时返回 None。
        """
        if question_ids is not None:
            unique_ids = list(dict.fromkeys(question_ids))
            if not unique_ids or len(unique_ids) < self.question_count:
                logger.info(f"快速测评题量不足 {len(unique_ids)}/{self.question_count}，暂不计分")
                return None
            missing = [question_id for question_id in unique_ids if question_id not in answers]
            if missing:
                logger.info(f"快速测评尚有 {len(missing)} 题未作答，暂不计分")
                return None
            values = [answers[question_id] for question_id in unique_ids]
        else:
            values = list(answers.values())
            if not values or len(values) < self.question_count:
                logger.info(f"快速测评仅作答 {len(values)}/{self.question_count} 题，暂不计分")
                return None

        average = sum(values) / len(values)
        energy = (average - self.value_min) / (self.value_max - self.value_min)
        return min(1.0, max(0.0, energy))
