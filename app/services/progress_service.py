from __future__ import annotations

from typing import Mapping, Optional, Sequence

from app.schemas.assessment import DimensionProgress, MilestoneEvent
from app.schemas.catalog import Question
from app.services.assessment_constants import LIKE_TYPE


def sort_questions(questions: Sequence[Question], dimension_order: Sequence[str]) -> list[Question]:
    """按 维度顺序 -> like 优先 -> 题目ID 排序，未知维度排在最后。"""
    positions = {dimension: index for index, dimension in enumerate(dimension_order)}
    unknown = len(positions)
    return sorted(
        questions,
        key=lambda question: (
            positions.get(question.dimension, unknown),
            0 if question.type == LIKE_TYPE else 1,
            question.id,
        ),
    )


class ProgressTracker:
    """根据题库与当前答案计算作答进度及维度解锁事件。"""

    def __init__(
        self,
        questions: Sequence[Question],
        answers: Mapping[int, float],
        *,
        dimension_order: Sequence[str],
        block_size: int = 24,
        matched_major_step: int = 20,
    ) -> None:
        self.questions = list(questions)
        self.answers = answers
        self.dimension_order = list(dimension_order)
        self.block_size = block_size
        self.matched_major_step = matched_major_step

    @property
    def total(self) -> int:
        return len(self.questions)

    def answered_count(self) -> int:
        return len(self.answers)

    def _dimension_counts(self, dimension: str) -> tuple[int, int]:
        in_dimension = [question for question in self.questions if question.dimension == dimension]
        answered = sum(1 for question in in_dimension if question.id in self.answers)
        return answered, len(in_dimension)

    def dimension_progress(self, dimension: str) -> float:
        answered, total = self._dimension_counts(dimension)
        if total == 0:
            return 0.0
        return answered / total

    def is_dimension_complete(self, dimension: str) -> bool:
        answered, total = self._dimension_counts(dimension)
        return total > 0 and answered == total

    def dimension_breakdown(self) -> list[DimensionProgress]:
        breakdown: list[DimensionProgress] = []
        for index, dimension in enumerate(self.dimension_order):
            answered, total = self._dimension_counts(dimension)
            breakdown.append(
                DimensionProgress(
                    dimension=dimension,
                    answered=answered,
                    total=total,
                    progress=(answered / total) * 100 if total > 0 else 0.0,
                    completed=total > 0 and answered == total,
                    start_index=self.dimension_start_index(index),
                )
            )
        return breakdown

    def completed_dimensions(self) -> int:
        return sum(1 for dimension in self.dimension_order if self.is_dimension_complete(dimension))

    def matched_majors(self) -> int:
        return self.answered_count() // self.matched_major_step

    def percent(self) -> float:
        if self.total == 0:
            return 0.0
        return self.answered_count() / self.total * 100

    def is_complete(self) -> bool:
        return self.total > 0 and all(question.id in self.answers for question in self.questions)

    def first_unanswered_index(self, sorted_questions: Sequence[Question]) -> int:
        for index, question in enumerate(sorted_questions):
            if question.id not in self.answers:
                return index
        return 0

    def unanswered_indices(self, sorted_questions: Sequence[Question]) -> list[int]:
        return [index for index, question in enumerate(sorted_questions) if question.id not in self.answers]

    def dimension_start_index(self, dimension_index: int) -> int:
        return dimension_index * self.block_size

    def milestone(self) -> Optional[MilestoneEvent]:
        """当前作答数恰好跨过一个维度边界时返回解锁事件。

        调用方只应在新增答案（而非覆盖旧答案）之后调用，避免重复触发。
        """
        count = self.answered_count()
        if count == 0 or count % self.block_size != 0 or count >= self.total:
            return None
        dimension_index = count // self.block_size - 1
        if dimension_index >= len(self.dimension_order):
            return None
        return MilestoneEvent(
            dimension=self.dimension_order[dimension_index],
            dimension_index=dimension_index,
            answered_count=count,
            completed_dimensions=self.completed_dimensions(),
            matched_majors=self.matched_majors(),
        )

    def is_midpoint(self) -> bool:
        return self.total > 0 and self.answered_count() == self.total // 2
