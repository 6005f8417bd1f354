from __future__ import annotations

import json
import random
from typing import Mapping, Optional, Sequence

from app.core.config import Config, config
from app.core.logger import logger
from app.repositories.catalog import CatalogRepository
from app.repositories.storage import KeyValueStore
from app.schemas.assessment import (
    AnswerRecordResponse,
    ClassifiedElement,
    ElementAnswer,
    MajorAffinityResponse,
    PortraitDetail,
    PortraitGroup,
    PortraitQuadrant,
    ProgressResponse,
    SortedQuestion,
)
from app.schemas.catalog import Challenge, Question, ReportBundle
from app.services import affinity_service
from app.services.affinity_service import AffinityScorer
from app.services.answer_store import Answers, AnswerStore
from app.services.assessment_constants import LIKE_TYPE, MAJOR_QUIZ_RESULTS_KEY, TALENT_TYPE
from app.services.challenge_service import ChallengeMatcher, group_by_category
from app.services.element_classifier import ElementClassifier, element_answers
from app.services.errors import CatalogUnavailableError, UnknownQuestionError
from app.services.portrait_service import classify_portrait, group_by_quadrant
from app.services.progress_service import ProgressTracker, sort_questions


class AssessmentService:
    """测评引擎的统一入口：记录答案、计算进度、画像与挑战匹配、热爱能量计分。

    所有操作同步完成；依赖数据缺失时返回 None 或空结果，而不是抛出未处理异常。
    """

    def __init__(
        self,
        store: KeyValueStore,
        catalog: CatalogRepository,
        *,
        settings: Config = config,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.settings = settings
        self.answers = AnswerStore(store)
        self.scorer = AffinityScorer(
            question_count=settings.quick_quiz_size,
            value_min=settings.option_value_min,
            value_max=settings.option_value_max,
        )

    # ------------------------------------------------------------------
    # 数据访问
    # ------------------------------------------------------------------

    def questions(self) -> Optional[list[Question]]:
        return self.catalog.load_questions()

    def report(self) -> Optional[ReportBundle]:
        return self.catalog.load_report()

    def _tracker(self, questions: Sequence[Question], answers: Mapping[int, float]) -> ProgressTracker:
        return ProgressTracker(
            questions,
            answers,
            dimension_order=self.settings.dimension_order,
            block_size=self.settings.milestone_block_size,
            matched_major_step=self.settings.matched_major_step,
        )

    # ------------------------------------------------------------------
    # 作答与进度
    # ------------------------------------------------------------------

    def sorted_questions(self) -> Optional[list[SortedQuestion]]:
        questions = self.questions()
        if questions is None:
            return None
        answers = self.answers.get_all()
        previous = self.answers.get_previous()
        return [
            SortedQuestion(
                index=index,
                question=question,
                answer=answers.get(question.id),
                previous_answer=previous.get(question.id),
            )
            for index, question in enumerate(sort_questions(questions, self.settings.dimension_order))
        ]

    def record_answer(self, question_id: int, option_value: float) -> AnswerRecordResponse:
        """记录单题答案并检测维度解锁、过半与完成事件。

        Raises:
            CatalogUnavailableError: 题库无法加载。
            UnknownQuestionError: 题目不在题库中。
        """
        questions = self.questions()
        if questions is None:
            raise CatalogUnavailableError("questionnaire")
        if all(question.id != question_id for question in questions):
            raise UnknownQuestionError(question_id)

        is_new = question_id not in self.answers.get_all()
        answers = self.answers.set(question_id, option_value)
        tracker = self._tracker(questions, answers)

        # 覆盖已有答案不改变作答数，不应再次触发事件
        milestone = tracker.milestone() if is_new else None
        if milestone:
            logger.info(
                f"维度解锁：{milestone.dimension}，已完成 {milestone.completed_dimensions} 个维度，"
                f"已匹配专业 {milestone.matched_majors} 个"
            )
        completed = tracker.is_complete()
        if completed and is_new:
            logger.info(f"全部 {tracker.total} 题已完成")

        return AnswerRecordResponse(
            answered_count=tracker.answered_count(),
            matched_majors=tracker.matched_majors(),
            milestone=milestone,
            midpoint_reached=is_new and tracker.is_midpoint(),
            completed=completed,
        )

    def get_progress(self) -> Optional[ProgressResponse]:
        questions = self.questions()
        if questions is None:
            return None
        tracker = self._tracker(questions, self.answers.get_all())
        ordered = sort_questions(questions, self.settings.dimension_order)
        return ProgressResponse(
            answered_count=tracker.answered_count(),
            total=tracker.total,
            percent=tracker.percent(),
            dimension_breakdown=tracker.dimension_breakdown(),
            completed_dimensions=tracker.completed_dimensions(),
            matched_majors=tracker.matched_majors(),
            first_unanswered_index=tracker.first_unanswered_index(ordered),
            unanswered_indices=tracker.unanswered_indices(ordered),
            is_unlocked=tracker.is_complete(),
        )

    def restart(self) -> Answers:
        """将当前答案整体移入"上一次答案"，并清空当前答案。"""
        # 先归档再清空，归档失败时当前答案保持不变
        snapshot = self.answers.get_all()
        self.answers.archive(snapshot)
        self.answers.clear()
        logger.info(f"重新探索：已归档 {len(snapshot)} 条答案")
        return snapshot

    def clear_data(self) -> None:
        """清空当前答案，不做归档。"""
        self.answers.clear()
        logger.info("已清除当前答题数据")

    def element_answers(self, element_id: int) -> Optional[list[ElementAnswer]]:
        questions = self.questions()
        if questions is None:
            return None
        return element_answers(questions, self.answers.get_all(), element_id)

    # ------------------------------------------------------------------
    # 特质、画像与挑战
    # ------------------------------------------------------------------

    def classified_elements(self, element_type: Optional[str] = None) -> Optional[list[ClassifiedElement]]:
        report = self.report()
        if report is None:
            return None
        return ElementClassifier(report.element, report.mechanism).classify_all(element_type)

    def classify_portrait(self, like_obvious: bool, talent_obvious: bool) -> PortraitQuadrant:
        return classify_portrait(like_obvious, talent_obvious)

    def portrait_groups(self) -> Optional[list[PortraitGroup]]:
        report = self.report()
        if report is None:
            return None
        return group_by_quadrant(report.portrait)

    def portrait_detail(self, portrait_id: int) -> Optional[PortraitDetail]:
        report = self.report()
        if report is None:
            return None
        portrait = next((item for item in report.portrait if item.id == portrait_id), None)
        if portrait is None:
            return None
        classifier = ElementClassifier(report.element, report.mechanism)
        related = ChallengeMatcher(report.challenge).for_portrait(portrait)
        return PortraitDetail(
            portrait=portrait,
            quadrant=classify_portrait(portrait.like_obvious, portrait.talent_obvious),
            like_name=classifier.element_name(portrait.like_id, LIKE_TYPE),
            talent_name=classifier.element_name(portrait.talent_id, TALENT_TYPE),
            like_element=classifier.find_element(portrait.like_id, LIKE_TYPE),
            talent_element=classifier.find_element(portrait.talent_id, TALENT_TYPE),
            like_mechanisms=classifier.mechanisms_for(portrait.like_id),
            talent_mechanisms=classifier.mechanisms_for(portrait.talent_id),
            challenges_by_category=group_by_category(related),
        )

    def match_challenges(
        self,
        like_id: int,
        talent_id: int,
        like_obvious: bool,
        talent_obvious: bool,
    ) -> list[Challenge]:
        report = self.report()
        if report is None:
            return []
        return ChallengeMatcher(report.challenge).match(like_id, talent_id, like_obvious, talent_obvious)

    def primary_challenges(self) -> list[Challenge]:
        report = self.report()
        if report is None:
            return []
        return ChallengeMatcher(report.challenge).primary()

    def more_challenges(self, challenge_id: int) -> Optional[list[Challenge]]:
        report = self.report()
        if report is None:
            return None
        matcher = ChallengeMatcher(report.challenge)
        challenge = matcher.find(challenge_id)
        if challenge is None:
            return None
        return matcher.more_like(challenge)

    # ------------------------------------------------------------------
    # 热爱能量
    # ------------------------------------------------------------------

    def major_affinity(self, code: str) -> Optional[MajorAffinityResponse]:
        detail = self.catalog.load_major_detail(code)
        if detail is None:
            return None
        analyses = detail.major_element_analyses
        return MajorAffinityResponse(
            code=code,
            breakdown=affinity_service.breakdown(detail.major),
            counts=affinity_service.count_items(analyses),
            groups={
                group: [item.model_dump(by_alias=True) for item in items]
                for group, items in affinity_service.group_analyses(analyses).items()
            },
        )

    def draw_quick_questions(self, rng: Optional[random.Random] = None) -> Optional[list[Question]]:
        questions = self.questions()
        if questions is None:
            return None
        return self.scorer.draw_questions(questions, rng)

    def score_quick_assessment(
        self,
        answers: Mapping[int, float],
        question_ids: Optional[Sequence[int]] = None,
    ) -> Optional[float]:
        return self.scorer.score(answers, question_ids)

    def record_quick_assessment(
        self,
        code: str,
        answers: Mapping[int, float],
        question_ids: Optional[Sequence[int]] = None,
    ) -> Optional[float]:
        """计分并按专业代码保存结果，重新测评会覆盖旧结果。"""
        energy = self.score_quick_assessment(answers, question_ids)
        if energy is None:
            return None
        results = self.quick_assessment_results()
        results[code] = energy
        self.store.set(MAJOR_QUIZ_RESULTS_KEY, json.dumps(results, ensure_ascii=False))
        logger.info(f"专业 {code} 快速测评完成，热爱能量 {energy:.2f}")
        return energy

    def quick_assessment_results(self) -> dict[str, float]:
        raw = self.store.get(MAJOR_QUIZ_RESULTS_KEY)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("快速测评结果不是合法的 JSON，按空状态处理")
            return {}
        if not isinstance(data, dict) or not all(
            isinstance(value, (int, float)) and not isinstance(value, bool) for value in data.values()
        ):
            logger.warning("快速测评结果格式异常，按空状态处理")
            return {}
        return {str(code): float(value) for code, value in data.items()}
