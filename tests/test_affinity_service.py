import json
import random

import pytest
from conftest import build_major_detail

from app.repositories.storage import MemoryKeyValueStore
from app.schemas.catalog import MajorDetail
from app.services.affinity_service import AffinityScorer, breakdown, count_items, group_analyses
from app.services.assessment_constants import MAJOR_QUIZ_RESULTS_KEY
from app.services.assessment_service import AssessmentService


@pytest.fixture
def detail() -> MajorDetail:
    return MajorDetail.model_validate(build_major_detail())


class TestAffinityScorer:
    def test_all_max_is_full_energy(self) -> None:
        scorer = AffinityScorer()
        assert scorer.score({i: 2 for i in range(8)}) == 1.0

    def test_all_min_is_zero(self) -> None:
        scorer = AffinityScorer()
        assert scorer.score({i: -2 for i in range(8)}) == 0.0

    def test_neutral_is_half(self) -> None:
        scorer = AffinityScorer()
        assert scorer.score({i: 0 for i in range(8)}) == pytest.approx(0.5)

    def test_mixed_answers(self) -> None:
        scorer = AffinityScorer(question_count=4)
        assert scorer.score({1: 2, 2: 2, 3: -2, 4: -2}) == pytest.approx(0.5)

    def test_out_of_range_values_are_clamped(self) -> None:
        scorer = AffinityScorer(question_count=2)
        assert scorer.score({1: 5, 2: 5}) == 1.0
        assert scorer.score({1: -9, 2: -9}) == 0.0

    def test_empty_answers(self) -> None:
        assert AffinityScorer().score({}) is None

    def test_too_few_answers(self) -> None:
        assert AffinityScorer().score({i: 1 for i in range(7)}) is None

    def test_missing_drawn_question(self) -> None:
        scorer = AffinityScorer(question_count=3)
        assert scorer.score({1: 1, 2: 1}, question_ids=[1, 2, 3]) is None
        assert scorer.score({1: 1, 2: 1, 3: 1}, question_ids=[1, 2, 3]) == pytest.approx(0.75)

    def test_only_drawn_questions_are_counted(self) -> None:
        scorer = AffinityScorer(question_count=2)
        assert scorer.score({1: 2, 2: 2, 3: -2}, question_ids=[1, 2]) == 1.0

    def test_too_few_drawn_questions(self) -> None:
        """抽题数少于题量时不计分。"""
        scorer = AffinityScorer()
        assert scorer.score({1: 2}, question_ids=[1]) is None
        assert scorer.score({1: 2}, question_ids=[]) is None

    def test_duplicate_drawn_questions_count_once(self) -> None:
        scorer = AffinityScorer()
        assert scorer.score({1: 2}, question_ids=[1] * 8) is None
        answers = {i: 2 for i in range(1, 9)}
        assert scorer.score(answers, question_ids=[*range(1, 9), 1, 1]) == 1.0

    def test_invalid_range(self) -> None:
        with pytest.raises(ValueError):
            AffinityScorer(value_min=2, value_max=2)

    def test_draw_questions_without_replacement(self) -> None:
        scorer = AffinityScorer(question_count=3)
        drawn = scorer.draw_questions(list(range(10)), random.Random(42))
        assert len(drawn) == 3
        assert len(set(drawn)) == 3
        assert drawn == AffinityScorer(question_count=3).draw_questions(list(range(10)), random.Random(42))

    def test_draw_questions_small_pool(self) -> None:
        assert sorted(AffinityScorer().draw_questions([1, 2, 3])) == [1, 2, 3]


def test_breakdown_keeps_precomputed_score(detail: MajorDetail):
    result = breakdown(detail.major)
    assert result.score == 78.5
    assert result.lexue_score == 30
    assert result.positive_total == pytest.approx(55.5)
    assert result.negative_total == pytest.approx(10)


def test_breakdown_with_missing_fields():
    result = breakdown(MajorDetail.model_validate({"major": {"score": None, "lexueScore": 12}}).major)
    assert result.score is None
    assert result.positive_total == 12
    assert result.negative_total == 0


def test_count_items_excludes_other_types(detail: MajorDetail):
    counts = count_items(detail.major_element_analyses)
    assert counts.positive == 2
    assert counts.negative == 2


def test_group_analyses(detail: MajorDetail):
    grouped = group_analyses(detail.major_element_analyses)
    assert list(grouped) == sorted(grouped)
    assert [item.type for item in grouped["积极助力"]] == ["lexue", "shanxue"]
    assert [item.type for item in grouped["潜在挑战"]] == ["yanxue", "tiaozhan"]
    assert [item.summary for item in grouped["neutral"]] == ["s5"]
    assert [item.summary for item in grouped["未分类"]] == ["s6"]


class TestQuickAssessmentResults:
    def test_record_overwrites_previous_result(self, service: AssessmentService) -> None:
        assert service.record_quick_assessment("080901", {i: -2 for i in range(8)}) == 0.0
        assert service.record_quick_assessment("080901", {i: 2 for i in range(8)}) == 1.0
        assert service.record_quick_assessment("050101", {i: 0 for i in range(8)}) == pytest.approx(0.5)
        assert service.quick_assessment_results() == {"080901": 1.0, "050101": 0.5}

    def test_incomplete_assessment_is_not_recorded(self, service: AssessmentService) -> None:
        assert service.record_quick_assessment("080901", {1: 2}) is None
        assert service.record_quick_assessment("080901", {1: 2}, question_ids=[1] * 8) is None
        assert service.quick_assessment_results() == {}

    def test_results_are_persisted_as_json(
        self, service: AssessmentService, memory_store: MemoryKeyValueStore
    ) -> None:
        service.record_quick_assessment("080901", {i: 2 for i in range(8)})
        assert json.loads(memory_store.get(MAJOR_QUIZ_RESULTS_KEY)) == {"080901": 1.0}

    @pytest.mark.parametrize("raw", ["{broken", "[0.5]", '{"080901": "high"}'])
    def test_corrupt_results(self, service: AssessmentService, memory_store: MemoryKeyValueStore, raw: str) -> None:
        memory_store.set(MAJOR_QUIZ_RESULTS_KEY, raw)
        assert service.quick_assessment_results() == {}

    def test_draw_quick_questions(self, service: AssessmentService) -> None:
        drawn = service.draw_quick_questions(random.Random(7))
        assert drawn is not None
        assert len(drawn) == 8
        assert len({question.id for question in drawn}) == 8


def test_major_affinity(service: AssessmentService):
    affinity = service.major_affinity("080901")
    assert affinity is not None
    assert affinity.breakdown.score == 78.5
    assert affinity.counts.positive == 2
    assert affinity.groups["积极助力"][0]["matchReason"] == "r1"
    assert service.major_affinity("999999") is None
    assert service.major_affinity("../report") is None
