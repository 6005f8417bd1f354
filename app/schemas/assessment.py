from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.catalog import Challenge, Element, Mechanism, Portrait, Question


class PortraitQuadrant(str, enum.Enum):
    """画像象限"""

    high_passion_high_potential = "High-Passion-High-Potential"  # 热爱高潜能
    interest_driven = "Interest-Driven"  # 兴趣驱动型
    ability_efficient = "Ability-Efficient"  # 能力高效型
    unexplored = "Unexplored"  # 迷茫待探索


class ObviousnessState(str, enum.Enum):
    """特质元素的显著性状态"""

    obvious = "obvious"
    to_be_discovered = "to_be_discovered"
    unclassified = "unclassified"


class AnswerRecordRequest(BaseModel):
    question_id: int = Field(..., description="题目ID")
    option_value: float = Field(..., description="所选选项的分值")


class MilestoneEvent(BaseModel):
    dimension: str = Field(..., description="刚刚解锁的维度")
    dimension_index: int = Field(..., description="该维度在固定顺序中的下标")
    answered_count: int = Field(..., description="触发时的累计作答数")
    completed_dimensions: int = Field(..., description="已完成的维度数")
    matched_majors: int = Field(..., description="已匹配专业数（展示用）")


class AnswerRecordResponse(BaseModel):
    answered_count: int = Field(..., description="累计作答数")
    matched_majors: int = Field(..., description="已匹配专业数（展示用）")
    milestone: Optional[MilestoneEvent] = Field(None, description="本次作答触发的维度解锁事件")
    midpoint_reached: bool = Field(False, description="本次作答是否恰好到达题库一半")
    completed: bool = Field(False, description="是否已完成全部题目")


class DimensionProgress(BaseModel):
    dimension: str = Field(..., description="维度名称")
    answered: int = Field(..., description="已作答题数")
    total: int = Field(..., description="维度题目总数")
    progress: float = Field(..., description="完成百分比 0-100")
    completed: bool = Field(..., description="维度是否完成")
    start_index: int = Field(..., description="该维度第一题在标准顺序中的下标，用于维度标签跳转")


class ProgressResponse(BaseModel):
    answered_count: int
    total: int
    percent: float = Field(..., description="整体完成百分比 0-100")
    dimension_breakdown: list[DimensionProgress]
    completed_dimensions: int
    matched_majors: int
    first_unanswered_index: int
    unanswered_indices: list[int] = Field(default_factory=list, description="所有未作答题目在标准顺序中的下标")
    is_unlocked: bool = Field(..., description="是否已完成全部题目并解锁专业功能")


class SortedQuestion(BaseModel):
    index: int = Field(..., description="题目在标准顺序中的下标")
    question: Question
    answer: Optional[float] = Field(None, description="当前作答的分值")
    previous_answer: Optional[float] = Field(None, description="上一次测评的作答分值，用于提示")


class RestartResponse(BaseModel):
    previous_answers: dict[int, float] = Field(default_factory=dict, description="归档的上一次答案")


class ElementAnswer(BaseModel):
    question_id: int
    content: str
    option_value: Optional[float] = None
    answer_text: str = Field(..., description="所选选项文本，未作答时为 未作答")


class ClassifiedElement(BaseModel):
    element: Element
    state: ObviousnessState
    is_obvious: bool
    to_be_discovered: bool


class PortraitGroup(BaseModel):
    quadrant: PortraitQuadrant
    label: str = Field(..., description="象限中文名称")
    portraits: list[Portrait]


class PortraitDetail(BaseModel):
    portrait: Portrait
    quadrant: PortraitQuadrant
    like_name: str = Field(..., description="喜欢元素名称，缺失时为 未知")
    talent_name: str = Field(..., description="天赋元素名称，缺失时为 未知")
    like_element: Optional[Element] = None
    talent_element: Optional[Element] = None
    like_mechanisms: list[Mechanism] = Field(default_factory=list)
    talent_mechanisms: list[Mechanism] = Field(default_factory=list)
    challenges_by_category: dict[str, list[Challenge]] = Field(default_factory=dict)


class AffinityBreakdown(BaseModel):
    score: Optional[float] = Field(None, description="预计算的热爱能量得分，原样展示")
    lexue_score: Optional[float] = None
    shanxue_score: Optional[float] = None
    yanxue_deduction: Optional[float] = None
    tiaozhan_deduction: Optional[float] = None
    positive_total: float = Field(0.0, description="乐学 + 善学")
    negative_total: float = Field(0.0, description="厌学 + 阻学")


class AnalysisCounts(BaseModel):
    positive: int = Field(..., description="积极助力条目数")
    negative: int = Field(..., description="潜在挑战条目数")


class MajorAffinityResponse(BaseModel):
    code: str
    breakdown: AffinityBreakdown
    counts: AnalysisCounts
    groups: dict[str, list[dict]] = Field(default_factory=dict, description="按展示分组的分析条目")


class QuickAssessmentRequest(BaseModel):
    answers: dict[int, float] = Field(..., description="题目ID到选项分值的映射")
    question_ids: Optional[list[int]] = Field(None, description="本次抽取的题目ID，提供时必须全部作答")


class QuickAssessmentResponse(BaseModel):
    code: str
    energy: float = Field(..., ge=0.0, le=1.0, description="热爱能量 0-1")
