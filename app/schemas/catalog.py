"""静态题库、报告与专业详情数据的边界模型。

题库与专业详情使用 camelCase 字段名，报告数据使用 snake_case 字段名；
模型统一以 snake_case 属性对外暴露。
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class _ReportModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class QuestionOption(_CamelModel):
    id: int = Field(..., description="选项ID")
    scale_id: Optional[int] = Field(None, description="所属量表ID")
    option_name: str = Field("", description="选项文本")
    option_value: float = Field(..., description="选项分值，通常在 -2 到 2 之间")
    display_order: int = Field(0, description="显示顺序")
    additional_info: Optional[str] = Field(None, description="附加说明")


class Question(_CamelModel):
    id: int = Field(..., description="题目ID")
    content: str = Field(..., description="题目内容")
    element_id: int = Field(..., description="题目关联的特质元素ID")
    type: str = Field(..., description="题目类型，like 表示喜欢，talent 表示天赋")
    direction: Optional[str] = Field(None, description="计分方向")
    dimension: str = Field(..., description="所属维度，例如 看/听/说")
    action: Optional[str] = Field(None, description="行为描述")
    options: list[QuestionOption] = Field(default_factory=list, description="选项列表")


class Element(_ReportModel):
    id: int = Field(..., description="特质元素ID")
    name: str = Field(..., description="特质元素名称")
    type: str = Field(..., description="元素类型 like/talent")
    dimension: Optional[str] = Field(None, description="所属维度")
    correlation_talent_id: Optional[int] = Field(None, description="关联的天赋元素ID")
    attribute: Optional[str] = Field(None, description="上游报告给出的显著性描述，例如 明显/待发现")


class Mechanism(_ReportModel):
    id: int
    reason_id: Optional[int] = None
    element_id: int
    content: str = ""
    brief: str = ""
    remarks: Optional[str] = None


class Portrait(_ReportModel):
    id: int = Field(..., description="画像ID")
    like_id: int = Field(..., description="喜欢元素ID")
    talent_id: int = Field(..., description="天赋元素ID")
    like_obvious: bool = Field(..., description="喜欢是否明显")
    talent_obvious: bool = Field(..., description="天赋是否明显")
    name: str = Field(..., description="画像名称")
    explain: str = Field("", description="画像解读")


class Challenge(_ReportModel):
    id: int = Field(..., description="挑战ID")
    like_id: int = Field(..., description="喜欢元素ID")
    talent_id: int = Field(..., description="天赋元素ID")
    like_obvious: bool = Field(..., description="喜欢是否明显")
    talent_obvious: bool = Field(..., description="天赋是否明显")
    type: str = Field(..., description="挑战类型，例如 自我认知与内驱力管理")
    name: str = Field(..., description="挑战名称")
    content: str = Field("", description="挑战描述")
    strategy: str = Field("", description="应对策略")


class ReportBundle(_ReportModel):
    portrait: list[Portrait] = Field(default_factory=list)
    challenge: list[Challenge] = Field(default_factory=list)
    element: list[Element] = Field(default_factory=list)
    mechanism: list[Mechanism] = Field(default_factory=list)


class MajorScore(_CamelModel):
    """专业热爱能量的预计算结果，数值可能以字符串形式给出。"""

    score: Optional[float] = Field(None, description="热爱能量得分")
    lexue_score: Optional[float] = Field(None, description="乐学得分")
    shanxue_score: Optional[float] = Field(None, description="善学得分")
    yanxue_deduction: Optional[float] = Field(None, description="厌学扣分")
    tiaozhan_deduction: Optional[float] = Field(None, description="阻学扣分")


class AnalysisElement(_CamelModel):
    id: Optional[int] = None
    name: str = ""
    status: Optional[str] = None
    dimension: Optional[str] = None


class MajorElementAnalysis(_CamelModel):
    type: Optional[str] = Field(None, description="分析类型 shanxue/lexue/yanxue/tiaozhan")
    summary: str = Field("", description="分析摘要")
    match_reason: str = Field("", description="匹配原因")
    element: Optional[AnalysisElement] = Field(None, description="关联的特质元素")


class MajorDetail(_CamelModel):
    major: MajorScore = Field(default_factory=MajorScore)
    major_element_analyses: list[MajorElementAnalysis] = Field(default_factory=list)
