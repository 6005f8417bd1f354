from __future__ import annotations

from app.schemas.assessment import PortraitQuadrant

ANSWERS_KEY = "questionnaire_answers"
PREVIOUS_ANSWERS_KEY = "questionnaire_previous_answers"
MAJOR_QUIZ_RESULTS_KEY = "major_quiz_results"

LIKE_TYPE = "like"
TALENT_TYPE = "talent"

OBVIOUS_MARKER = "明显"
TO_BE_DISCOVERED_MARKER = "待发现"

UNKNOWN_ELEMENT_NAME = "未知"
UNANSWERED_TEXT = "未作答"

QUADRANT_LABELS = {
    PortraitQuadrant.high_passion_high_potential: "热爱高潜能",
    PortraitQuadrant.interest_driven: "兴趣驱动型",
    PortraitQuadrant.ability_efficient: "能力高效型",
    PortraitQuadrant.unexplored: "迷茫待探索",
}

SELF_AWARENESS_TYPE = "自我认知与内驱力管理"
INTERPERSONAL_TYPE = "人际协作与社会融合"
CAPABILITY_TYPE = "认知策略与能力构建"

CHALLENGE_CATEGORIES = {
    SELF_AWARENESS_TYPE: "自我认知",
    INTERPERSONAL_TYPE: "人际协作",
    CAPABILITY_TYPE: "能力构建",
}

POSITIVE_ANALYSIS_TYPES = frozenset({"shanxue", "lexue"})
NEGATIVE_ANALYSIS_TYPES = frozenset({"yanxue", "tiaozhan"})
POSITIVE_GROUP = "积极助力"
NEGATIVE_GROUP = "潜在挑战"
UNCATEGORIZED_GROUP = "未分类"
