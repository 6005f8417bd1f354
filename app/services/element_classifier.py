from __future__ import annotations

from typing import Mapping, Optional, Sequence

from app.schemas.assessment import ClassifiedElement, ElementAnswer, ObviousnessState
from app.schemas.catalog import Element, Mechanism, Question
from app.services.assessment_constants import (
    OBVIOUS_MARKER,
    TO_BE_DISCOVERED_MARKER,
    UNANSWERED_TEXT,
    UNKNOWN_ELEMENT_NAME,
)


def is_obvious(attribute: Optional[str]) -> bool:
    return attribute is not None and OBVIOUS_MARKER in attribute


def is_to_be_discovered(attribute: Optional[str]) -> bool:
    return attribute is not None and TO_BE_DISCOVERED_MARKER in attribute


def classify_attribute(attribute: Optional[str]) -> ObviousnessState:
    """解读上游报告给出的显著性描述。

    显著性阈值由上游计算，这里只识别描述中的关键字；两者都不包含时为未分类。
    """
    if is_obvious(attribute):
        return ObviousnessState.obvious
    if is_to_be_discovered(attribute):
        return ObviousnessState.to_be_discovered
    return ObviousnessState.unclassified


class ElementClassifier:
    def __init__(self, elements: Sequence[Element], mechanisms: Sequence[Mechanism] = ()) -> None:
        self.elements = list(elements)
        self.mechanisms = list(mechanisms)

    def classify(self, element: Element) -> ClassifiedElement:
        return ClassifiedElement(
            element=element,
            state=classify_attribute(element.attribute),
            is_obvious=is_obvious(element.attribute),
            to_be_discovered=is_to_be_discovered(element.attribute),
        )

    def classify_all(self, element_type: Optional[str] = None) -> list[ClassifiedElement]:
        return [
            self.classify(element)
            for element in self.elements
            if element_type is None or element.type == element_type
        ]

    def find_element(self, element_id: int, element_type: Optional[str] = None) -> Optional[Element]:
        for element in self.elements:
            if element.id == element_id and (element_type is None or element.type == element_type):
                return element
        return None

    def element_name(self, element_id: int, element_type: Optional[str] = None) -> str:
        element = self.find_element(element_id, element_type)
        return element.name if element else UNKNOWN_ELEMENT_NAME

    def mechanisms_for(self, element_id: int) -> list[Mechanism]:
        return [mechanism for mechanism in self.mechanisms if mechanism.element_id == element_id]


def element_answers(
    questions: Sequence[Question],
    answers: Mapping[int, float],
    element_id: int,
) -> list[ElementAnswer]:
    """列出某个特质元素关联题目的作答情况。"""
    result: list[ElementAnswer] = []
    for question in questions:
        if question.element_id != element_id:
            continue
        value = answers.get(question.id)
        option = next((opt for opt in question.options if value is not None and opt.option_value == value), None)
        result.append(
            ElementAnswer(
                question_id=question.id,
                content=question.content,
                option_value=value,
                answer_text=option.option_name if option else UNANSWERED_TEXT,
            )
        )
    return result
