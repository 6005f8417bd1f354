import pytest

from app.schemas.assessment import ObviousnessState
from app.schemas.catalog import Element, Mechanism, Question
from app.services.element_classifier import (
    ElementClassifier,
    classify_attribute,
    element_answers,
    is_obvious,
    is_to_be_discovered,
)


@pytest.mark.parametrize(
    ("attribute", "expected"),
    [
        ("明显", ObviousnessState.obvious),
        ("喜欢明显", ObviousnessState.obvious),
        ("待发现", ObviousnessState.to_be_discovered),
        ("天赋待发现", ObviousnessState.to_be_discovered),
        ("一般", ObviousnessState.unclassified),
        ("", ObviousnessState.unclassified),
        (None, ObviousnessState.unclassified),
    ],
)
def test_classify_attribute(attribute, expected):
    assert classify_attribute(attribute) is expected


def test_markers_are_not_complementary():
    assert not is_obvious("一般") and not is_to_be_discovered("一般")
    assert is_obvious("明显/待发现") and is_to_be_discovered("明显/待发现")
    assert classify_attribute("明显/待发现") is ObviousnessState.obvious


def test_substring_match_also_hits_negated_marker():
    # 只做子串匹配，"不明显" 同样包含 "明显"
    assert is_obvious("不明显")


def test_element_lookup_and_mechanisms():
    classifier = ElementClassifier(
        [
            Element(id=1, name="观察入微", type="like", attribute="明显"),
            Element(id=1, name="图像记忆", type="talent", attribute="待发现"),
        ],
        [Mechanism(id=1, element_id=1, content="细节驱动")],
    )

    assert classifier.find_element(1, "talent").name == "图像记忆"
    assert classifier.find_element(2) is None
    assert classifier.element_name(1) == "观察入微"
    assert classifier.element_name(404) == "未知"
    assert classifier.element_name(1, "talent") == "图像记忆"
    assert classifier.element_name(1, "other") == "未知"
    assert [mechanism.id for mechanism in classifier.mechanisms_for(1)] == [1]

    classified = classifier.classify_all("like")
    assert len(classified) == 1
    assert classified[0].is_obvious
    assert classified[0].state is ObviousnessState.obvious


def test_element_answers_reports_option_text():
    options = [
        {"id": 1, "optionName": "不符合", "optionValue": -1},
        {"id": 2, "optionName": "符合", "optionValue": 1},
    ]
    questions = [
        Question.model_validate(
            {"id": 10, "content": "q10", "elementId": 5, "type": "like", "dimension": "看", "options": options}
        ),
        Question.model_validate(
            {"id": 11, "content": "q11", "elementId": 5, "type": "like", "dimension": "看", "options": options}
        ),
        Question.model_validate(
            {"id": 12, "content": "q12", "elementId": 6, "type": "like", "dimension": "看", "options": options}
        ),
    ]

    result = element_answers(questions, {10: 1, 12: -1}, 5)

    assert [item.question_id for item in result] == [10, 11]
    assert result[0].answer_text == "符合"
    assert result[1].answer_text == "未作答"
    assert result[1].option_value is None
