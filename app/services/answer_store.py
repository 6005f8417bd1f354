from __future__ import annotations

import json
from typing import Optional

from app.core.logger import logger
from app.repositories.storage import KeyValueStore
from app.services.assessment_constants import ANSWERS_KEY, PREVIOUS_ANSWERS_KEY

Answers = dict[int, float]


def decode_answers(raw: Optional[str], *, key: str) -> Answers:
    """将持久化文本解析为 {题目ID: 分值}，任何异常数据都按空状态处理。"""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"持久化数据不是合法的 JSON，按空状态处理 key={key}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"持久化数据不是对象映射，按空状态处理 key={key}")
        return {}

    answers: Answers = {}
    for question_id, value in data.items():
        # bool 是 int 的子类，需要单独排除
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning(f"持久化数据包含非数值答案，按空状态处理 key={key}")
            return {}
        try:
            answers[int(question_id)] = value
        except (TypeError, ValueError):
            logger.warning(f"持久化数据包含非法题目ID {question_id!r}，按空状态处理 key={key}")
            return {}
    return answers


def encode_answers(answers: Answers) -> str:
    return json.dumps({str(question_id): value for question_id, value in answers.items()})


class AnswerStore:
    """保存当前答案，每次写入都立即落盘。"""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get_all(self) -> Answers:
        return decode_answers(self.store.get(ANSWERS_KEY), key=ANSWERS_KEY)

    def set(self, question_id: int, option_value: float) -> Answers:
        """覆盖写入单题答案，返回写入后的完整映射。"""
        answers = self.get_all()
        answers[question_id] = option_value
        self.store.set(ANSWERS_KEY, encode_answers(answers))
        return answers

    def clear(self) -> Answers:
        """清空当前答案并返回清空前的快照。"""
        snapshot = self.get_all()
        self.store.set(ANSWERS_KEY, encode_answers({}))
        return snapshot

    def get_previous(self) -> Answers:
        return decode_answers(self.store.get(PREVIOUS_ANSWERS_KEY), key=PREVIOUS_ANSWERS_KEY)

    def archive(self, snapshot: Answers) -> None:
        self.store.set(PREVIOUS_ANSWERS_KEY, encode_answers(snapshot))
