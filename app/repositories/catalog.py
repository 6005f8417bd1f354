from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from app.core.logger import logger
from app.schemas.catalog import MajorDetail, Question, ReportBundle

QUESTIONNAIRE_FILE = "questionnaire.json"
REPORT_FILE = "report.json"

_MAJOR_CODE_PATTERN = re.compile(r"^[0-9A-Za-z_-]+$")
_QUESTION_LIST = TypeAdapter(list[Question])


class CatalogRepository:
    """读取静态 JSON 数据，校验失败时一律返回 None（视为缺失数据）。

    题库与报告只读取一次并缓存；专业详情按需读取。
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self._questions: Optional[list[Question]] = None
        self._report: Optional[ReportBundle] = None

    def _read_json(self, filename: str) -> Optional[Any]:
        path = self.data_dir / filename
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning(f"数据文件不存在: {path}")
            return None
        except OSError as e:
            logger.error(f"读取数据文件失败: {path} ({e})")
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"数据文件不是合法的 JSON: {path} ({e})")
            return None

    def load_questions(self) -> Optional[list[Question]]:
        if self._questions is not None:
            return self._questions
        payload = self._read_json(QUESTIONNAIRE_FILE)
        if payload is None:
            return None
        try:
            questions = _QUESTION_LIST.validate_python(payload)
        except ValidationError as e:
            logger.error(f"题库数据校验失败: {e.error_count()} 处错误")
            return None
        ids = [question.id for question in questions]
        if len(ids) != len(set(ids)):
            logger.error("题库数据存在重复的题目ID")
            return None
        logger.debug(f"已加载题库，共 {len(questions)} 题")
        self._questions = questions
        return questions

    def load_report(self) -> Optional[ReportBundle]:
        if self._report is not None:
            return self._report
        payload = self._read_json(REPORT_FILE)
        if payload is None:
            return None
        try:
            report = ReportBundle.model_validate(payload)
        except ValidationError as e:
            logger.error(f"报告数据校验失败: {e.error_count()} 处错误")
            return None
        logger.debug(
            f"已加载报告数据: portrait={len(report.portrait)} challenge={len(report.challenge)} "
            f"element={len(report.element)} mechanism={len(report.mechanism)}"
        )
        self._report = report
        return report

    def load_major_detail(self, code: str) -> Optional[MajorDetail]:
        if not code or not _MAJOR_CODE_PATTERN.fullmatch(code):
            logger.warning(f"非法的专业代码: {code!r}")
            return None
        payload = self._read_json(f"{code}.json")
        if payload is None:
            return None
        try:
            return MajorDetail.model_validate(payload)
        except ValidationError as e:
            logger.error(f"专业详情数据校验失败 code={code}: {e.error_count()} 处错误")
            return None
