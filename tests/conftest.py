import json
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.deps.engine import get_catalog, get_store
from app.main import app
from app.repositories.catalog import CatalogRepository
from app.repositories.storage import MemoryKeyValueStore
from app.services.assessment_service import AssessmentService

DIMENSIONS = ["看", "听", "说", "记", "想", "做", "运动"]
QUESTIONS_PER_DIMENSION = 24
OPTION_LABELS = ["非常不符合", "不太符合", "一般", "比较符合", "非常符合"]


def build_questions() -> list[dict]:
    """生成 7 个维度 × 24 题的题库，每个维度单号为 like、双号为 talent，每 4 题对应一个元素。"""
    questions: list[dict] = []
    for dimension_index, dimension in enumerate(DIMENSIONS):
        for offset in range(QUESTIONS_PER_DIMENSION):
            question_id = dimension_index * QUESTIONS_PER_DIMENSION + offset + 1
            questions.append(
                {
                    "id": question_id,
                    "content": f"{dimension}-题目{question_id}",
                    "elementId": dimension_index * 10 + offset // 4 + 1,
                    "type": "like" if offset % 2 == 0 else "talent",
                    "direction": "positive",
                    "dimension": dimension,
                    "action": "",
                    "options": [
                        {
                            "id": question_id * 10 + order,
                            "scaleId": 1,
                            "optionName": label,
                            "optionValue": order - 2,
                            "displayOrder": order,
                            "additionalInfo": "",
                        }
                        for order, label in enumerate(OPTION_LABELS)
                    ],
                }
            )
    # 文件中的顺序故意打乱，由引擎负责排序
    return list(reversed(questions))


def build_report() -> dict:
    challenge_base = {"like_id": 1, "talent_id": 2, "content": "描述", "strategy": "策略"}
    return {
        "element": [
            {"id": 1, "name": "观察入微", "type": "like", "dimension": "看", "attribute": "明显"},
            {"id": 2, "name": "图像记忆", "type": "talent", "dimension": "看", "attribute": "待发现"},
            {"id": 3, "name": "倾听共情", "type": "like", "dimension": "听", "attribute": "一般"},
            {"id": 4, "name": "语言表达", "type": "talent", "dimension": "说", "correlation_talent_id": None},
        ],
        "mechanism": [
            {"id": 1, "reason_id": 1, "element_id": 1, "content": "细节驱动", "brief": "细节", "remarks": None},
            {"id": 2, "reason_id": 2, "element_id": 2, "content": "视觉编码", "brief": "视觉", "remarks": None},
        ],
        "portrait": [
            {"id": 1, "like_id": 1, "talent_id": 2, "like_obvious": True, "talent_obvious": True, "name": "A", "explain": ""},
            {"id": 2, "like_id": 1, "talent_id": 2, "like_obvious": True, "talent_obvious": False, "name": "B", "explain": ""},
            {"id": 3, "like_id": 3, "talent_id": 4, "like_obvious": False, "talent_obvious": True, "name": "C", "explain": ""},
            {"id": 4, "like_id": 3, "talent_id": 4, "like_obvious": False, "talent_obvious": False, "name": "D", "explain": ""},
            {"id": 5, "like_id": 3, "talent_id": 2, "like_obvious": True, "talent_obvious": True, "name": "E", "explain": ""},
        ],
        "challenge": [
            {**challenge_base, "id": 1, "like_obvious": True, "talent_obvious": True, "type": "自我认知与内驱力管理", "name": "c1"},
            {**challenge_base, "id": 2, "like_obvious": True, "talent_obvious": True, "type": "人际协作与社会融合", "name": "c2"},
            {**challenge_base, "id": 3, "like_obvious": True, "talent_obvious": False, "type": "认知策略与能力构建", "name": "c3"},
            {**challenge_base, "id": 4, "like_obvious": True, "talent_obvious": True, "type": "认知策略与能力构建", "name": "c4"},
            {
                **challenge_base,
                "id": 5,
                "like_id": 3,
                "like_obvious": True,
                "talent_obvious": True,
                "type": "人际协作与社会融合",
                "name": "c5",
            },
            {**challenge_base, "id": 6, "like_obvious": True, "talent_obvious": True, "type": "其他", "name": "c6"},
        ],
    }


def build_major_detail() -> dict:
    return {
        "major": {
            "score": "78.5",
            "lexueScore": "30",
            "shanxueScore": 25.5,
            "yanxueDeduction": "6",
            "tiaozhanDeduction": 4,
        },
        "majorElementAnalyses": [
            {"type": "lexue", "summary": "s1", "matchReason": "r1", "element": {"id": 1, "name": "观察入微"}},
            {"type": "shanxue", "summary": "s2", "matchReason": "r2", "element": {"id": 2, "name": "图像记忆"}},
            {"type": "yanxue", "summary": "s3", "matchReason": "r3"},
            {"type": "tiaozhan", "summary": "s4", "matchReason": "r4"},
            {"type": "neutral", "summary": "s5", "matchReason": "r5"},
            {"summary": "s6", "matchReason": "r6"},
        ],
    }


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "questionnaire.json").write_text(json.dumps(build_questions(), ensure_ascii=False), encoding="utf-8")
    (directory / "report.json").write_text(json.dumps(build_report(), ensure_ascii=False), encoding="utf-8")
    (directory / "080901.json").write_text(json.dumps(build_major_detail(), ensure_ascii=False), encoding="utf-8")
    return directory


@pytest.fixture
def catalog(data_dir: Path) -> CatalogRepository:
    return CatalogRepository(data_dir)


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def service(memory_store: MemoryKeyValueStore, catalog: CatalogRepository) -> AssessmentService:
    return AssessmentService(memory_store, catalog)


@pytest_asyncio.fixture
async def async_client(
    memory_store: MemoryKeyValueStore,
    catalog: CatalogRepository,
) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_store] = lambda: memory_store
    app.dependency_overrides[get_catalog] = lambda: catalog

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
