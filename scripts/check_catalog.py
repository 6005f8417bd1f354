"""Check the static catalog files the engine reads.

Usage examples
--------------
Check the configured data directory::

    uv run python scripts/check_catalog.py

Check another directory and a few major detail files::

    uv run python scripts/check_catalog.py --data-dir path/to/data --major 080901 --major 050201
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import Optional, Sequence

ROOT_PATH = Path(__file__).resolve().parents[1]
if str(ROOT_PATH) not in sys.path:
    sys.path.insert(0, str(ROOT_PATH))

from app.core.config import config  # noqa:E402
from app.core.logger import logger  # noqa:E402
from app.repositories.catalog import CatalogRepository  # noqa:E402
from app.services.progress_service import sort_questions  # noqa:E402


def check_catalog(repo: CatalogRepository, *, dimension_order: Sequence[str], majors: Sequence[str]) -> bool:
    """逐项加载题库、报告与专业详情，返回是否全部可用。"""
    ok = True

    questions = repo.load_questions()
    if questions is None:
        logger.error("题库不可用")
        ok = False
    else:
        counts = Counter(question.dimension for question in sort_questions(questions, dimension_order))
        logger.info(f"题库共 {len(questions)} 题")
        for dimension in dimension_order:
            logger.info(f"  {dimension}: {counts.pop(dimension, 0)} 题")
        for dimension, count in counts.items():
            logger.warning(f"  未知维度 {dimension}: {count} 题")

    report = repo.load_report()
    if report is None:
        logger.error("报告数据不可用")
        ok = False
    else:
        logger.info(
            f"报告数据: 画像 {len(report.portrait)} 条，挑战 {len(report.challenge)} 条，"
            f"元素 {len(report.element)} 个，机制 {len(report.mechanism)} 条"
        )

    for code in majors:
        detail = repo.load_major_detail(code)
        if detail is None:
            logger.error(f"专业 {code} 详情不可用")
            ok = False
        else:
            logger.info(f"专业 {code}: 分析条目 {len(detail.major_element_analyses)} 条")

    return ok


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="检查静态题库与报告数据")
    parser.add_argument("--data-dir", type=Path, default=config.data_dir, help="数据目录")
    parser.add_argument("--major", action="append", default=[], help="需要检查的专业代码，可重复")
    args = parser.parse_args(argv)

    repo = CatalogRepository(args.data_dir)
    ok = check_catalog(repo, dimension_order=config.dimension_order, majors=args.major)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
