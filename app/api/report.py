from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.deps.engine import get_assessment_service
from app.schemas.assessment import ClassifiedElement, PortraitDetail, PortraitGroup, PortraitQuadrant
from app.schemas.catalog import Challenge
from app.services.assessment_service import AssessmentService

router = APIRouter()

REPORT_UNAVAILABLE_DETAIL = "报告数据加载失败，请稍后重试"


def _report_unavailable() -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=REPORT_UNAVAILABLE_DETAIL)


@router.get("/elements", response_model=list[ClassifiedElement])
async def list_elements(
    type: Optional[Literal["like", "talent"]] = None,
    service: AssessmentService = Depends(get_assessment_service),
) -> list[ClassifiedElement]:
    elements = service.classified_elements(type)
    if elements is None:
        raise _report_unavailable()
    return elements


@router.get("/portraits", response_model=list[PortraitGroup])
async def list_portraits(service: AssessmentService = Depends(get_assessment_service)) -> list[PortraitGroup]:
    groups = service.portrait_groups()
    if groups is None:
        raise _report_unavailable()
    return groups


@router.get("/portraits/classify", response_model=PortraitQuadrant)
async def classify(
    like_obvious: bool,
    talent_obvious: bool,
    service: AssessmentService = Depends(get_assessment_service),
) -> PortraitQuadrant:
    return service.classify_portrait(like_obvious, talent_obvious)


@router.get("/portraits/{portrait_id}", response_model=PortraitDetail)
async def get_portrait(
    portrait_id: int,
    service: AssessmentService = Depends(get_assessment_service),
) -> PortraitDetail:
    if service.report() is None:
        raise _report_unavailable()
    detail = service.portrait_detail(portrait_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="画像不存在")
    return detail


@router.get("/challenges/match", response_model=list[Challenge])
async def match_challenges(
    like_id: int,
    talent_id: int,
    like_obvious: bool,
    talent_obvious: bool,
    service: AssessmentService = Depends(get_assessment_service),
) -> list[Challenge]:
    if service.report() is None:
        raise _report_unavailable()
    return service.match_challenges(like_id, talent_id, like_obvious, talent_obvious)


@router.get("/challenges/primary", response_model=list[Challenge])
async def primary_challenges(service: AssessmentService = Depends(get_assessment_service)) -> list[Challenge]:
    if service.report() is None:
        raise _report_unavailable()
    return service.primary_challenges()


@router.get("/challenges/{challenge_id}/more", response_model=list[Challenge])
async def more_challenges(
    challenge_id: int,
    service: AssessmentService = Depends(get_assessment_service),
) -> list[Challenge]:
    if service.report() is None:
        raise _report_unavailable()
    challenges = service.more_challenges(challenge_id)
    if challenges is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="挑战不存在")
    return challenges
