from fastapi import APIRouter, Depends, HTTPException, status

from app.deps.engine import get_assessment_service
from app.schemas.assessment import MajorAffinityResponse, QuickAssessmentRequest, QuickAssessmentResponse
from app.schemas.catalog import Question
from app.services.assessment_service import AssessmentService

router = APIRouter()


@router.get("/quick-quiz/questions", response_model=list[Question])
async def draw_quick_questions(service: AssessmentService = Depends(get_assessment_service)) -> list[Question]:
    questions = service.draw_quick_questions()
    if questions is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="题库数据加载失败，请稍后重试")
    return questions


@router.get("/quick-quiz/results", response_model=dict[str, float])
async def quick_results(service: AssessmentService = Depends(get_assessment_service)) -> dict[str, float]:
    return service.quick_assessment_results()


@router.get("/{code}/affinity", response_model=MajorAffinityResponse)
async def major_affinity(
    code: str,
    service: AssessmentService = Depends(get_assessment_service),
) -> MajorAffinityResponse:
    affinity = service.major_affinity(code)
    if affinity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"专业数据暂不可用: {code}")
    return affinity


@router.post("/{code}/quick-assessment", response_model=QuickAssessmentResponse)
async def quick_assessment(
    code: str,
    request: QuickAssessmentRequest,
    service: AssessmentService = Depends(get_assessment_service),
) -> QuickAssessmentResponse:
    energy = service.record_quick_assessment(code, request.answers, request.question_ids)
    if energy is None:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="请先完成全部题目")
    return QuickAssessmentResponse(code=code, energy=energy)
