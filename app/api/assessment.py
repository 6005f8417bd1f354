from fastapi import APIRouter, Depends, HTTPException, status

from app.deps.engine import get_assessment_service
from app.schemas.assessment import (
    AnswerRecordRequest,
    AnswerRecordResponse,
    ElementAnswer,
    ProgressResponse,
    RestartResponse,
    SortedQuestion,
)
from app.services.assessment_service import AssessmentService
from app.services.errors import CatalogUnavailableError, UnknownQuestionError

router = APIRouter()

CATALOG_UNAVAILABLE_DETAIL = "题库数据加载失败，请稍后重试"


@router.get("/questions", response_model=list[SortedQuestion])
async def get_questions(service: AssessmentService = Depends(get_assessment_service)) -> list[SortedQuestion]:
    questions = service.sorted_questions()
    if questions is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=CATALOG_UNAVAILABLE_DETAIL)
    return questions


@router.post("/answer", response_model=AnswerRecordResponse)
async def record_answer(
    request: AnswerRecordRequest,
    service: AssessmentService = Depends(get_assessment_service),
) -> AnswerRecordResponse:
    try:
        return service.record_answer(request.question_id, request.option_value)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=CATALOG_UNAVAILABLE_DETAIL) from e
    except UnknownQuestionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="题目不存在或已失效") from e


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(service: AssessmentService = Depends(get_assessment_service)) -> ProgressResponse:
    progress = service.get_progress()
    if progress is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=CATALOG_UNAVAILABLE_DETAIL)
    return progress


@router.post("/restart", response_model=RestartResponse)
async def restart(service: AssessmentService = Depends(get_assessment_service)) -> RestartResponse:
    return RestartResponse(previous_answers=service.restart())


@router.delete("/answers", status_code=status.HTTP_204_NO_CONTENT)
async def clear_answers(service: AssessmentService = Depends(get_assessment_service)) -> None:
    service.clear_data()


@router.get("/elements/{element_id}/answers", response_model=list[ElementAnswer])
async def get_element_answers(
    element_id: int,
    service: AssessmentService = Depends(get_assessment_service),
) -> list[ElementAnswer]:
    answers = service.element_answers(element_id)
    if answers is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=CATALOG_UNAVAILABLE_DETAIL)
    return answers
