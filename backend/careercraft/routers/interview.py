"""Interview prep router: quizzes and assessments."""

import json

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careercraft.database import get_db
from careercraft.models.assessment import Assessment
from careercraft.models.user import User
from careercraft.schemas.interview import (
    AssessmentResponse,
    QuestionResult,
    QuizResponse,
    QuizResultRequest,
)
from careercraft.middleware.auth import get_current_user
from careercraft.services import interview_service

router = APIRouter(prefix="/api/interview", tags=["interview"])


def assessment_response(assessment: Assessment) -> AssessmentResponse:
    return AssessmentResponse(
        id=assessment.id,
        user_id=assessment.user_id,
        quiz_score=assessment.quiz_score,
        questions=[QuestionResult(**q) for q in json.loads(assessment.questions)],
        category=assessment.category,
        improvement_tip=assessment.improvement_tip,
        created_at=assessment.created_at.isoformat(),
    )


@router.post("/quiz", response_model=QuizResponse)
async def generate_quiz(current_user: User = Depends(get_current_user)):
    """Generate a multiple-choice quiz for the caller's industry."""
    questions = await interview_service.generate_quiz(current_user)
    return QuizResponse(questions=questions)


@router.post("/results", response_model=AssessmentResponse, status_code=201)
async def save_quiz_result(
    req: QuizResultRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Score a finished quiz and store it as an assessment."""
    questions = [q.model_dump(by_alias=True) for q in req.questions]
    assessment = await interview_service.save_quiz_result(
        db, current_user, questions, req.answers, req.score
    )
    return assessment_response(assessment)


@router.get("/assessments", response_model=list[AssessmentResponse])
def list_assessments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [assessment_response(a) for a in interview_service.get_assessments(db, current_user)]
