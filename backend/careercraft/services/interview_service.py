"""Interview prep service: AI quizzes, scoring and stored assessments."""

import json
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careercraft import prompts
from careercraft.config import settings
from careercraft.errors import CareerCraftError, MissingInput, PersistenceFailed
from careercraft.models.assessment import Assessment
from careercraft.models.user import User
from careercraft.services import ai_client
from careercraft.services.response_parser import parse_json_reply, strip_code_fences

logger = logging.getLogger(__name__)


async def generate_quiz(user: User) -> list[dict]:
    """Generate multiple-choice questions for the caller's industry and skills."""
    if not user.industry:
        raise MissingInput("User industry not set", field="industry")

    skills = json.loads(user.skills) if user.skills else []
    text = await ai_client.generate_text(
        prompts.quiz_prompt(user.industry, skills, settings.QUIZ_QUESTION_COUNT)
    )
    quiz = parse_json_reply(text, required_key="questions", expected_type=list)
    return quiz["questions"]


def score_answers(questions: list[dict], answers: list[Optional[str]]) -> list[dict]:
    """Match answers to questions by position.

    A question with no answer at its position is incorrect.
    """
    results = []
    for index, q in enumerate(questions):
        user_answer = answers[index] if index < len(answers) else None
        results.append({
            "question": q.get("question"),
            "answer": q.get("correctAnswer"),
            "userAnswer": user_answer,
            "isCorrect": user_answer is not None and q.get("correctAnswer") == user_answer,
            "explanation": q.get("explanation"),
        })
    return results


async def _improvement_tip(user: User, wrong_answers: list[dict]) -> str:
    try:
        text = await ai_client.generate_text(prompts.improvement_tip_prompt(user.industry, wrong_answers))
        tip = strip_code_fences(text)
        if tip:
            return tip
    except CareerCraftError:
        logger.warning("Error generating improvement tip", extra={"user_id": user.id})
    return prompts.IMPROVEMENT_TIP_FALLBACK


async def save_quiz_result(
    db: Session,
    user: User,
    questions: list[dict],
    answers: list[Optional[str]],
    score: float,
) -> Assessment:
    """Score the attempt, add a tip when something was missed, and store it."""
    results = score_answers(questions, answers)
    wrong_answers = [r for r in results if not r["isCorrect"]]

    improvement_tip = None
    if wrong_answers:
        improvement_tip = await _improvement_tip(user, wrong_answers)

    assessment = Assessment(
        user_id=user.id,
        quiz_score=score,
        questions=json.dumps(results),
        category="Technical",
        improvement_tip=improvement_tip,
    )
    try:
        db.add(assessment)
        db.commit()
        db.refresh(assessment)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving quiz result", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to save quiz result")
    return assessment


def get_assessments(db: Session, user: User) -> list[Assessment]:
    try:
        return (
            db.query(Assessment)
            .filter(Assessment.user_id == user.id)
            .order_by(Assessment.created_at.desc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("Error fetching assessments", extra={"user_id": user.id})
        raise PersistenceFailed("Failed to fetch assessments")
