"""Interview quiz and assessment schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: list[str] = []
    correct_answer: str = Field(alias="correctAnswer")
    explanation: Optional[str] = None


class QuizResponse(BaseModel):
    questions: list[dict]


class QuizResultRequest(BaseModel):
    questions: list[QuizQuestion]
    answers: list[Optional[str]]
    score: float


class QuestionResult(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    userAnswer: Optional[str] = None
    isCorrect: bool
    explanation: Optional[str] = None


class AssessmentResponse(BaseModel):
    id: str
    user_id: str
    quiz_score: float
    questions: list[QuestionResult]
    category: str
    improvement_tip: Optional[str] = None
    created_at: str

    class Config:
        from_attributes = True
