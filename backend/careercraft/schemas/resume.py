"""Resume schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class ResumeSaveRequest(BaseModel):
    content: Optional[str] = None


class ResumeResponse(BaseModel):
    id: str
    user_id: str
    content: str
    ats_score: Optional[float] = None
    feedback: Optional[str] = None
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class ImproveRequest(BaseModel):
    current: str = ""
    type: str = Field("", description="Section type: summary, experience, education, ...")


class ImproveResponse(BaseModel):
    improved: str
