"""Cover letter schemas."""

from typing import Optional

from pydantic import BaseModel


class CoverLetterRequest(BaseModel):
    job_title: str = ""
    company_name: str = ""
    job_description: str = ""


class CoverLetterResponse(BaseModel):
    id: str
    user_id: str
    content: str
    job_title: str
    company_name: str
    job_description: Optional[str] = None
    status: str
    created_at: str

    class Config:
        from_attributes = True
