"""Industry insight schemas."""

from pydantic import BaseModel


class IndustryInsightResponse(BaseModel):
    id: str
    industry: str
    salary_ranges: list[dict]
    growth_rate: float
    demand_level: str
    top_skills: list[str]
    market_outlook: str
    key_trends: list[str]
    recommended_skills: list[str]
    last_updated: str
    next_update: str

    class Config:
        from_attributes = True
