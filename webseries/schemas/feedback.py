from pydantic import BaseModel, Field
from typing import Optional, List
import datetime


class FeedbackCreate(BaseModel):
    series_id: int = Field(..., ge=1)
    rating: int = Field(..., ge=1, le=5)
    text: Optional[str] = Field(None, max_length=2000)


class FeedbackUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    text: Optional[str] = Field(None, max_length=2000)


class FeedbackResponse(BaseModel):
    id: int
    viewer_id: int
    series_id: int
    rating: int
    text: Optional[str]
    date: datetime.date

    class Config:
        from_attributes = True


class FeedbackDetailResponse(FeedbackResponse):
    first_name: Optional[str]
    last_name: Optional[str]
    series_name: Optional[str]


class FeedbackCreatedResponse(BaseModel):
    message: str
    feedback_id: int


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class FeedbackPage(BaseModel):
    feedback: List[FeedbackDetailResponse]
    pagination: Pagination
