from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class WatchProgressUpdate(BaseModel):
    progress: int = Field(..., ge=0, le=100)


class WatchHistoryResponse(BaseModel):
    viewer_id: int
    series_id: int
    episode_id: int
    progress: int
    last_watched: datetime

    class Config:
        from_attributes = True


class ContinueWatchingResponse(WatchHistoryResponse):
    episode_no: int
    episode_title: Optional[str]
    duration_min: Optional[int]
    thumbnail_url: Optional[str]
    series_name: str
