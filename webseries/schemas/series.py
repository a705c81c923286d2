"""
Pydantic schemas for Series, Episode and catalog reference data
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime


# ─────────────────────────────────────────────
# Episode Schemas
# ─────────────────────────────────────────────

class EpisodeCreate(BaseModel):
    series_id: int = Field(..., ge=1)
    episode_no: int = Field(..., ge=1)
    title: Optional[str] = Field(None, max_length=50)
    duration_min: Optional[int] = Field(None, ge=1)
    video_url: Optional[str] = Field(None, max_length=500)
    thumbnail_url: Optional[str] = Field(None, max_length=500)


class EpisodeUpdate(BaseModel):
    episode_no: Optional[int] = Field(None, ge=1)
    title: Optional[str] = Field(None, max_length=50)
    duration_min: Optional[int] = Field(None, ge=1)
    viewers: Optional[int] = Field(None, ge=0)
    tech_interruption: Optional[bool] = None
    video_url: Optional[str] = Field(None, max_length=500)
    thumbnail_url: Optional[str] = Field(None, max_length=500)


class EpisodeResponse(BaseModel):
    id: int
    series_id: int
    episode_no: int
    title: Optional[str]
    duration_min: Optional[int]
    viewers: int
    tech_interruption: bool
    video_url: Optional[str]
    thumbnail_url: Optional[str]

    class Config:
        from_attributes = True


class EpisodeDetailResponse(EpisodeResponse):
    series_name: Optional[str]


class EpisodeDeleteResponse(BaseModel):
    message: str
    id: int
    title: Optional[str]
    number_of_episodes: int


# ─────────────────────────────────────────────
# Series Schemas
# ─────────────────────────────────────────────

class SeriesCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=2000)
    release_date: Optional[date] = None
    country_of_release: str = Field(..., min_length=1, max_length=30)
    poster_url: Optional[str] = Field(None, max_length=500)
    banner_url: Optional[str] = Field(None, max_length=500)
    genres: List[str] = []
    dubbing: List[str] = []
    subtitles: List[str] = []


class SeriesUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=2000)
    release_date: Optional[date] = None
    country_of_release: Optional[str] = Field(None, min_length=1, max_length=30)
    poster_url: Optional[str] = Field(None, max_length=500)
    banner_url: Optional[str] = Field(None, max_length=500)
    # None leaves tags untouched, a list replaces them
    genres: Optional[List[str]] = None
    dubbing: Optional[List[str]] = None
    subtitles: Optional[List[str]] = None


class SeriesResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    release_date: Optional[date]
    country_of_release: Optional[str]
    poster_url: Optional[str]
    banner_url: Optional[str]
    number_of_episodes: int
    genres: List[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FeaturedSeriesResponse(SeriesResponse):
    total_views: int


class SeriesDetailResponse(SeriesResponse):
    dubbing: List[str] = []
    subtitles: List[str] = []
    episodes: List[EpisodeResponse] = []
    avg_rating: float
    total_reviews: int


class SeriesDeleteResponse(BaseModel):
    message: str
    id: int
    name: str


class GenreCount(BaseModel):
    name: str
    count: int


class CountryResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
