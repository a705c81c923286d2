"""
Series catalog endpoints
Mounted at: /api/v1/series
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from webseries.database import get_db
from webseries.schemas.series import (
    SeriesCreate, SeriesUpdate, SeriesResponse, SeriesDetailResponse,
    FeaturedSeriesResponse, SeriesDeleteResponse, GenreCount, CountryResponse,
)
from webseries.services.series_service import SeriesService
from webseries.utils.security import require_staff, require_admin
from webseries.models.viewer import Viewer

router = APIRouter()


# ════════════════════════════════════════════════════════════════
# READ ENDPOINTS (public)
# ════════════════════════════════════════════════════════════════

@router.get("", response_model=List[SeriesResponse])
async def list_series(db: Session = Depends(get_db)):
    """All series with their genres, newest release first"""
    return SeriesService.get_all_series(db)


@router.get("/featured", response_model=List[FeaturedSeriesResponse])
async def featured_series(db: Session = Depends(get_db)):
    """Most watched series by total episode viewers"""
    return SeriesService.get_featured_series(db)


@router.get("/search", response_model=List[SeriesResponse])
async def search_series(
    q: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db),
):
    """Match name or description; an empty query returns an empty list"""
    return SeriesService.search_series(q, db)


@router.get("/genres", response_model=List[GenreCount])
async def list_genres(db: Session = Depends(get_db)):
    return SeriesService.get_all_genres(db)


@router.get("/countries", response_model=List[CountryResponse])
async def list_countries(db: Session = Depends(get_db)):
    return SeriesService.get_all_countries(db)


@router.get("/genre/{genre}", response_model=List[SeriesResponse])
async def series_by_genre(genre: str, db: Session = Depends(get_db)):
    return SeriesService.get_series_by_genre(genre, db)


@router.get("/{series_id}", response_model=SeriesDetailResponse)
async def get_series(series_id: int, db: Session = Depends(get_db)):
    """Single series with tags, episodes and average rating"""
    return SeriesService.get_series_detail(series_id, db)


# ════════════════════════════════════════════════════════════════
# WRITE ENDPOINTS (staff / admin)
# ════════════════════════════════════════════════════════════════

@router.post("", response_model=SeriesResponse, status_code=status.HTTP_201_CREATED)
async def create_series(
    data: SeriesCreate,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(require_staff),
):
    """Create a new series (Employee/Admin)"""
    return SeriesService.create_series(data, db)


@router.put("/{series_id}", response_model=SeriesResponse)
async def update_series(
    series_id: int,
    data: SeriesUpdate,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(require_staff),
):
    """
    Update series metadata (Employee/Admin)

    Sending `genres`, `dubbing` or `subtitles` replaces that whole tag set.
    """
    return SeriesService.update_series(series_id, data, db)


@router.delete("/{series_id}", response_model=SeriesDeleteResponse)
async def delete_series(
    series_id: int,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(require_admin),
):
    """Delete a series with its episodes, reviews and tags (Admin only)"""
    return SeriesService.delete_series(series_id, db)
