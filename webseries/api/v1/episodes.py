"""
Episode endpoints and per-episode watch progress
Mounted at: /api/v1/episodes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from webseries.database import get_db
from webseries.schemas.series import (
    EpisodeCreate, EpisodeUpdate, EpisodeResponse, EpisodeDetailResponse, EpisodeDeleteResponse,
)
from webseries.schemas.watch_history import (
    WatchProgressUpdate, WatchHistoryResponse, ContinueWatchingResponse,
)
from webseries.services.series_service import EpisodeService
from webseries.services.watch_history_service import WatchHistoryService
from webseries.utils.security import get_current_viewer, require_staff, require_admin
from webseries.models.viewer import Viewer

router = APIRouter()


# ============================================
# WATCH PROGRESS ENDPOINTS
# ============================================

@router.get("/continue/watching", response_model=List[ContinueWatchingResponse])
async def continue_watching(
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(get_current_viewer),
):
    """
    Episodes started but not finished (progress under 90%), most recent first
    """
    return WatchHistoryService.get_continue_watching(current_viewer.id, db)


@router.post("/{episode_id}/{series_id}/progress", response_model=WatchHistoryResponse)
async def update_watch_progress(
    episode_id: int,
    series_id: int,
    progress_data: WatchProgressUpdate,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(get_current_viewer),
):
    """
    Save playback progress for an episode

    Call this periodically during playback. Repeated calls update the same
    record; each call also counts as a view of the episode.
    """
    return WatchHistoryService.update_progress(
        viewer_id=current_viewer.id,
        episode_id=episode_id,
        series_id=series_id,
        progress=progress_data.progress,
        db=db,
    )


@router.get("/{episode_id}/progress", response_model=Optional[WatchHistoryResponse])
async def get_watch_progress(
    episode_id: int,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(get_current_viewer),
):
    """Saved progress for resuming playback, or null if never watched"""
    return WatchHistoryService.get_progress(current_viewer.id, episode_id, db)


# ============================================
# EPISODE ENDPOINTS
# ============================================

@router.get("/series/{series_id}", response_model=List[EpisodeResponse])
async def episodes_by_series(series_id: int, db: Session = Depends(get_db)):
    return EpisodeService.get_episodes_by_series(series_id, db)


@router.get("/{episode_id}", response_model=EpisodeDetailResponse)
async def get_episode(episode_id: int, db: Session = Depends(get_db)):
    return EpisodeService.get_episode(episode_id, db)


@router.post("", response_model=EpisodeResponse, status_code=status.HTTP_201_CREATED)
async def create_episode(
    data: EpisodeCreate,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(require_staff),
):
    """Add an episode to a series (Employee/Admin)"""
    return EpisodeService.create_episode(data, db)


@router.put("/{episode_id}", response_model=EpisodeResponse)
async def update_episode(
    episode_id: int,
    data: EpisodeUpdate,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(require_staff),
):
    """Update episode metadata (Employee/Admin)"""
    return EpisodeService.update_episode(episode_id, data, db)


@router.delete("/{episode_id}", response_model=EpisodeDeleteResponse)
async def delete_episode(
    episode_id: int,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(require_admin),
):
    """Delete an episode and recount the series (Admin only)"""
    return EpisodeService.delete_episode(episode_id, db)
