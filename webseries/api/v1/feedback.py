"""
Series review endpoints
Mounted at: /api/v1/feedback
"""
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from webseries.database import get_db
from webseries.schemas.feedback import (
    FeedbackCreate, FeedbackUpdate, FeedbackDetailResponse, FeedbackCreatedResponse, FeedbackPage,
)
from webseries.schemas.viewer import MessageResponse
from webseries.services.feedback_service import FeedbackService
from webseries.utils.security import get_current_viewer, require_admin
from webseries.models.viewer import Viewer

router = APIRouter()


@router.post("", response_model=FeedbackCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_feedback(
    data: FeedbackCreate,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(get_current_viewer),
):
    """
    Review a series (1-5 stars, optional text)

    A viewer can review each series once; a second attempt returns 409 with
    `existing_feedback_id`.
    """
    feedback = FeedbackService.add_feedback(current_viewer, data, db)
    return {"message": "Feedback added successfully", "feedback_id": feedback.id}


@router.get("", response_model=FeedbackPage)
async def list_all_feedback(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(require_admin),
):
    """All reviews, newest first (Admin only)"""
    return FeedbackService.get_all_feedback(db, page=page, limit=limit)


@router.get("/my", response_model=List[FeedbackDetailResponse])
async def my_feedback(
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(get_current_viewer),
):
    return FeedbackService.get_viewer_feedback(current_viewer.id, db)


@router.get("/series/{series_id}", response_model=List[FeedbackDetailResponse])
async def series_feedback(series_id: int, db: Session = Depends(get_db)):
    """
    Public endpoint - no authentication required
    """
    return FeedbackService.get_series_feedback(series_id, db)


@router.get("/{feedback_id}", response_model=FeedbackDetailResponse)
async def get_feedback(feedback_id: int, db: Session = Depends(get_db)):
    return FeedbackService.get_feedback(feedback_id, db)


@router.put("/{feedback_id}", response_model=FeedbackDetailResponse)
async def update_feedback(
    feedback_id: int,
    data: FeedbackUpdate,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(get_current_viewer),
):
    """Edit a review (author or Admin)"""
    return FeedbackService.update_feedback(current_viewer, feedback_id, data, db)


@router.delete("/{feedback_id}", response_model=MessageResponse)
async def delete_feedback(
    feedback_id: int,
    db: Session = Depends(get_db),
    current_viewer: Viewer = Depends(get_current_viewer),
):
    """Delete a review (author or Admin)"""
    FeedbackService.delete_feedback(current_viewer, feedback_id, db)
    return {"message": "Feedback deleted successfully"}
