"""
Service for series reviews (one per viewer per series)
"""
import datetime
import logging
import math
from typing import List

from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from webseries.database import atomic
from webseries.exceptions import Conflict, NotFound, ValidationFailure
from webseries.models.feedback import Feedback
from webseries.models.series import Series
from webseries.models.viewer import Viewer
from webseries.schemas.feedback import FeedbackCreate, FeedbackUpdate
from webseries.utils.security import ADMIN_ROLES, RoleGate

logger = logging.getLogger(__name__)


class FeedbackService:

    @staticmethod
    def _with_names(db: Session):
        return db.query(Feedback).options(joinedload(Feedback.viewer), joinedload(Feedback.series))

    @staticmethod
    def add_feedback(viewer: Viewer, data: FeedbackCreate, db: Session) -> Feedback:
        with atomic(db):
            if not db.query(Series.id).filter(Series.id == data.series_id).first():
                raise NotFound("Series not found")

            existing = db.query(Feedback.id).filter(
                Feedback.viewer_id == viewer.id,
                Feedback.series_id == data.series_id
            ).first()
            if existing:
                raise Conflict(
                    "You have already reviewed this series. Please update your existing review instead.",
                    existing_feedback_id=existing.id,
                )

            feedback = Feedback(
                viewer_id=viewer.id,
                series_id=data.series_id,
                rating=data.rating,
                text=data.text,
                date=datetime.date.today(),
            )
            db.add(feedback)

        db.refresh(feedback)
        logger.info("Viewer %s reviewed series %s", viewer.id, data.series_id)
        return feedback

    @staticmethod
    def get_feedback(feedback_id: int, db: Session) -> Feedback:
        feedback = FeedbackService._with_names(db).filter(Feedback.id == feedback_id).first()
        if not feedback:
            raise NotFound("Feedback not found")
        return feedback

    @staticmethod
    def get_series_feedback(series_id: int, db: Session) -> List[Feedback]:
        return FeedbackService._with_names(db).filter(
            Feedback.series_id == series_id
        ).order_by(desc(Feedback.date), desc(Feedback.id)).all()

    @staticmethod
    def get_viewer_feedback(viewer_id: int, db: Session) -> List[Feedback]:
        return FeedbackService._with_names(db).filter(
            Feedback.viewer_id == viewer_id
        ).order_by(desc(Feedback.date), desc(Feedback.id)).all()

    @staticmethod
    def get_all_feedback(db: Session, page: int = 1, limit: int = 20) -> dict:
        total = db.query(Feedback).count()
        feedback = FeedbackService._with_names(db).order_by(
            desc(Feedback.date), desc(Feedback.id)
        ).offset((page - 1) * limit).limit(limit).all()

        return {
            "feedback": feedback,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
            },
        }

    @staticmethod
    def update_feedback(viewer: Viewer, feedback_id: int, data: FeedbackUpdate, db: Session) -> Feedback:
        update_data = data.dict(exclude_unset=True)
        if not update_data:
            raise ValidationFailure("No fields to update")
        if "rating" in update_data and update_data["rating"] is None:
            raise ValidationFailure("Rating cannot be empty")

        with atomic(db):
            feedback = db.query(Feedback).filter(Feedback.id == feedback_id).first()
            if not feedback:
                raise NotFound("Feedback not found")

            RoleGate.authorize_owner_or_role(
                viewer, feedback.viewer_id, ADMIN_ROLES,
                message="You can only edit your own reviews",
            )

            for key, value in update_data.items():
                setattr(feedback, key, value)
            feedback.date = datetime.date.today()

        logger.info("Feedback %s updated by viewer %s", feedback_id, viewer.id)
        return FeedbackService.get_feedback(feedback_id, db)

    @staticmethod
    def delete_feedback(viewer: Viewer, feedback_id: int, db: Session):
        with atomic(db):
            feedback = db.query(Feedback).filter(Feedback.id == feedback_id).first()
            if not feedback:
                raise NotFound("Feedback not found")

            RoleGate.authorize_owner_or_role(
                viewer, feedback.viewer_id, ADMIN_ROLES,
                message="You can only delete your own reviews",
            )
            db.delete(feedback)

        logger.info("Feedback %s deleted by viewer %s", feedback_id, viewer.id)
