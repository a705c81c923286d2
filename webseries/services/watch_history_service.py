"""
Service for tracking viewer watch progress per episode
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from webseries.config import settings
from webseries.database import atomic
from webseries.exceptions import NotFound
from webseries.models.series import Episode
from webseries.models.watch_history import WatchHistory

logger = logging.getLogger(__name__)


class WatchHistoryService:
    """Handle watch progress and the continue-watching list"""

    @staticmethod
    def update_progress(
        viewer_id: int,
        episode_id: int,
        series_id: int,
        progress: int,
        db: Session
    ) -> WatchHistory:
        """
        Insert or update progress for an episode and bump its viewer counter

        Args:
            viewer_id: Viewer ID
            episode_id: Episode ID
            series_id: Series the episode belongs to
            progress: Percentage watched (0-100)
            db: Database session

        Returns:
            The single WatchHistory row for this viewer/series/episode
        """
        with atomic(db):
            episode = db.query(Episode).filter(
                Episode.id == episode_id,
                Episode.series_id == series_id
            ).first()
            if not episode:
                raise NotFound("Episode not found")

            record = db.query(WatchHistory).filter(
                WatchHistory.viewer_id == viewer_id,
                WatchHistory.series_id == series_id,
                WatchHistory.episode_id == episode_id
            ).first()

            if record:
                record.progress = progress
                record.last_watched = datetime.utcnow()
            else:
                record = WatchHistory(
                    viewer_id=viewer_id,
                    series_id=series_id,
                    episode_id=episode_id,
                    progress=progress,
                    last_watched=datetime.utcnow()
                )
                db.add(record)

            # Counted on every progress report, not only the first
            db.query(Episode).filter(Episode.id == episode_id).update(
                {Episode.viewers: Episode.viewers + 1}, synchronize_session=False
            )

        db.refresh(record)
        return record

    @staticmethod
    def get_progress(viewer_id: int, episode_id: int, db: Session) -> Optional[WatchHistory]:
        return db.query(WatchHistory).filter(
            WatchHistory.viewer_id == viewer_id,
            WatchHistory.episode_id == episode_id
        ).first()

    @staticmethod
    def get_continue_watching(
        viewer_id: int,
        db: Session,
        limit: Optional[int] = None
    ) -> List[WatchHistory]:
        """
        Episodes the viewer started but has not finished, newest first
        """
        return (
            db.query(WatchHistory)
            .options(joinedload(WatchHistory.episode), joinedload(WatchHistory.series))
            .filter(
                WatchHistory.viewer_id == viewer_id,
                WatchHistory.progress < settings.CONTINUE_WATCHING_THRESHOLD
            )
            .order_by(desc(WatchHistory.last_watched))
            .limit(limit or settings.CONTINUE_WATCHING_LIMIT)
            .all()
        )
