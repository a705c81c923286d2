"""
Service layer for Series and Episode business logic
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from webseries.config import settings
from webseries.database import atomic
from webseries.exceptions import Conflict, NotFound, ValidationFailure
from webseries.models.country import Country
from webseries.models.feedback import Feedback
from webseries.models.series import Episode, Series, SeriesDubbing, SeriesGenre, SeriesSubtitle
from webseries.schemas.series import EpisodeCreate, EpisodeUpdate, SeriesCreate, SeriesUpdate

logger = logging.getLogger(__name__)

TAG_FIELDS = ("genres", "dubbing", "subtitles")


def _clean_tags(values: List[str]) -> List[str]:
    """Trim, drop blanks and duplicates, keep first-seen order"""
    seen = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.append(value)
    return seen


# ─────────────────────────────────────────────
# Series Service
# ─────────────────────────────────────────────

class SeriesService:

    @staticmethod
    def _base_query(db: Session):
        return db.query(Series).options(selectinload(Series.genre_tags))

    @staticmethod
    def _replace_tags(series_id: int, db: Session, genres=None, dubbing=None, subtitles=None):
        """Delete every tag of a kind and insert the new set; None leaves a kind alone"""
        for model, column, values in (
            (SeriesGenre, "type_name", genres),
            (SeriesDubbing, "language", dubbing),
            (SeriesSubtitle, "language", subtitles),
        ):
            if values is None:
                continue
            db.query(model).filter(model.series_id == series_id).delete()
            db.add_all([model(series_id=series_id, **{column: value}) for value in _clean_tags(values)])

    @staticmethod
    def create_series(data: SeriesCreate, db: Session) -> Series:
        fields = data.dict(exclude=set(TAG_FIELDS))
        with atomic(db):
            series = Series(**fields, number_of_episodes=0)
            db.add(series)
            db.flush()
            SeriesService._replace_tags(series.id, db, data.genres, data.dubbing, data.subtitles)

        db.refresh(series)
        logger.info("Created series %s (%s)", series.id, series.name)
        return series

    @staticmethod
    def get_series_by_id(series_id: int, db: Session) -> Series:
        series = db.query(Series).filter(Series.id == series_id).first()
        if not series:
            raise NotFound("Series not found")
        return series

    @staticmethod
    def get_series_detail(series_id: int, db: Session) -> Series:
        """Series with tags, ordered episodes and review aggregate"""
        series = SeriesService.get_series_by_id(series_id, db)

        avg_rating, total_reviews = db.query(
            func.avg(Feedback.rating), func.count(Feedback.id)
        ).filter(Feedback.series_id == series_id).one()

        series.avg_rating = round(float(avg_rating), 2) if avg_rating else 0.0
        series.total_reviews = total_reviews or 0
        return series

    @staticmethod
    def get_all_series(db: Session) -> List[Series]:
        return SeriesService._base_query(db).order_by(
            Series.release_date.desc(), Series.id.desc()
        ).all()

    @staticmethod
    def get_featured_series(db: Session, limit: Optional[int] = None) -> List[Series]:
        """Series ranked by the summed viewer counters of their episodes"""
        total_views = func.coalesce(func.sum(Episode.viewers), 0).label("total_views")
        rows = (
            db.query(Series, total_views)
            .outerjoin(Episode, Episode.series_id == Series.id)
            .group_by(Series.id)
            .order_by(total_views.desc(), Series.id)
            .limit(limit or settings.FEATURED_LIMIT)
            .all()
        )

        featured = []
        for series, views in rows:
            series.total_views = int(views)
            featured.append(series)
        return featured

    @staticmethod
    def search_series(query: Optional[str], db: Session) -> List[Series]:
        if not query or not query.strip():
            return []

        # Wildcards in the query are matched literally
        term = query.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{term}%"
        return SeriesService._base_query(db).filter(
            or_(
                Series.name.ilike(pattern, escape="\\"),
                Series.description.ilike(pattern, escape="\\"),
            )
        ).order_by(Series.release_date.desc(), Series.id.desc()).all()

    @staticmethod
    def get_series_by_genre(genre: str, db: Session) -> List[Series]:
        tagged = db.query(SeriesGenre.series_id).filter(SeriesGenre.type_name == genre)
        return SeriesService._base_query(db).filter(
            Series.id.in_(tagged)
        ).order_by(Series.release_date.desc(), Series.id.desc()).all()

    @staticmethod
    def get_all_genres(db: Session) -> List[dict]:
        rows = (
            db.query(SeriesGenre.type_name, func.count(SeriesGenre.series_id))
            .group_by(SeriesGenre.type_name)
            .order_by(SeriesGenre.type_name)
            .all()
        )
        return [{"name": name, "count": count} for name, count in rows]

    @staticmethod
    def get_all_countries(db: Session) -> List[Country]:
        return db.query(Country).order_by(Country.name).all()

    @staticmethod
    def update_series(series_id: int, data: SeriesUpdate, db: Session) -> Series:
        update_data = data.dict(exclude_unset=True)
        if not update_data:
            raise ValidationFailure("No fields to update")

        with atomic(db):
            series = SeriesService.get_series_by_id(series_id, db)

            for key, value in update_data.items():
                if key in TAG_FIELDS:
                    continue
                if value is None and key in ("name", "country_of_release"):
                    raise ValidationFailure(f"{key} cannot be empty")
                setattr(series, key, value)

            # Tag rows live in other tables, so onupdate would not fire for them
            if any(update_data.get(field) is not None for field in TAG_FIELDS):
                series.updated_at = datetime.utcnow()

            SeriesService._replace_tags(
                series_id,
                db,
                genres=update_data.get("genres"),
                dubbing=update_data.get("dubbing"),
                subtitles=update_data.get("subtitles"),
            )

        db.refresh(series)
        logger.info("Updated series %s", series_id)
        return series

    @staticmethod
    def delete_series(series_id: int, db: Session) -> dict:
        """Episodes, tags, reviews and watch history go with it via ON DELETE CASCADE"""
        with atomic(db):
            series = SeriesService.get_series_by_id(series_id, db)
            name = series.name
            db.query(Series).filter(Series.id == series_id).delete(synchronize_session=False)

        logger.info("Deleted series %s (%s)", series_id, name)
        return {"message": "Series deleted successfully", "id": series_id, "name": name}


# ─────────────────────────────────────────────
# Episode Service
# ─────────────────────────────────────────────

class EpisodeService:

    @staticmethod
    def _recount_episodes(series_id: int, db: Session) -> int:
        """Store the live episode count on the series row"""
        db.flush()
        count = db.query(func.count(Episode.id)).filter(Episode.series_id == series_id).scalar()
        db.query(Series).filter(Series.id == series_id).update(
            {Series.number_of_episodes: count}, synchronize_session=False
        )
        return count

    @staticmethod
    def _check_episode_no(series_id: int, episode_no: int, db: Session, exclude_id: Optional[int] = None):
        query = db.query(Episode.id).filter(
            Episode.series_id == series_id,
            Episode.episode_no == episode_no,
        )
        if exclude_id is not None:
            query = query.filter(Episode.id != exclude_id)
        if query.first():
            raise Conflict("Episode number already exists for this series")

    @staticmethod
    def create_episode(data: EpisodeCreate, db: Session) -> Episode:
        with atomic(db):
            SeriesService.get_series_by_id(data.series_id, db)
            EpisodeService._check_episode_no(data.series_id, data.episode_no, db)

            episode = Episode(**data.dict(), viewers=0, tech_interruption=False)
            db.add(episode)
            EpisodeService._recount_episodes(data.series_id, db)

        db.refresh(episode)
        logger.info("Created episode %s for series %s", episode.id, episode.series_id)
        return episode

    @staticmethod
    def get_episode(episode_id: int, db: Session) -> Episode:
        episode = db.query(Episode).filter(Episode.id == episode_id).first()
        if not episode:
            raise NotFound("Episode not found")
        return episode

    @staticmethod
    def get_episodes_by_series(series_id: int, db: Session) -> List[Episode]:
        return db.query(Episode).filter(
            Episode.series_id == series_id
        ).order_by(Episode.episode_no).all()

    @staticmethod
    def update_episode(episode_id: int, data: EpisodeUpdate, db: Session) -> Episode:
        update_data = data.dict(exclude_unset=True)
        if not update_data:
            raise ValidationFailure("No fields to update")

        with atomic(db):
            episode = EpisodeService.get_episode(episode_id, db)

            if "episode_no" in update_data:
                if update_data["episode_no"] is None:
                    raise ValidationFailure("episode_no cannot be empty")
                EpisodeService._check_episode_no(
                    episode.series_id, update_data["episode_no"], db, exclude_id=episode.id
                )

            for key, value in update_data.items():
                if value is None and key in ("viewers", "tech_interruption"):
                    raise ValidationFailure(f"{key} cannot be empty")
                setattr(episode, key, value)

        db.refresh(episode)
        logger.info("Updated episode %s", episode_id)
        return episode

    @staticmethod
    def delete_episode(episode_id: int, db: Session) -> dict:
        with atomic(db):
            episode = EpisodeService.get_episode(episode_id, db)
            series_id = episode.series_id
            title = episode.title

            db.delete(episode)
            count = EpisodeService._recount_episodes(series_id, db)

        logger.info("Deleted episode %s from series %s", episode_id, series_id)
        return {
            "message": "Episode deleted successfully",
            "id": episode_id,
            "title": title,
            "number_of_episodes": count,
        }
