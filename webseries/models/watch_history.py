from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from webseries.database import Base


class WatchHistory(Base):
    __tablename__ = "watch_history"

    # One row per (viewer, series, episode)
    viewer_id = Column(Integer, ForeignKey("viewers.id", ondelete="CASCADE"), primary_key=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), primary_key=True)
    episode_id = Column(Integer, ForeignKey("episodes.id", ondelete="CASCADE"), primary_key=True)

    progress = Column(Integer, nullable=False, default=0)  # 0 to 100
    last_watched = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    viewer = relationship("Viewer", back_populates="watch_history")
    series = relationship("Series")
    episode = relationship("Episode")

    __table_args__ = (
        Index("ix_watch_history_viewer_last_watched", "viewer_id", "last_watched"),
    )

    @property
    def episode_no(self):
        return self.episode.episode_no

    @property
    def episode_title(self):
        return self.episode.title

    @property
    def duration_min(self):
        return self.episode.duration_min

    @property
    def thumbnail_url(self):
        return self.episode.thumbnail_url

    @property
    def series_name(self):
        return self.series.name

    def __repr__(self):
        return f"<WatchHistory viewer_id={self.viewer_id} episode_id={self.episode_id} progress={self.progress}>"
