"""
Series and Episode models plus the series tag tables (genre, dubbing, subtitle)
"""
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship
from datetime import datetime
from webseries.database import Base


class Series(Base):
    __tablename__ = "series"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, index=True)
    description = Column(Text)
    release_date = Column(Date)
    country_of_release = Column(String(30))

    # Media
    poster_url = Column(String(500))
    banner_url = Column(String(500))

    # Kept equal to len(episodes) by EpisodeService
    number_of_episodes = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    episodes = relationship("Episode", back_populates="series", cascade="all, delete-orphan",
                            passive_deletes=True, order_by="Episode.episode_no")
    genre_tags = relationship("SeriesGenre", cascade="all, delete-orphan", passive_deletes=True,
                              order_by="SeriesGenre.type_name")
    dubbing_tags = relationship("SeriesDubbing", cascade="all, delete-orphan", passive_deletes=True,
                                order_by="SeriesDubbing.language")
    subtitle_tags = relationship("SeriesSubtitle", cascade="all, delete-orphan", passive_deletes=True,
                                 order_by="SeriesSubtitle.language")
    feedback = relationship("Feedback", back_populates="series", cascade="all, delete-orphan",
                            passive_deletes=True)

    # Plain names instead of tag rows
    @property
    def genres(self):
        return [tag.type_name for tag in self.genre_tags]

    @property
    def dubbing(self):
        return [tag.language for tag in self.dubbing_tags]

    @property
    def subtitles(self):
        return [tag.language for tag in self.subtitle_tags]

    def __repr__(self):
        return f"<Series {self.name}>"


class SeriesGenre(Base):
    __tablename__ = "series_genres"

    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), primary_key=True)
    type_name = Column(String(50), primary_key=True, index=True)

    def __repr__(self):
        return f"<SeriesGenre series_id={self.series_id} type={self.type_name}>"


class SeriesDubbing(Base):
    __tablename__ = "series_dubbing"

    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), primary_key=True)
    language = Column(String(30), primary_key=True)


class SeriesSubtitle(Base):
    __tablename__ = "series_subtitles"

    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), primary_key=True)
    language = Column(String(30), primary_key=True)


class Episode(Base):
    __tablename__ = "episodes"

    id = Column(Integer, primary_key=True, index=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    episode_no = Column(Integer, nullable=False)
    title = Column(String(50))
    duration_min = Column(Integer)
    viewers = Column(Integer, nullable=False, default=0)
    tech_interruption = Column(Boolean, nullable=False, default=False)
    video_url = Column(String(500))
    thumbnail_url = Column(String(500))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    series = relationship("Series", back_populates="episodes")

    __table_args__ = (
        UniqueConstraint("series_id", "episode_no", name="unique_series_episode_no"),
    )

    @property
    def series_name(self):
        return self.series.name if self.series else None

    def __repr__(self):
        return f"<Episode series_id={self.series_id} ep={self.episode_no}>"
