from sqlalchemy import Column, Integer, Date, ForeignKey, UniqueConstraint, Text
from sqlalchemy.orm import relationship
import datetime
from webseries.database import Base


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    viewer_id = Column(Integer, ForeignKey("viewers.id", ondelete="CASCADE"), nullable=False, index=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)  # 1-5 stars
    text = Column(Text)
    date = Column(Date, nullable=False, default=datetime.date.today)

    # Relationships
    viewer = relationship("Viewer", back_populates="feedback")
    series = relationship("Series", back_populates="feedback")

    # One review per viewer per series
    __table_args__ = (
        UniqueConstraint("viewer_id", "series_id", name="unique_viewer_series_feedback"),
    )

    @property
    def first_name(self):
        return self.viewer.first_name if self.viewer else None

    @property
    def last_name(self):
        return self.viewer.last_name if self.viewer else None

    @property
    def series_name(self):
        return self.series.name if self.series else None

    def __repr__(self):
        return f"<Feedback viewer_id={self.viewer_id} series_id={self.series_id} rating={self.rating}>"
