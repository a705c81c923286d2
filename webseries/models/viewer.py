import enum
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from webseries.database import Base


class Role(str, enum.Enum):
    CUSTOMER = "customer"
    EMPLOYEE = "employee"
    ADMIN = "admin"


class Viewer(Base):
    __tablename__ = "viewers"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(30), nullable=False)
    last_name = Column(String(30))
    email = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, values_callable=lambda roles: [r.value for r in roles], name="viewer_role"),
        nullable=False,
        default=Role.CUSTOMER,
    )

    # Billing
    billing_street = Column(String(50))
    billing_city = Column(String(30))
    billing_zipcode = Column(Integer)
    monthly_fee = Column(Float, nullable=False, default=14.99)

    # Assigned at registration
    series_id = Column(Integer, ForeignKey("series.id", ondelete="SET NULL"))
    country_id = Column(Integer, ForeignKey("countries.id", ondelete="SET NULL"))

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    country = relationship("Country")
    feedback = relationship("Feedback", back_populates="viewer", cascade="all, delete-orphan", passive_deletes=True)
    watch_history = relationship("WatchHistory", back_populates="viewer", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Viewer {self.email} role={self.role}>"
