import logging
import secrets
from functools import lru_cache
from typing import Tuple

from sqlalchemy.orm import Session

from webseries.config import settings
from webseries.database import atomic
from webseries.exceptions import (
    Conflict, InvalidCredentials, InvalidReference, Unauthenticated, ValidationFailure
)
from webseries.models.country import Country
from webseries.models.feedback import Feedback
from webseries.models.series import Series
from webseries.models.viewer import Role, Viewer
from webseries.models.watch_history import WatchHistory
from webseries.schemas.viewer import PasswordChange, ProfileUpdate, ViewerCreate, ViewerLogin
from webseries.utils.security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _unknown_viewer_hash() -> str:
    return get_password_hash(secrets.token_urlsafe(16))


class AuthService:
    """Viewer accounts: registration, login and self-service changes"""

    @staticmethod
    def register_viewer(viewer_data: ViewerCreate, db: Session) -> Tuple[Viewer, str]:
        """Create a customer account and return it with a fresh token"""
        with atomic(db):
            existing = db.query(Viewer).filter(Viewer.email == viewer_data.email).first()
            if existing:
                raise Conflict("Email already exists")

            if not db.query(Series.id).filter(Series.id == viewer_data.series_id).first():
                raise InvalidReference("Invalid series ID")

            if not db.query(Country.id).filter(Country.id == viewer_data.country_id).first():
                raise InvalidReference("Invalid country ID")

            viewer = Viewer(
                first_name=viewer_data.first_name,
                last_name=viewer_data.last_name or None,
                email=viewer_data.email,
                password_hash=get_password_hash(viewer_data.password),
                role=Role.CUSTOMER,
                series_id=viewer_data.series_id,
                country_id=viewer_data.country_id,
                monthly_fee=viewer_data.monthly_fee or settings.DEFAULT_MONTHLY_FEE,
            )
            db.add(viewer)

        db.refresh(viewer)
        logger.info("Registered viewer %s", viewer.id)
        return viewer, create_access_token(viewer)

    @staticmethod
    def authenticate_viewer(login_data: ViewerLogin, db: Session) -> Tuple[Viewer, str]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password fail the same way so the response
        does not reveal which accounts exist.
        """
        viewer = db.query(Viewer).filter(Viewer.email == login_data.email).first()
        # Unknown emails still pay for one bcrypt check
        password_hash = viewer.password_hash if viewer else _unknown_viewer_hash()

        if not verify_password(login_data.password, password_hash) or not viewer:
            logger.warning("Failed login attempt")
            raise InvalidCredentials()

        logger.info("Viewer %s logged in", viewer.id)
        return viewer, create_access_token(viewer)

    @staticmethod
    def update_profile(viewer: Viewer, data: ProfileUpdate, db: Session) -> Viewer:
        update_data = data.dict(exclude_unset=True)
        if not update_data:
            raise ValidationFailure("No fields to update")
        if update_data.get("first_name", "") is None:
            raise ValidationFailure("First name cannot be empty")

        with atomic(db):
            for key, value in update_data.items():
                setattr(viewer, key, value)

        db.refresh(viewer)
        return viewer

    @staticmethod
    def change_password(viewer: Viewer, data: PasswordChange, db: Session):
        with atomic(db):
            if not verify_password(data.current_password, viewer.password_hash):
                raise Unauthenticated("Current password is incorrect")
            viewer.password_hash = get_password_hash(data.new_password)

        logger.info("Viewer %s changed password", viewer.id)

    @staticmethod
    def delete_account(viewer: Viewer, db: Session):
        """Remove the viewer together with its watch history and reviews"""
        viewer_id = viewer.id
        with atomic(db):
            db.query(WatchHistory).filter(WatchHistory.viewer_id == viewer_id).delete(synchronize_session=False)
            db.query(Feedback).filter(Feedback.viewer_id == viewer_id).delete(synchronize_session=False)
            db.query(Viewer).filter(Viewer.id == viewer_id).delete(synchronize_session=False)

        logger.info("Deleted viewer %s", viewer_id)
