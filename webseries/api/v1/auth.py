from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from webseries.database import get_db
from webseries.schemas.viewer import (
    ViewerCreate, ViewerLogin, ViewerResponse, ProfileUpdate, PasswordChange,
    AuthResponse, MessageResponse
)
from webseries.services.auth_service import AuthService
from webseries.utils.security import get_current_viewer
from webseries.models.viewer import Viewer

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    viewer_data: ViewerCreate,
    db: Session = Depends(get_db)
):
    """
    Register a new viewer account

    - **first_name**: 2-30 characters
    - **email**: Valid, unused email address
    - **password**: 8-100 characters with upper case, lower case and a digit
    - **series_id** / **country_id**: Must reference existing rows

    New accounts always get the `customer` role.
    """
    viewer, token = AuthService.register_viewer(viewer_data, db)
    return {"message": "User registered successfully", "token": token, "viewer": viewer}


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: ViewerLogin,
    db: Session = Depends(get_db)
):
    """
    Login with email and password

    Returns a bearer token valid for the configured number of days
    """
    viewer, token = AuthService.authenticate_viewer(login_data, db)
    return {"message": "Login successful", "token": token, "viewer": viewer}


@router.get("/me", response_model=ViewerResponse)
async def get_me(
    current_viewer: Viewer = Depends(get_current_viewer)
):
    """
    Get the authenticated viewer's profile
    """
    return current_viewer


@router.put("/profile", response_model=ViewerResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    current_viewer: Viewer = Depends(get_current_viewer),
    db: Session = Depends(get_db)
):
    """
    Update name and billing details. Only the fields sent are changed.
    """
    return AuthService.update_profile(current_viewer, profile_data, db)


@router.put("/password", response_model=MessageResponse)
async def change_password(
    password_data: PasswordChange,
    current_viewer: Viewer = Depends(get_current_viewer),
    db: Session = Depends(get_db)
):
    AuthService.change_password(current_viewer, password_data, db)
    return {"message": "Password changed successfully"}


@router.delete("/account", response_model=MessageResponse)
async def delete_account(
    current_viewer: Viewer = Depends(get_current_viewer),
    db: Session = Depends(get_db)
):
    """
    Delete the current account

    Watch history and reviews are removed with it
    """
    AuthService.delete_account(current_viewer, db)
    return {"message": "Account deleted successfully"}
