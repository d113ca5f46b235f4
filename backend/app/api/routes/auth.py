"""
Authentication routes for signup, login, and logout.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.identity import Identity, admin_identity, demo_identity, identity_claims
from app.core.security import verify_password, get_password_hash, create_access_token
from app.db.session import get_db
from app.models.profile import Profile
from app.schemas.user import SignupRequest, LoginRequest, Token, ProfileResponse
from app.api.dependencies import require_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _mock_login(email: str, password: str):
    """Built-in admin and demo accounts, checked before stored profiles."""
    if email == settings.ADMIN_EMAIL and password == settings.ADMIN_PASSWORD:
        return admin_identity()
    if email == settings.DEMO_EMAIL and password == settings.DEMO_PASSWORD:
        return demo_identity()
    return None


def profile_identity(profile: Profile) -> Identity:
    return Identity(
        id=profile.id,
        display_name=profile.full_name or profile.email,
        avatar_url=profile.avatar_url,
        is_admin=profile.is_admin,
        is_mock=False,
        email=profile.email,
    )


def _token_for(identity: Identity) -> Token:
    access_token = create_access_token(data=identity_claims(identity))
    return Token(access_token=access_token, user_id=identity.id, is_admin=identity.is_admin)


@router.post("/signup", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: SignupRequest, db: Session = Depends(get_db)):
    """Register a new profile."""
    if len(user_data.password) < 6:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password must be at least 6 characters"
        )

    email = user_data.email.lower()
    if email in (settings.ADMIN_EMAIL, settings.DEMO_EMAIL):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists"
        )
    existing_email = db.query(Profile).filter(Profile.email == email).first()
    if existing_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists"
        )

    full_name = user_data.full_name
    if user_data.first_name and user_data.last_name:
        full_name = f"{user_data.first_name} {user_data.last_name}"

    new_profile = Profile(
        email=email,
        hashed_password=get_password_hash(user_data.password),
        full_name=full_name,
        avatar_url=user_data.avatar_url,
        language=user_data.language,
    )
    try:
        db.add(new_profile)
        db.commit()
        db.refresh(new_profile)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Signup failed for {email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not create profile"
        )

    logger.info(f"Profile {new_profile.id} created")
    return new_profile


@router.post("/login", response_model=Token)
async def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    email = credentials.email.strip().lower()
    identity = _mock_login(email, credentials.password)
    if identity is not None:
        return _token_for(identity)

    profile = db.query(Profile).filter(Profile.email == email).first()
    if not profile or not verify_password(credentials.password, profile.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    return _token_for(profile_identity(profile))


@router.post("/logout")
async def logout(identity: Identity = Depends(require_user)):
    """Logout (client-side token removal)."""
    return {"message": "Logged out successfully"}
