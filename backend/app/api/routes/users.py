"""
Profile routes for the current identity.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.identity import Identity
from app.db.session import get_db
from app.models.profile import Profile
from app.schemas.user import ProfileResponse, ProfileUpdate
from app.api.dependencies import require_user

router = APIRouter(prefix="/users", tags=["users"])


def _stored_profile(identity: Identity, db: Session) -> Profile:
    profile = db.query(Profile).filter(Profile.id == identity.id).first()
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return profile


@router.get("/me", response_model=ProfileResponse)
async def get_current_user_info(
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Get current profile. Demo and admin sessions have no stored profile."""
    if identity.is_mock:
        return ProfileResponse(
            id=identity.id,
            email=identity.email,
            full_name=identity.display_name,
            avatar_url=identity.avatar_url,
            is_admin=identity.is_admin,
        )
    return _stored_profile(identity, db)


@router.patch("/me", response_model=ProfileResponse)
async def update_current_user(
    profile_data: ProfileUpdate,
    identity: Identity = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Update name, avatar or language of a stored profile."""
    if identity.is_mock:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Demo profiles cannot be edited"
        )
    profile = _stored_profile(identity, db)
    for field, value in profile_data.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return profile
