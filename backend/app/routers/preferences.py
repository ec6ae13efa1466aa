from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models.preference import UserPreference
from app.models.user import User
from app.schemas.preference import PreferenceUpdate, PreferenceResponse
from app.utils.auth import get_current_user

router = APIRouter()


def get_or_create_preferences(db: Session, user: User) -> UserPreference:
    """Fetch the user's preference record, creating the default one if absent."""
    pref = db.query(UserPreference).filter(UserPreference.user_id == user.id).first()
    if pref is None:
        pref = UserPreference(
            user_id=user.id,
            dietary_preferences=[],
            allergies=[],
            fitness_goals=[],
            budget=get_settings().DEFAULT_BUDGET,
        )
        db.add(pref)
        db.commit()
        db.refresh(pref)
    return pref


@router.get("/", response_model=PreferenceResponse)
def get_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_or_create_preferences(db, current_user)


@router.put("/", response_model=PreferenceResponse)
def update_preferences(
    body: PreferenceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    pref = get_or_create_preferences(db, current_user)
    # Saved wholesale, lists are replaced rather than merged
    pref.dietary_preferences = [t.strip() for t in body.dietary_preferences if t.strip()]
    pref.allergies = [t.strip() for t in body.allergies if t.strip()]
    pref.fitness_goals = [t.strip() for t in body.fitness_goals if t.strip()]
    pref.budget = body.budget
    db.commit()
    db.refresh(pref)
    return pref
