from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.store import Store
from app.models.user import User
from app.schemas.store import StoreResponse
from app.utils.auth import get_current_user

router = APIRouter()


@router.get("/", response_model=list[StoreResponse])
def list_stores(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Store).order_by(Store.name.asc()).all()
