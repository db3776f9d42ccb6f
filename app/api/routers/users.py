from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.services.user_service import UserService
from app.domain.schemas import AddressIn, LoginIn, UserAddressRead, UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).create_user(payload)


@router.post("/login", response_model=UserRead)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    return UserService(db).verify_credentials(payload.email, payload.password)


@router.get("/{user_id}", response_model=UserRead | UserAddressRead)
def get_user(
    user_id: int,
    q: Optional[str] = Query(None, pattern="^address$"),
    db: Session = Depends(get_db),
):
    """?q=address zwraca tylko email i adres."""
    service = UserService(db)
    if q == "address":
        return UserAddressRead(**service.get_user_address(user_id))
    return UserRead.model_validate(service.get_user(user_id))


@router.put("/{user_id}/address")
def set_address(user_id: int, payload: AddressIn, db: Session = Depends(get_db)):
    service = UserService(db)
    user = service.get_user(user_id)
    return {"address": service.set_address(user, payload.address)}
