import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..core.config import Settings
from ..models.user import User
from ..schemas.common import UserCreate, UserOut, Token
from ..core.security import verify_password, hash_password, create_access_token
from .deps import get_db, get_settings

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == user.email).first():
        raise HTTPException(status_code=400, detail="Email already registered")
    u = User(email=user.email, hashed_password=hash_password(user.password))
    db.add(u); db.commit(); db.refresh(u)
    logger.info("User registered", extra={"user_id": u.id})
    return u

@router.post("/login", response_model=Token)
def login(email: str, password: str, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    u = db.query(User).filter(User.email == email).first()
    if not u or not verify_password(password, u.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token(sub=str(u.id), settings=settings)
    return Token(access_token=token)
