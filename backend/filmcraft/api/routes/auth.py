from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from filmcraft.api.dependencies import SessionContext, get_context, get_db
from filmcraft import models, schemas
from filmcraft.services import auth

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=schemas.SessionOut, status_code=status.HTTP_201_CREATED)
def sign_up(credentials: schemas.Credentials, db: Session = Depends(get_db)):
    try:
        session = auth.sign_up(db, credentials.email, credentials.password)
    except auth.AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_schema_session(session)


@router.post("/signin", response_model=schemas.SessionOut)
def sign_in(credentials: schemas.Credentials, db: Session = Depends(get_db)):
    try:
        session = auth.sign_in(db, credentials.email, credentials.password)
    except auth.AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return _to_schema_session(session)


@router.post("/refresh", response_model=schemas.SessionOut)
def refresh(payload: schemas.RefreshRequest, db: Session = Depends(get_db)):
    try:
        session = auth.refresh_session(db, payload.refresh_token)
    except auth.AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return _to_schema_session(session)


@router.post("/signout")
def sign_out(ctx: SessionContext = Depends(get_context)):
    auth.sign_out(ctx.db, ctx.access_token)
    return {"status": "signed out"}


@router.get("/me", response_model=schemas.User)
def me(ctx: SessionContext = Depends(get_context)):
    return ctx.user


def _to_schema_session(s: models.AuthSession) -> schemas.SessionOut:
    return schemas.SessionOut(
        access_token=s.access_token,
        refresh_token=s.refresh_token,
        expires_at=s.expires_at,
        user=schemas.User.model_validate(s.user),
    )
