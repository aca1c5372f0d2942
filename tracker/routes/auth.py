from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from tracker.auth.tokens import (
    hash_magic_token,
    issue_access_token,
    magic_link_expiry,
    new_magic_token,
    now_utc,
)
from tracker.config import settings
from tracker.db import get_db
from tracker.models.auth_magic_link import AuthMagicLink
from tracker.models.user import User
from tracker.schemas.auth import AccessTokenOut, RedeemIn, RequestLinkIn, RequestLinkOut
from tracker.ratelimit import rate_limit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/request-link", response_model=RequestLinkOut)
def request_link(
    payload: RequestLinkIn,
    request: Request,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:request_link",
            limit_per_window=settings.rate_limit_auth_request_link_per_min,
            window_seconds=60,
        )
    ),
) -> RequestLinkOut:
    username = payload.username.strip()
    email = payload.email.lower().strip()

    user = db.get(User, username)
    if user is None:
        taken = db.scalar(select(User).where(User.email == email))
        if taken is not None:
            raise HTTPException(status_code=400, detail="email already registered")
        user = User(username=username, email=email)
        db.add(user)
        db.flush()
        logger.info("registered user %s", username)
    elif user.email != email:
        raise HTTPException(status_code=400, detail="email does not match username")

    token = new_magic_token()

    db.add(
        AuthMagicLink(
            token_hash=hash_magic_token(token),
            username=user.username,
            expires_at=magic_link_expiry(),
            used_at=None,
        )
    )
    db.commit()

    if settings.app_env == "prod":
        return RequestLinkOut(token=None, link=f"{settings.base_url}/auth/redeem?token={token}")

    return RequestLinkOut(sent=True, token=token, link=None)

@router.post("/redeem", response_model=AccessTokenOut)
def redeem(
    payload: RedeemIn,
    request: Request,
    db: Session = Depends(get_db),
    _: None = Depends(
        rate_limit(
            "auth:redeem",
            limit_per_window=settings.rate_limit_auth_redeem_per_min,
            window_seconds=60,
        )
    ),
) -> AccessTokenOut:
    token_hash = hash_magic_token(payload.token.strip())
    now = now_utc()

    # atomic single-use + expiry gate
    stmt = (
        update(AuthMagicLink)
        .where(AuthMagicLink.token_hash == token_hash)
        .where(AuthMagicLink.used_at.is_(None))
        .where(AuthMagicLink.expires_at > now)
        .values(used_at=now)
        .returning(AuthMagicLink.username)
        .execution_options(synchronize_session="fetch")
    )

    username = db.scalar(stmt)
    if username is None:
        row = db.get(AuthMagicLink, token_hash)
        if row is None:
            raise HTTPException(status_code=400, detail="invalid token")
        if row.used_at is not None:
            raise HTTPException(status_code=400, detail="token already used")
        # unused and present, so only the expiry gate can have failed
        raise HTTPException(status_code=400, detail="token expired")

    user = db.get(User, username)
    if user is None:
        raise HTTPException(status_code=400, detail="invalid token")

    db.commit()
    return AccessTokenOut(access_token=issue_access_token(user.username))
