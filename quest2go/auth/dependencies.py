from fastapi import Depends, Request
from sqlalchemy.orm import Session

from quest2go.auth.jwt_handler import SessionTokenCodec
from quest2go.auth.passwords import PasswordHasher
from quest2go.core.config import Settings
from quest2go.core.errors import AuthError
from quest2go.database import get_db
from quest2go.store.accounts import AccountStore
from quest2go.store.articles import ArticleStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_codec(request: Request) -> SessionTokenCodec:
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_account_store(db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db)


def get_article_store(db: Session = Depends(get_db)) -> ArticleStore:
    return ArticleStore(db)


def require_session(
    request: Request,
    settings: Settings = Depends(get_settings),
    codec: SessionTokenCodec = Depends(get_token_codec),
) -> int:
    """Resolve the session cookie to an account id, or fail the request with 401."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise AuthError("Authentication required")

    claims = codec.verify(token)
    request.state.session = claims
    request.state.account_id = claims.account_id
    return claims.account_id
