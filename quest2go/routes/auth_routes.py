import logging

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError

from quest2go.auth.dependencies import (
    get_account_store,
    get_password_hasher,
    get_settings,
    get_token_codec,
    require_session,
)
from quest2go.auth.jwt_handler import SessionClaims, SessionTokenCodec
from quest2go.auth.passwords import PasswordHasher
from quest2go.core.config import Settings
from quest2go.core.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from quest2go.models.account import Account, UserType
from quest2go.models.profile import EducatorProfile, ResearcherProfile, RoleProfile
from quest2go.store.accounts import AccountStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=['auth'])

INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password'


class SignupRequest(BaseModel):
    first_name: str = Field(alias='firstName')
    last_name: str = Field(alias='lastName')
    email: str
    password: str
    confirm_password: str | None = Field(default=None, alias='confirmPassword')
    user_type: UserType = Field(alias='userType')
    institution: str | None = None
    year_level: str | None = Field(default=None, alias='yearLevel')
    course: str | None = None
    organization: str | None = None

    class Config:
        populate_by_name = True

    @field_validator('first_name', 'last_name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email', 'password')
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('Field is required.')
        return value


class LoginRequest(BaseModel):
    email: str = ''
    password: str = ''


def build_role_profile(data: SignupRequest) -> RoleProfile:
    if data.user_type is UserType.EDUCATOR:
        if not (data.institution and data.year_level and data.course):
            raise ValidationError('Educator accounts require institution, yearLevel and course')
        return EducatorProfile(institution=data.institution, year_level=data.year_level, course=data.course)

    if not data.organization:
        raise ValidationError('Researcher accounts require organization')
    return ResearcherProfile(organization=data.organization)


def serialize_account(account: Account) -> dict:
    return {
        'id': account.account_id,
        'email': account.email,
        'firstName': account.first_name,
        'lastName': account.last_name,
        'userType': account.user_type,
    }


@router.post('/signup', status_code=status.HTTP_201_CREATED)
def signup(
    data: SignupRequest,
    store: AccountStore = Depends(get_account_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: SessionTokenCodec = Depends(get_token_codec),
):
    if data.confirm_password is not None and data.confirm_password != data.password:
        raise ValidationError('Passwords do not match')

    profile = build_role_profile(data)

    try:
        if store.find_by_email(data.email) is not None:
            raise ConflictError('Email already registered')

        password_hash = hasher.hash(data.password)

        with store.transaction():
            account_id = store.create_account(
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                password_hash=password_hash,
                user_type=data.user_type,
            )
            store.create_profile(account_id, profile)
    except SQLAlchemyError as exc:
        logger.exception('Account creation failed for %s', data.email)
        raise UnexpectedError() from exc

    token = codec.issue(SessionClaims(account_id=account_id, email=data.email, user_type=data.user_type.value))
    logger.info('Registered %s account %s', data.user_type.value, account_id)

    return {
        'message': 'Account created successfully',
        'token': token,
        'user': {
            'id': account_id,
            'email': data.email,
            'userType': data.user_type.value,
            'firstName': data.first_name,
            'lastName': data.last_name,
        },
    }


@router.post('/login')
def login(
    data: LoginRequest,
    response: Response,
    store: AccountStore = Depends(get_account_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: SessionTokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_settings),
):
    if not data.email or not data.password:
        raise ValidationError('Email and password are required')

    try:
        account = store.find_by_email(data.email)
        if account is None or not hasher.verify(data.password, account.password):
            logger.warning('Failed login attempt for %s', data.email)
            raise AuthError(INVALID_CREDENTIALS_MESSAGE)

        profile = store.find_profile(account)
    except SQLAlchemyError as exc:
        logger.exception('Login lookup failed for %s', data.email)
        raise UnexpectedError() from exc

    token = codec.issue(SessionClaims(account_id=account.account_id, email=account.email, user_type=account.user_type))
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        path='/',
        secure=settings.cookie_secure,
        httponly=True,
        samesite='strict',
    )

    user = serialize_account(account)
    if profile is not None:
        user.update(profile.as_fields())

    logger.info('Login: account %s', account.account_id)
    return {'message': 'Login successful', 'user': user}


@router.post('/logout')
def logout(response: Response, settings: Settings = Depends(get_settings)):
    response.set_cookie(
        key=settings.session_cookie_name,
        value='',
        max_age=-1,
        path='/',
        secure=settings.cookie_secure,
        httponly=True,
        samesite='strict',
    )
    return {'message': 'Logged out successfully'}


@router.get('/user')
def get_user_data(
    account_id: int = Depends(require_session),
    store: AccountStore = Depends(get_account_store),
):
    try:
        account = store.find_account_by_id(account_id)
    except SQLAlchemyError as exc:
        logger.exception('Fetching account %s failed', account_id)
        raise UnexpectedError() from exc

    if account is None:
        raise NotFoundError('User not found')

    return {'user': serialize_account(account)}
