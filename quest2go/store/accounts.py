"""Persistence for registered accounts and their role profiles.

Methods flush but never commit; callers group writes with
``AccountStore.transaction()`` so an account and its profile land together
or not at all.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quest2go.core.errors import ConflictError, NotFoundError
from quest2go.models.account import Account, UserType
from quest2go.models.profile import (
    Educator,
    EducatorProfile,
    Researcher,
    ResearcherProfile,
    RoleProfile,
)


class AccountStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def find_by_email(self, email: str) -> Account | None:
        return self.db.query(Account).filter(Account.email == email).first()

    def find_account_by_id(self, account_id: int) -> Account | None:
        return self.db.get(Account, account_id)

    def create_account(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        user_type: UserType,
    ) -> int:
        account = Account(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password_hash,
            user_type=UserType(user_type).value,
        )
        self.db.add(account)
        try:
            self.db.flush()
        except IntegrityError as exc:
            # A concurrent signup won the race past the caller's email pre-check.
            raise ConflictError('Email already registered') from exc
        return account.account_id

    def _require_account(self, account_id: int) -> None:
        if self.find_account_by_id(account_id) is None:
            raise NotFoundError(f'Account {account_id} not found')

    def create_educator_profile(self, account_id: int, institution: str, year_level: str, course: str) -> None:
        self._require_account(account_id)
        self.db.add(Educator(
            account_id=account_id,
            institution_name=institution,
            year_level=year_level,
            course_type=course,
        ))
        self.db.flush()

    def create_researcher_profile(self, account_id: int, organization: str) -> None:
        self._require_account(account_id)
        self.db.add(Researcher(account_id=account_id, organization_name=organization))
        self.db.flush()

    def create_profile(self, account_id: int, profile: RoleProfile) -> None:
        if isinstance(profile, EducatorProfile):
            self.create_educator_profile(account_id, profile.institution, profile.year_level, profile.course)
        elif isinstance(profile, ResearcherProfile):
            self.create_researcher_profile(account_id, profile.organization)
        else:
            raise TypeError(f'Unsupported role profile: {type(profile).__name__}')

    def find_educator_profile(self, account_id: int) -> EducatorProfile | None:
        row = self.db.get(Educator, account_id)
        if row is None:
            return None
        return EducatorProfile(
            institution=row.institution_name,
            year_level=row.year_level,
            course=row.course_type,
        )

    def find_researcher_profile(self, account_id: int) -> ResearcherProfile | None:
        row = self.db.get(Researcher, account_id)
        if row is None:
            return None
        return ResearcherProfile(organization=row.organization_name)

    def find_profile(self, account: Account) -> RoleProfile | None:
        if account.user_type == UserType.EDUCATOR.value:
            return self.find_educator_profile(account.account_id)
        if account.user_type == UserType.RESEARCHER.value:
            return self.find_researcher_profile(account.account_id)
        return None
