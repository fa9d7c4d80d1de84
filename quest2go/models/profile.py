"""Role profile definitions.

Each account carries exactly one role-specific extension row, keyed by
``account_id``. Outside the ORM the extension is handled as the
``RoleProfile`` union so callers dispatch on the variant, not on loose
optional fields.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from sqlalchemy import Column, ForeignKey, Integer, String
from quest2go.database import Base
from quest2go.models.account import UserType


class Educator(Base):
    """Educator extension of a registered account."""
    __tablename__ = "educators"

    account_id = Column(Integer, ForeignKey("registered_accounts.account_id"), primary_key=True)
    institution_name = Column(String)
    year_level = Column(String)
    course_type = Column(String)


class Researcher(Base):
    """Researcher extension of a registered account."""
    __tablename__ = "researchers"

    account_id = Column(Integer, ForeignKey("registered_accounts.account_id"), primary_key=True)
    organization_name = Column(String)


@dataclass(frozen=True)
class EducatorProfile:
    user_type: ClassVar[UserType] = UserType.EDUCATOR

    institution: str
    year_level: str
    course: str

    def as_fields(self) -> dict[str, str]:
        return {
            'institution': self.institution,
            'yearLevel': self.year_level,
            'course': self.course,
        }


@dataclass(frozen=True)
class ResearcherProfile:
    user_type: ClassVar[UserType] = UserType.RESEARCHER

    organization: str

    def as_fields(self) -> dict[str, str]:
        return {'organization': self.organization}


RoleProfile = Union[EducatorProfile, ResearcherProfile]
