"""Account model definitions."""

from enum import Enum

from sqlalchemy import Column, Integer, String
from quest2go.database import Base


class UserType(str, Enum):
    EDUCATOR = 'Educator'
    RESEARCHER = 'Researcher'


class Account(Base):
    """A registered identity. ``password`` only ever holds a bcrypt hash."""
    __tablename__ = "registered_accounts"

    account_id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    user_type = Column(String, nullable=False)  # Educator/Researcher
