"""Article model definitions."""

from sqlalchemy import Column, Date, Integer, String
from quest2go.database import Base


class Article(Base):
    """A research article listed for discovery."""
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    author = Column(String)
    institution = Column(String)
    published_on = Column(Date)
    link = Column(String)
