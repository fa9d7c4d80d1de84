from datetime import date

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from quest2go.models.article import Article

SAMPLE_ARTICLES = [
    {
        'title': 'Impact of Online Learning on Student Performance',
        'published_on': date(2024, 1, 15),
        'author': 'Dr. Sarah Johnson',
        'institution': 'University of Mindanao',
        'link': '/home',
    },
    {
        'title': 'Sustainable Agriculture Practices in Davao Region',
        'published_on': date(2024, 1, 20),
        'author': 'Prof. Manuel Santos',
        'institution': 'Davao Medical School Foundation',
        'link': '/home',
    },
    {
        'title': 'Mental Health Among College Students During Pandemic',
        'published_on': date(2024, 2, 1),
        'author': 'Dr. Maria Garcia',
        'institution': 'San Pedro College',
        'link': '/home',
    },
]


class ArticleStore:
    def __init__(self, db: Session):
        self.db = db

    def list_articles(self, search: str | None = None) -> list[Article]:
        query = self.db.query(Article)
        term = (search or '').strip().lower()
        if term:
            # Search text matches literally; LIKE wildcards in it are escaped.
            escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
            pattern = f'%{escaped}%'
            query = query.filter(or_(
                func.lower(Article.title).like(pattern, escape='\\'),
                func.lower(Article.author).like(pattern, escape='\\'),
                func.lower(Article.institution).like(pattern, escape='\\'),
            ))
        return query.order_by(Article.published_on.desc(), Article.id.asc()).all()

    def find_article(self, article_id: int) -> Article | None:
        return self.db.get(Article, article_id)

    def seed_defaults(self) -> int:
        if self.db.query(Article.id).first() is not None:
            return 0
        self.db.add_all(Article(**fields) for fields in SAMPLE_ARTICLES)
        self.db.commit()
        return len(SAMPLE_ARTICLES)
