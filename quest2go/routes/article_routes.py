import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError

from quest2go.auth.dependencies import get_article_store, require_session
from quest2go.core.errors import NotFoundError, UnexpectedError
from quest2go.models.article import Article
from quest2go.store.articles import ArticleStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=['articles'])


def serialize_article(article: Article) -> dict:
    return {
        'id': article.id,
        'title': article.title,
        'date': article.published_on.isoformat() if article.published_on else None,
        'author': article.author,
        'institution': article.institution,
        'link': article.link,
    }


@router.get('/articles')
def list_articles(
    q: str | None = Query(default=None, max_length=200),
    store: ArticleStore = Depends(get_article_store),
):
    try:
        articles = store.list_articles(q)
    except SQLAlchemyError as exc:
        logger.exception('Listing articles failed')
        raise UnexpectedError() from exc

    return {'articles': [serialize_article(article) for article in articles]}


@router.get('/articles/{article_id}')
def get_article(
    article_id: int,
    account_id: int = Depends(require_session),
    store: ArticleStore = Depends(get_article_store),
):
    try:
        article = store.find_article(article_id)
    except SQLAlchemyError as exc:
        logger.exception('Fetching article %s for account %s failed', article_id, account_id)
        raise UnexpectedError() from exc

    if article is None:
        raise NotFoundError('Article not found')

    return {'article': serialize_article(article)}
