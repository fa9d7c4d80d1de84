import pytest

from quest2go.core.errors import NotFoundError
from quest2go.routes.article_routes import get_article, list_articles
from quest2go.store.articles import ArticleStore


@pytest.fixture
def articles(db) -> ArticleStore:
    store = ArticleStore(db)
    store.seed_defaults()
    return store


def test_list_articles_serializes_catalogue(articles) -> None:
    body = list_articles(q=None, store=articles)

    first = body['articles'][0]
    assert len(body['articles']) == 3
    assert first['title'] == 'Mental Health Among College Students During Pandemic'
    assert first['date'] == '2024-02-01'
    assert first['author'] == 'Dr. Maria Garcia'
    assert first['link'] == '/home'


def test_list_articles_applies_search_term(articles) -> None:
    body = list_articles(q='davao', store=articles)

    assert [article['institution'] for article in body['articles']] == ['Davao Medical School Foundation']


def test_get_article_returns_not_found_when_missing(articles) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        get_article(article_id=999, account_id=1, store=articles)

    assert exception_info.value.status_code == 404
    assert exception_info.value.message == 'Article not found'


def test_article_listing_is_public_but_detail_needs_a_session(client) -> None:
    listing = client.get('/api/articles')
    assert listing.status_code == 200
    article_id = listing.json()['articles'][0]['id']

    anonymous = client.get(f'/api/articles/{article_id}')
    assert anonymous.status_code == 401

    client.post('/api/signup', json={
        'firstName': 'A',
        'lastName': 'B',
        'email': 'a@x.com',
        'password': 'p1',
        'userType': 'Researcher',
        'organization': 'Org',
    })
    client.post('/api/login', json={'email': 'a@x.com', 'password': 'p1'})

    detail = client.get(f'/api/articles/{article_id}')
    assert detail.status_code == 200
    assert detail.json()['article']['id'] == article_id
