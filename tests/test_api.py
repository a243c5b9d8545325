from fastapi.testclient import TestClient

from conftest import make_article
from news_digest.api import create_app
from news_digest.models import ArticleStatus


def test_get_all_news_lists_active_articles(pipeline, store):
    store.save([
        make_article("older", pub_date="2024-05-01", status=ArticleStatus.ACTIVE, summary="s1"),
        make_article("newer", pub_date="2024-05-02", status=ArticleStatus.ACTIVE, summary="s2"),
        make_article("pending", pub_date="2024-05-03"),
    ])
    client = TestClient(create_app(pipeline))

    response = client.get("/api/newsdata/all")

    assert response.status_code == 200
    body = response.json()
    assert body["totalResults"] == 2
    assert [article["link"] for article in body["articles"]] == ["newer", "older"]
    assert body["articles"][0]["summary"] == "s2"


def test_get_all_news_returns_500_on_corrupt_store(pipeline, store):
    store.path.write_text("{broken", encoding="utf-8")
    client = TestClient(create_app(pipeline))

    response = client.get("/api/newsdata/all")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to read news data"
