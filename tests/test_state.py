import json

import pytest

from conftest import make_article
from news_digest.models import ArticleStatus
from news_digest.state import ArticleStore, CorruptStoreError


def test_load_returns_empty_collection_when_file_missing(store):
    assert store.load() == []
    assert store.load_for_update() == []


def test_save_then_load_preserves_articles(store):
    articles = [make_article("a"), make_article("b", status=ArticleStatus.ACTIVE, summary="సారాంశం")]

    store.save(articles)

    assert store.load() == articles
    payload = json.loads(store.path.read_text(encoding="utf-8"))
    assert payload["articles"][1]["status"] == "active"
    assert payload["articles"][1]["summary"] == "సారాంశం"


def test_load_raises_on_corrupt_document(store):
    store.path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CorruptStoreError):
        store.load()


def test_load_for_update_treats_corrupt_document_as_empty(store):
    store.path.write_text("[1, 2, 3]", encoding="utf-8")

    assert store.load_for_update() == []


def test_load_raises_on_undecodable_bytes(store):
    store.path.write_bytes(b"\xff\xfe garbage")

    with pytest.raises(CorruptStoreError):
        store.load()
    assert store.load_for_update() == []


def test_load_raises_when_articles_is_not_a_list(store):
    store.path.write_text(json.dumps({"articles": {"link": "a"}}), encoding="utf-8")

    with pytest.raises(CorruptStoreError):
        store.load()


def test_load_skips_invalid_records_and_keeps_the_rest(store):
    good = make_article("a", status=ArticleStatus.ACTIVE, summary="S")
    payload = {
        "articles": [
            good.to_dict(),
            {"title": "no link"},
            {"link": "odd", "status": "archived"},
            ["not", "a", "record"],
        ]
    }
    store.path.write_text(json.dumps(payload), encoding="utf-8")

    assert store.load() == [good]


def test_load_ignores_unknown_fields_and_defaults_status(store):
    store.path.write_text(json.dumps({"articles": [{"link": "a", "ai_tag": "x"}]}), encoding="utf-8")

    (article,) = store.load()

    assert article.link == "a"
    assert article.status is ArticleStatus.INACTIVE
    assert article.summary == ""


def test_save_replaces_document_without_leaving_temp_files(tmp_path):
    store = ArticleStore(tmp_path / "nested" / "newsdata.json")
    store.save([make_article("a")])
    store.save([make_article("b")])

    assert [article.link for article in store.load()] == ["b"]
    assert sorted(p.name for p in store.path.parent.iterdir()) == ["newsdata.json"]
