from conftest import make_article
from news_digest.merge import merge, new_links
from news_digest.models import ArticleStatus


def links(articles):
    return [article.link for article in articles]


def test_merge_puts_incoming_first_then_existing():
    existing = [make_article("a"), make_article("b")]
    incoming = [make_article("c")]

    assert links(merge(incoming, existing)) == ["c", "a", "b"]


def test_existing_copy_wins_over_incoming_duplicate():
    stored = make_article("x", status=ArticleStatus.ACTIVE, summary="S")
    incoming = [make_article("x"), make_article("y")]

    merged = merge(incoming, [stored])
    by_link = {article.link: article for article in merged}

    assert len(merged) == 2
    assert by_link["x"].status is ArticleStatus.ACTIVE
    assert by_link["x"].summary == "S"


def test_empty_incoming_returns_existing_unchanged():
    existing = [make_article("a"), make_article("b")]

    assert merge([], existing) == existing


def test_empty_existing_dedups_incoming_first_occurrence_wins():
    first = make_article("a", pub_date="2024-01-01")
    second = make_article("a", pub_date="2024-02-01")

    merged = merge([first, second, make_article("b")], [])

    assert links(merged) == ["a", "b"]
    assert merged[0] is first


def test_merging_same_batch_twice_is_idempotent():
    existing = [make_article("a"), make_article("b", status=ArticleStatus.ACTIVE, summary="done")]
    batch = [make_article("b"), make_article("c"), make_article("d")]

    once = merge(batch, existing)
    twice = merge(batch, once)

    assert set(links(twice)) == set(links(once))
    assert twice == once


def test_links_stay_unique_after_many_merges():
    collection = []
    for batch in (["a", "b"], ["b", "c", "c"], ["a", "d"], []):
        collection = merge([make_article(link) for link in batch], collection)

    assert len(collection) == len(set(links(collection))) == 4


def test_new_links_reports_only_unseen_links():
    existing = [make_article("a")]
    incoming = [make_article("a"), make_article("b"), make_article("b")]

    assert new_links(incoming, existing) == ["b"]
