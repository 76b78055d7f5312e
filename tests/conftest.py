"""Pytest configuration for pagepurge tests."""

from datetime import datetime

import pytest

from pagepurge import (
    Author,
    ContentItem,
    InMemoryContentStore,
    PurgeConfig,
    Purger,
    RecordingPurgeTransport,
    TermRef,
)

BASE_URL = "https://example.com"

NEWS = TermRef(id=10, taxonomy="category", taxonomy_term_id=110, slug="news", name="News")
SPORT = TermRef(id=11, taxonomy="category", taxonomy_term_id=111, slug="sport", name="Sport")
PYTHON = TermRef(id=20, taxonomy="post_tag", taxonomy_term_id=120, slug="python", name="Python")


@pytest.fixture
def store() -> InMemoryContentStore:
    """A small site: one author, two categories, one tag, a few items."""
    store = InMemoryContentStore(base_url=BASE_URL)
    store.register_taxonomy("category", ["post"], url_base="category")
    store.register_taxonomy("post_tag", ["post"], url_base="tag")
    store.register_type("wp_block", public=False)

    store.add_author(Author(id=1, fields={"user_nicename": "alice", "display_name": "Alice"}))

    for term in (NEWS, SPORT, PYTHON):
        store.add_term(term)

    store.add_item(
        ContentItem.create(
            id=1,
            type="post",
            status="publish",
            created_at=datetime(2024, 3, 5, 12, 0),
            author_id=1,
            terms=[NEWS, PYTHON],
            slug="hello-world",
        )
    )
    store.add_item(
        ContentItem.create(
            id=2,
            type="page",
            status="publish",
            created_at=datetime(2023, 11, 20, 9, 30),
            author_id=1,
            slug="about",
        )
    )
    store.add_item(
        ContentItem.create(
            id=3,
            type="post",
            status="draft",
            created_at=datetime(2024, 3, 6),
            author_id=1,
            terms=[SPORT],
            slug="work-in-progress",
        )
    )
    return store


@pytest.fixture
def transport() -> RecordingPurgeTransport:
    return RecordingPurgeTransport()


@pytest.fixture
def config() -> PurgeConfig:
    return PurgeConfig(cache_tag_prefix="site1")


@pytest.fixture
def purger(
    store: InMemoryContentStore,
    transport: RecordingPurgeTransport,
    config: PurgeConfig,
) -> Purger:
    return Purger(store=store, resolver=store, transport=transport, config=config)
