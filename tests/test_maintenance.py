"""
Testes da regeneração em massa
==============================
"""

import pytest

from sluggable.core.maintenance import load_model, resluggify_model
from tests.sample_models import Page, Post


@pytest.fixture
def unslugged_posts(db):
    posts = [Post(title="Hello World"), Post(title="Hello World"), Post(title="Other")]
    db.add_all(posts)
    db.commit()
    return posts


class TestResluggifyModel:

    def test_fills_missing_slugs(self, db, unslugged_posts):
        changed = resluggify_model(db, Post, batch_size=2)

        assert changed == 3
        assert [post.slug for post in unslugged_posts] == ["hello-world", "hello-world-1", "other"]

    def test_without_force_keeps_existing(self, db, unslugged_posts):
        resluggify_model(db, Post)
        unslugged_posts[2].title = "Renamed"
        db.commit()

        assert resluggify_model(db, Post) == 0
        assert unslugged_posts[2].slug == "other"

    def test_force_regenerates(self, db, unslugged_posts):
        resluggify_model(db, Post)
        unslugged_posts[2].title = "Renamed"
        db.commit()

        resluggify_model(db, Post, force=True)

        assert unslugged_posts[2].slug == "renamed"
        assert unslugged_posts[0].slug == "hello-world"

    def test_empty_table(self, db):
        assert resluggify_model(db, Page) == 0


class TestLoadModel:

    def test_loads_sluggable_model(self):
        assert load_model("tests.sample_models:Post") is Post

    def test_rejects_bad_path(self):
        with pytest.raises(ValueError):
            load_model("tests.sample_models")

    def test_rejects_non_sluggable(self):
        with pytest.raises(ValueError):
            load_model("tests.sample_models:Base")
