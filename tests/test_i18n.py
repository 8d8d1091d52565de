"""
Testes de slugs por locale
==========================
"""

import pytest

from sluggable import ConfigurationError, SluggableMixin, get_locale, use_locale
from tests.sample_models import Article


@pytest.fixture
def saved_article(db):
    article = Article(
        title={"en": "Hello", "fr": "Bonjour"},
        slug={"en": "hello", "fr": "bonjour"},
    )
    db.add(article)
    db.commit()
    return article


class TestLocalizedSlugs:

    def test_one_slug_per_locale(self, db):
        article = Article(title={"en": "Hello", "fr": "Bonjour"})
        article.sluggify(session=db)

        assert article.slug == {"en": "hello", "fr": "bonjour"}

    def test_uniqueness_scoped_per_locale(self, db):
        db.add(Article(title={"en": "Hello", "fr": "Salut"}, slug={"en": "hello", "fr": "salut"}))
        db.commit()

        article = Article(title={"en": "Hello", "fr": "Hello"})
        article.sluggify(session=db)

        assert article.slug == {"en": "hello-1", "fr": "hello"}

    def test_missing_locale_is_generated(self, db, saved_article):
        saved_article.title = {"en": "Hello", "fr": "Bonjour", "de": "Hallo"}
        saved_article.sluggify(session=db)

        assert saved_article.slug == {"en": "hello", "fr": "bonjour", "de": "hallo"}

    def test_needs_slugging_per_locale(self, saved_article):
        assert saved_article.needs_slugging("en") is False
        assert saved_article.needs_slugging("es") is True

    def test_resluggify_is_idempotent(self, db, saved_article):
        saved_article.resluggify(session=db)

        assert saved_article.slug == {"en": "hello", "fr": "bonjour"}

    def test_legacy_value_migrated(self, db):
        article = Article(title={"en": "Hello", "fr": "Bonjour"}, slug='"en"=>"custom-en"')
        db.add(article)
        db.commit()

        article.sluggify(session=db)

        assert article.slug == {"en": "custom-en", "fr": "bonjour"}

    def test_needs_slugging_reads_legacy_value(self, db):
        article = Article(title={"en": "Hello", "fr": "Bonjour"}, slug='"en"=>"custom-en"')
        db.add(article)
        db.commit()

        assert article.needs_slugging("en") is False
        assert article.needs_slugging("fr") is True

    def test_missing_locale_in_source(self, db):
        article = Article(title={"en": "Hello"})
        article.slug = {}

        with pytest.raises(KeyError):
            article.get_slug_source("fr")

    def test_get_slug(self, saved_article):
        assert saved_article.get_slug() == {"en": "hello", "fr": "bonjour"}
        assert saved_article.get_slug("fr") == "bonjour"


class TestLocalizedLookups:

    def test_find_by_slug_uses_current_locale(self, db, saved_article):
        assert get_locale() == "en"
        assert Article.find_by_slug(db, "hello") is saved_article
        assert Article.find_by_slug(db, "bonjour") is None

    def test_find_by_slug_other_locale(self, db, saved_article):
        with use_locale("fr"):
            assert Article.find_by_slug(db, "bonjour") is saved_article

        assert get_locale() == "en"

    def test_i18n_requires_build_from(self):
        class Broken(SluggableMixin):
            __sluggable__ = {"i18n_slug": True}

        with pytest.raises(ConfigurationError):
            Broken.sluggable_options()
