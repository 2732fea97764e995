"""
Shared pytest fixtures for the practice catalog test suite.

Provides factories for raw Strapi practice/category records in both the
v4 (``attributes``-wrapped) and flattened v5 shapes.
"""

import logging
from typing import Any, Dict, List, Optional

import pytest

from practice_catalog.configs.settings import Settings
from practice_catalog.ingestion.indexer import build_index
from practice_catalog.monitoring.logging import ROOT_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo ``setup_logging`` side effects so caplog keeps seeing records."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings():
    """Settings with the default thresholds, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def create_category():
    """
    Return a function that creates raw category records.

    Example:
        cat = create_category("Nyak", slug="nyak", wrapped=True)
    """

    def _create_category(
        name: str,
        slug: Optional[str] = None,
        cat_id: Any = None,
        wrapped: bool = False,
    ) -> Dict[str, Any]:
        fields = {"name": name, "slug": slug if slug is not None else name.lower()}
        if wrapped:
            return {"id": cat_id, "attributes": fields}
        return {"id": cat_id, **fields}

    return _create_category


@pytest.fixture
def create_practice():
    """
    Return a function that creates raw practice records with sensible defaults.

    All fields can be overridden via keyword arguments; ``wrapped=True``
    produces the Strapi v4 envelope with relations under ``data``.

    Example:
        practice = create_practice("Nyakkörzés", cards=[{"icon": "clock", "value": "5p"}])
    """

    def _create_practice(
        name: str = "Test Practice",
        slug: Optional[str] = None,
        description: str = "",
        cards: Optional[List[Dict[str, Any]]] = None,
        categories: Optional[List[Dict[str, Any]]] = None,
        media: Optional[List[Dict[str, Any]]] = None,
        poster: Optional[Dict[str, Any]] = None,
        wrapped: bool = False,
        **kwargs,
    ) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "name": name,
            "slug": slug if slug is not None else name.lower().replace(" ", "-"),
            "description": description,
            "practice_card": cards or [],
        }
        if wrapped:
            fields["categories"] = {
                "data": [{"id": c.get("id"), "attributes": c} for c in (categories or [])]
            }
            fields["media"] = {
                "data": [{"id": i, "attributes": m} for i, m in enumerate(media or [])]
            }
            fields["video_poster"] = {"data": {"id": 1, "attributes": poster} if poster else None}
        else:
            fields["categories"] = categories or []
            fields["media"] = media or []
            fields["video_poster"] = poster
        fields.update(kwargs)

        if wrapped:
            return {"id": kwargs.get("id", 1), "attributes": fields}
        return fields

    return _create_practice


@pytest.fixture
def sample_categories(create_category):
    """Explicit category list as returned by the Category content type."""
    return [
        create_category("Nyak", slug="nyak", cat_id=1),
        create_category("Derék", slug="derek", cat_id=2),
        create_category("Ágyéki gerinc", slug="agyek", cat_id=3),
    ]


@pytest.fixture
def sample_practices(create_practice):
    """
    A small, varied catalog.

    - nyak-nyujtas: 5p, Könnyű, video, category nyak
    - derek-erosites: 20 perc, Hard, featured, categories derek + vall
    - csipo-mobilizalas: 10 min, Mittel, poster image, no category
    - legzes: no cards, wrapped v4 shape, category nyak
    """
    return [
        create_practice(
            "Nyak nyújtás",
            slug="nyak-nyujtas",
            description="Finom nyújtás a nyak oldalsó izmainak.",
            cards=[
                {"icon": "clock", "label": "Időtartam", "value": "5p"},
                {"icon": "difficult", "label": "Nehézség", "value": "Könnyű"},
                {"icon": "type", "label": "Fókusz", "value": "Nyak"},
                {"label": "Ismétlés", "value": "3x"},
            ],
            categories=[{"id": 1, "name": "Nyak", "slug": "nyak"}],
            media=[{"url": "/uploads/nyak.mp4", "mime": "video/mp4"}],
        ),
        create_practice(
            "Derék erősítés",
            slug="derek-erosites",
            cards=[
                {"icon": "clock", "value": "20 perc"},
                {"label": "Nehézség", "value": "Hard"},
            ],
            categories=[
                {"id": 2, "name": "Derék", "slug": "derek"},
                {"id": 9, "name": "Váll", "slug": "vall"},
            ],
            media=[{"url": "/uploads/derek.jpg", "mime": "image/jpeg"}],
            featured=True,
        ),
        create_practice(
            "Csípő mobilizálás",
            slug="csipo-mobilizalas",
            cards=[
                {"icon": "clock", "value": "10 min"},
                {"icon": "difficult", "value": "Mittel"},
            ],
            poster={"url": "/uploads/csipo-poster.webp", "mime": "image/webp"},
        ),
        create_practice(
            "Légzés",
            slug="legzes",
            description="Rekeszizom légzés",
            categories=[{"id": 1, "name": "Nyak", "slug": "nyak"}],
            wrapped=True,
        ),
    ]


@pytest.fixture
def sample_index(sample_practices, sample_categories, settings):
    """Index built from the sample catalog."""
    return build_index(sample_practices, sample_categories, settings)
