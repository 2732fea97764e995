"""
Metadata card resolution.

A practice carries an unordered list of label/value cards. Three of them have
a special meaning (duration, difficulty, focus/type) and are located by:

1. exact icon token match,
2. exact label token match,
3. keyword containment in the icon or label.

Tokens are lower-cased, accent-free and whitespace-free, so "Nehézség",
"nehezseg" and "NEHÉZ SÉG" all match. Within each tier the first card in CMS
order wins; the list is never re-sorted.
"""

import logging
import re
from functools import lru_cache
from typing import Any, List, Optional, Sequence, Tuple

from practice_catalog.configs.config import Config
from practice_catalog.normalization.text import normalize_token
from practice_catalog.schemas.practice import IconCards, MetadataCard

logger = logging.getLogger(__name__)

ICON_SLOTS = ("clock", "difficult", "type")

_DIFFICULTY_LABEL = re.compile(r"neh[eé]zs[eé]g|difficulty|schwierigkeit", re.IGNORECASE)


@lru_cache
def slot_keywords(slot: str) -> Tuple[str, ...]:
    """Normalized keyword tokens for one icon slot, in configured order."""
    raw = Config.get_icon_card_keywords().get(slot, [])
    tokens = [normalize_token(k) for k in raw]
    return tuple(t for t in tokens if t)


def coerce_cards(raw_cards: Any) -> List[MetadataCard]:
    """
    Build MetadataCard objects from the raw ``practice_card`` field.

    Non-list input yields ``[]``; non-mapping entries are skipped.
    """
    if not isinstance(raw_cards, list):
        return []

    cards = []
    for item in raw_cards:
        if isinstance(item, dict):
            cards.append(MetadataCard.model_validate(item))
        else:
            logger.debug(f"Skipping non-mapping metadata card: {item!r}")
    return cards


def find_card(cards: Sequence[MetadataCard], keywords: Sequence[str]) -> Optional[MetadataCard]:
    """
    Resolve one card by the three-tier rule.

    Args:
        cards: Cards in CMS order
        keywords: Normalized keyword tokens

    Returns:
        The first matching card of the best tier, or None
    """
    if not keywords:
        return None

    tokens = [(card, normalize_token(card.icon), normalize_token(card.label)) for card in cards]

    for card, icon, _ in tokens:
        if icon and icon in keywords:
            return card

    for card, _, label in tokens:
        if label and label in keywords:
            return card

    for card, icon, label in tokens:
        if any(k in icon or k in label for k in keywords):
            return card

    return None


def pick_icon_cards(cards: Sequence[MetadataCard]) -> IconCards:
    """Resolve the clock, difficulty and type cards from an unordered card list."""
    return IconCards(
        clock=find_card(cards, slot_keywords("clock")),
        difficult=find_card(cards, slot_keywords("difficult")),
        type=find_card(cards, slot_keywords("type")),
    )


def find_difficulty_card(
    cards: Sequence[MetadataCard], icon_cards: Optional[IconCards] = None
) -> Optional[MetadataCard]:
    """Resolved difficulty card, else the first card whose label names difficulty."""
    if icon_cards is not None and icon_cards.difficult is not None:
        return icon_cards.difficult

    for card in cards:
        if _DIFFICULTY_LABEL.search(card.label or ""):
            return card
    return None


def select_kpis(
    cards: Sequence[MetadataCard], icon_cards: IconCards, limit: int = 4
) -> List[MetadataCard]:
    """
    Extra cards for the card footer: not one of the resolved clock/difficulty/
    type cards, not icon-tagged as one, and carrying a label or value.
    """
    resolved = [c for c in (icon_cards.clock, icon_cards.difficult, icon_cards.type) if c]

    kpis = []
    for card in cards:
        if len(kpis) >= limit:
            break
        if any(card is r for r in resolved):
            continue
        if (card.icon or "").strip().lower() in ICON_SLOTS:
            continue
        if not (card.label or card.value):
            continue
        kpis.append(card)
    return kpis
