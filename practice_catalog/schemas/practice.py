# practice_catalog/schemas/practice.py
"""
Canonical data model for the practice catalog.

CMS records arrive in the loose Strapi v4/v5 wire shape (``{id, attributes}``
or flattened, relations wrapped in ``{data: ...}``). The normalizers convert
them into the models below at ingestion time; nothing downstream of the
normalizers looks at the raw shape again.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# ENUMS
# ============================================================================


class DifficultyLevel(str, Enum):
    """Coarse difficulty bucket derived from a free-text difficulty value."""

    EASY = "easy"
    MID = "mid"
    HARD = "hard"
    UNKNOWN = "unknown"


class Preset(str, Enum):
    """
    One-click preset bucket. ``NONE`` means no preset is active.

    Example:
        >>> Preset.parse("short")
        <Preset.SHORT: 'short'>
        >>> Preset.parse(None)
        <Preset.NONE: ''>
    """

    NONE = ""
    SHORT = "short"
    EASY = "easy"
    MID = "mid"
    HARD = "hard"
    VIDEO = "video"

    @classmethod
    def parse(cls, value: Any) -> "Preset":
        """
        Accept a Preset, its string value, or an empty value.

        Raises:
            ValueError: If value names no preset.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        text = str(value).strip().lower()
        try:
            return cls(text)
        except ValueError:
            valid = [p.value for p in cls if p.value]
            raise ValueError(f"Invalid preset '{value}'. Valid presets: {valid}")


# ============================================================================
# CATALOG ENTITIES
# ============================================================================


class PracticeCategory(BaseModel):
    """A practice category. Its identity is ``slug`` when set, else ``name``."""

    model_config = ConfigDict(frozen=True)

    id: Any = None
    name: str = ""
    slug: str = ""

    @property
    def key(self) -> str:
        return self.slug or self.name


class MetadataCard(BaseModel):
    """
    A label/value pair attached to a practice, optionally tagged with an icon
    token such as ``clock``, ``difficult`` or ``type``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        json_schema_extra={
            "example": {"label": "Időtartam", "value": "5 perc", "icon": "clock"}
        },
    )

    label: Optional[str] = None
    value: Optional[str] = None
    icon: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_text_alias(cls, data: Any) -> Any:
        # Some card components store the value under "text".
        if isinstance(data, dict) and data.get("value") is None and "text" in data:
            data = {**data, "value": data.get("text")}
        return data

    @field_validator("label", "value", "icon", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @property
    def text(self) -> str:
        """Label and value joined for search indexing."""
        return f"{self.label or ''} {self.value or ''}".strip()


class IconCards(BaseModel):
    """The clock / difficulty / type cards resolved from a card list."""

    model_config = ConfigDict(frozen=True)

    clock: Optional[MetadataCard] = None
    difficult: Optional[MetadataCard] = None
    type: Optional[MetadataCard] = None


class Thumb(BaseModel):
    """Resolved thumbnail. Never points at a video file."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["image", "none"] = "none"
    url: str = ""


class NormalizedPractice(BaseModel):
    """
    A practice record in its fixed internal shape.

    Built once per index build and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    slug: str = ""
    name: str = ""
    description: str = ""
    searchable: str = ""

    cat_keys: List[str] = Field(default_factory=list)
    primary_cat: Optional[str] = None
    primary_cat_label: Optional[str] = None

    cards: List[MetadataCard] = Field(default_factory=list)
    icon_cards: IconCards = Field(default_factory=IconCards)
    difficulty_card: Optional[MetadataCard] = None
    kpis: List[MetadataCard] = Field(default_factory=list)

    thumb: Thumb = Field(default_factory=Thumb)
    is_video: bool = False
    is_featured: bool = False

    duration_minutes: Optional[int] = None
    difficulty: DifficultyLevel = DifficultyLevel.UNKNOWN

    # Unwrapped CMS record, kept for the presentation layer only.
    raw: Any = Field(default=None, exclude=True, repr=False)


# ============================================================================
# FILTERING
# ============================================================================


class FilterState(BaseModel):
    """
    Single-select filter state: one query, at most one category and at most
    one preset.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    active_category_key: str = ""
    active_preset: Preset = Preset.NONE

    @field_validator("active_preset", mode="before")
    @classmethod
    def _parse_preset(cls, v: Any) -> Preset:
        return Preset.parse(v)

    @field_validator("query", "active_category_key", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return "" if v is None else v

    @property
    def normalized_query(self) -> str:
        return self.query.strip().lower()

    @property
    def is_empty(self) -> bool:
        """True when no query, category or preset is active."""
        return (
            not self.normalized_query
            and not self.active_category_key
            and self.active_preset is Preset.NONE
        )

    def cleared(self) -> "FilterState":
        return FilterState()


class PresetStats(BaseModel):
    """Number of indexed practices in each preset bucket."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    short: int = 0
    easy: int = 0
    mid: int = 0
    hard: int = 0
    video: int = 0

    def count_for(self, preset: Any) -> int:
        preset = Preset.parse(preset)
        if preset is Preset.NONE:
            return self.total
        return getattr(self, preset.value)


# ============================================================================
# OUTPUT SNAPSHOT
# ============================================================================


class CategoryTile(BaseModel):
    """A category shown in the editorial grid, with its practice count."""

    model_config = ConfigDict(frozen=True)

    category: PracticeCategory
    count: int = 0


class Editorial(BaseModel):
    """Slot assignment for the filter-free default grid."""

    model_config = ConfigDict(frozen=True)

    hero: Optional[NormalizedPractice] = None
    wide: Optional[NormalizedPractice] = None
    daily_pick: Optional[NormalizedPractice] = None
    tile_right: Optional[NormalizedPractice] = None
    tile_bottom_left: Optional[NormalizedPractice] = None

    # Leading explicit categories in CMS order; the last one is the banner tile.
    category_tiles: List[CategoryTile] = Field(default_factory=list)


class CatalogIndex(BaseModel):
    """
    Read-only snapshot consumed by the presentation layer.

    Produced by ``build_index``; callers should treat it as immutable.
    """

    model_config = ConfigDict(frozen=True)

    cats: List[PracticeCategory] = Field(default_factory=list)
    cat_label_by_key: Dict[str, str] = Field(default_factory=dict)
    normalized: List[NormalizedPractice] = Field(default_factory=list)
    preset_stats: PresetStats = Field(default_factory=PresetStats)
    editorial: Editorial = Field(default_factory=Editorial)
    category_counts: Dict[str, int] = Field(default_factory=dict)

    # Threshold the preset stats were computed with; filtering reuses it.
    short_max_minutes: int = 10
