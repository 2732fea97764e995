"""
UI label dictionaries for the catalog filter surface.

Only UI labels are localized; catalog content values are shown as stored.
Unknown locales fall back to Hungarian, the site's base language.
"""

from typing import Dict, Optional

DEFAULT_LOCALE = "hu"

UI_LABELS: Dict[str, Dict[str, str]] = {
    "hu": {
        "search_placeholder": "Keresés: név, leírás, kulcsszavak…",
        "search_label": "Keresés",
        "filters": "Szűrők",
        "clear": "Törlés",
        "all": "Összes gyakorlat",
        "filter_by": "SZŰRÉS KATEGÓRIA SZERINT",
        "results": "Találatok",
        "active": "Aktív",
        "featured": "Kiemelt",
        "empty_title": "Nincs találat",
        "empty_desc": "Próbáld meg másik kategóriával, vagy módosítsd a keresést.",
        "quick_cats": "Kategóriák",
        "difficulty": "Nehézség",
        "presets_title": "Ajánlók",
        "preset_short": "Rövid rutinok",
        "preset_easy": "Kezdőknek",
        "preset_mid": "Mérsékelt",
        "preset_hard": "Akut / haladó",
        "preset_video": "Videós gyakorlatok",
        "items_label": "gyakorlat",
    },
    "en": {
        "search_placeholder": "Search: name, description, keywords…",
        "search_label": "Search",
        "filters": "Filters",
        "clear": "Clear",
        "all": "All exercises",
        "filter_by": "FILTER BY CATEGORY",
        "results": "Results",
        "active": "Active",
        "featured": "Featured",
        "empty_title": "No results",
        "empty_desc": "Try another category, or refine your search.",
        "quick_cats": "Categories",
        "difficulty": "Difficulty",
        "presets_title": "Recommendations",
        "preset_short": "Short routines",
        "preset_easy": "For beginners",
        "preset_mid": "Moderate",
        "preset_hard": "Hard / acute",
        "preset_video": "Video practices",
        "items_label": "practices",
    },
    "de": {
        "search_placeholder": "Suche: Name, Beschreibung, Keywords…",
        "search_label": "Suche",
        "filters": "Filter",
        "clear": "Zurücksetzen",
        "all": "Alle Übungen",
        "filter_by": "NACH KATEGORIE FILTERN",
        "results": "Treffer",
        "active": "Aktiv",
        "featured": "Highlight",
        "empty_title": "Keine Treffer",
        "empty_desc": "Andere Kategorie wählen oder Suche anpassen.",
        "quick_cats": "Kategorien",
        "difficulty": "Schwierigkeit",
        "presets_title": "Empfehlungen",
        "preset_short": "Kurze Routinen",
        "preset_easy": "Für Anfänger",
        "preset_mid": "Mittel",
        "preset_hard": "Schwer / akut",
        "preset_video": "Video-Übungen",
        "items_label": "Übungen",
    },
}


def base_locale(locale: Optional[str]) -> str:
    """Reduce a locale tag ("en-GB") to a supported base language code."""
    code = (locale or DEFAULT_LOCALE).lower().split("-")[0].split("_")[0]
    return code if code in UI_LABELS else DEFAULT_LOCALE


def get_labels(locale: Optional[str] = None) -> Dict[str, str]:
    return UI_LABELS[base_locale(locale)]
