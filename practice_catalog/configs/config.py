# practice_catalog/configs/config.py
import yaml
from pathlib import Path
from functools import lru_cache


class Config:
    """
    Static configuration for the practice catalog.
    """

    # 1. Setup Base Paths
    # This points to practice_catalog/configs/
    CONFIG_DIR = Path(__file__).parent.resolve()

    # 2. Define File Paths
    CATALOG_CONFIG_PATH = CONFIG_DIR / "catalog.yaml"

    @classmethod
    @lru_cache
    def load_catalog_config(cls) -> dict:
        """Loads the YAML keyword/heuristic configuration for the catalog."""
        if not cls.CATALOG_CONFIG_PATH.exists():
            raise FileNotFoundError(f"Missing config at {cls.CATALOG_CONFIG_PATH}")

        with open(cls.CATALOG_CONFIG_PATH, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    @classmethod
    def get_difficulty_keywords(cls) -> dict:
        """Returns {level: [keywords]} in priority order (easy, mid, hard)."""
        return cls.load_catalog_config()["difficulty_keywords"]

    @classmethod
    def get_icon_card_keywords(cls) -> dict:
        """Returns {slot: [keywords]} for clock/difficult/type card lookup."""
        return cls.load_catalog_config()["icon_card_keywords"]

    @classmethod
    def get_media_extensions(cls) -> dict:
        """Returns {"video": [...], "image": [...]} file extensions."""
        return cls.load_catalog_config()["media_extensions"]

    @classmethod
    def get_featured_fields(cls) -> list:
        """Returns the alternate CMS field names that flag a featured practice."""
        return cls.load_catalog_config()["featured_fields"]
