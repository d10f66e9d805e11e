import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from content_model.adapters.lookup import EntityReferenceLookup
from content_model.adapters.sqlite.repos import SQLiteAuthorRepo, SQLiteMediaRepo, SQLiteNodeRepo
from content_model.components.featured_media import FeaturedMediaConfig
from content_model.rules.loader import load_rules
from content_model.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("CONTENT_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "content.db")
        self.migrations_dir = str(self.base_dir / "migrations")
        self.rules_path = self.base_dir / "rules.yaml"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _load_rules_cached(settings.rules_path)


@lru_cache
def _load_rules_cached(path: Path) -> Rules:
    return load_rules(path)


def get_featured_media_config(rules: Rules = Depends(get_rules)) -> FeaturedMediaConfig:
    return FeaturedMediaConfig.from_rules(rules.featured_media)


# --- Repos ---
def get_node_repo(settings: Settings = Depends(get_settings)) -> SQLiteNodeRepo:
    return SQLiteNodeRepo(settings.db_path)


def get_media_repo(settings: Settings = Depends(get_settings)) -> SQLiteMediaRepo:
    return SQLiteMediaRepo(settings.db_path)


def get_author_repo(settings: Settings = Depends(get_settings)) -> SQLiteAuthorRepo:
    return SQLiteAuthorRepo(settings.db_path)


def get_reference_lookup(
    media_repo: SQLiteMediaRepo = Depends(get_media_repo),
    node_repo: SQLiteNodeRepo = Depends(get_node_repo),
) -> EntityReferenceLookup:
    return EntityReferenceLookup(media_repo=media_repo, node_repo=node_repo)
