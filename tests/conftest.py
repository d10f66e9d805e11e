from pathlib import Path

import pytest

from content_model.adapters.sqlite.migrator import SQLiteMigrator
from content_model.adapters.sqlite.repos import SQLiteAuthorRepo, SQLiteMediaRepo, SQLiteNodeRepo
from content_model.domain.entities import Media

PROJECT_ROOT = Path(__file__).parent.parent
MIGRATIONS_DIR = str(PROJECT_ROOT / "migrations")
RULES_PATH = PROJECT_ROOT / "rules.yaml"


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "content.db")
    SQLiteMigrator(path, MIGRATIONS_DIR).run_migrations()
    return path


@pytest.fixture
def node_repo(db_path):
    return SQLiteNodeRepo(db_path)


@pytest.fixture
def media_repo(db_path):
    repo = SQLiteMediaRepo(db_path)
    repo.save(Media(id="1", bundle="image", name="Image 1"))
    repo.save(Media(id="2", bundle="image", name="Image 2"))
    repo.save(Media(id="3", bundle="document", name="Annual report"))
    return repo


@pytest.fixture
def author_repo(db_path):
    return SQLiteAuthorRepo(db_path)
