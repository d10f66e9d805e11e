import logging
import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID

from content_model.domain.entities import (
    Author,
    EntityReference,
    Media,
    Node,
    ReferenceCaptionItem,
)

logger = logging.getLogger(__name__)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def parse_dt(s: str | None) -> datetime:
    return datetime.fromisoformat(s) if s else datetime.min


class _SQLiteRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn


class SQLiteNodeRepo(_SQLiteRepo):
    def save(self, node: Node) -> Node:
        """
        Persist the node row and replace all of its field rows.

        Runs in one transaction; field rows are written with their list
        position as delta. Each save creates a new revision.
        """
        saved = node.model_copy(update={"revision_id": node.revision_id + 1}, deep=True)
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO nodes (id, type, title, revision_id, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    type=excluded.type,
                    title=excluded.title,
                    revision_id=excluded.revision_id,
                    updated_at=excluded.updated_at
            """,
                (
                    str(saved.id),
                    saved.type,
                    saved.title,
                    saved.revision_id,
                    saved.created_at.isoformat(),
                    saved.updated_at.isoformat(),
                ),
            )

            conn.execute("DELETE FROM node_featured_media WHERE node_id = ?", (str(saved.id),))
            for field_name, items in saved.featured_media.items():
                for delta, item in enumerate(items):
                    conn.execute(
                        """
                        INSERT INTO node_featured_media
                        (node_id, field_name, delta, target_id, caption)
                        VALUES (?, ?, ?, ?, ?)
                    """,
                        (str(saved.id), field_name, delta, item.target_id, item.caption),
                    )

            conn.execute("DELETE FROM node_references WHERE node_id = ?", (str(saved.id),))
            for field_name, target_ids in saved.references.items():
                for delta, target_id in enumerate(target_ids):
                    conn.execute(
                        """
                        INSERT INTO node_references (node_id, field_name, delta, target_id)
                        VALUES (?, ?, ?, ?)
                    """,
                        (str(saved.id), field_name, delta, target_id),
                    )

            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

        logger.info("Saved node %s at revision %d", saved.id, saved.revision_id)
        return saved

    def get_by_id(self, node_id: UUID) -> Node | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM nodes WHERE id = ?", (str(node_id),)).fetchone()
            if not row:
                return None

            featured_media: dict[str, list[ReferenceCaptionItem]] = {}
            for f_row in conn.execute(
                "SELECT * FROM node_featured_media WHERE node_id = ? "
                "ORDER BY field_name, delta ASC",
                (str(node_id),),
            ).fetchall():
                featured_media.setdefault(f_row["field_name"], []).append(
                    ReferenceCaptionItem(target_id=f_row["target_id"], caption=f_row["caption"])
                )

            references: dict[str, list[str]] = {}
            for r_row in conn.execute(
                "SELECT * FROM node_references WHERE node_id = ? ORDER BY field_name, delta ASC",
                (str(node_id),),
            ).fetchall():
                references.setdefault(r_row["field_name"], []).append(r_row["target_id"])

            return Node(
                id=UUID(row["id"]),
                type=row["type"],
                title=row["title"],
                revision_id=row["revision_id"],
                featured_media=featured_media,
                references=references,
                created_at=parse_dt(row["created_at"]),
                updated_at=parse_dt(row["updated_at"]),
            )
        finally:
            conn.close()


class SQLiteMediaRepo(_SQLiteRepo):
    def save(self, media: Media) -> Media:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO media (id, bundle, name, created_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    bundle=excluded.bundle,
                    name=excluded.name
            """,
                (media.id, media.bundle, media.name, media.created_at.isoformat()),
            )
            conn.commit()
            return media
        finally:
            conn.close()

    def get_by_id(self, media_id: str) -> Media | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM media WHERE id = ?", (media_id,)).fetchone()
            if not row:
                return None
            return Media(
                id=row["id"],
                bundle=row["bundle"],
                name=row["name"],
                created_at=parse_dt(row["created_at"]),
            )
        finally:
            conn.close()


class SQLiteAuthorRepo(_SQLiteRepo):
    def save(self, author: Author) -> Author:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO authors (
                    id, bundle, parent_type, parent_id, parent_field_name,
                    status, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    bundle=excluded.bundle,
                    parent_type=excluded.parent_type,
                    parent_id=excluded.parent_id,
                    parent_field_name=excluded.parent_field_name,
                    status=excluded.status
            """,
                (
                    str(author.id),
                    author.bundle,
                    author.parent_type,
                    str(author.parent_id) if author.parent_id else None,
                    author.parent_field_name,
                    int(author.status),
                    author.created_at.isoformat(),
                ),
            )

            conn.execute("DELETE FROM author_references WHERE author_id = ?", (str(author.id),))
            for delta, ref in enumerate(author.references):
                conn.execute(
                    """
                    INSERT INTO author_references (author_id, delta, target_type, target_id)
                    VALUES (?, ?, ?, ?)
                """,
                    (str(author.id), delta, ref.target_type, ref.target_id),
                )

            conn.commit()
            return author
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, author_id: UUID) -> Author | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM authors WHERE id = ?", (str(author_id),)
            ).fetchone()
            if not row:
                return None

            ref_rows = conn.execute(
                "SELECT * FROM author_references WHERE author_id = ? ORDER BY delta ASC",
                (str(author_id),),
            ).fetchall()

            return Author(
                id=UUID(row["id"]),
                bundle=row["bundle"],
                references=[
                    EntityReference(target_type=r["target_type"], target_id=r["target_id"])
                    for r in ref_rows
                ],
                parent_type=row["parent_type"],
                parent_id=UUID(row["parent_id"]) if row["parent_id"] else None,
                parent_field_name=row["parent_field_name"],
                status=bool(row["status"]),
                created_at=parse_dt(row["created_at"]),
            )
        finally:
            conn.close()
