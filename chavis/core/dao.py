"""
Record stores backed by SQLite.

KnowledgeStore is the authoritative source for knowledge items; the vector
projection is derived from it. UnansweredLog collects questions the cascade
could not resolve.
"""

import json
import time
from datetime import datetime
from typing import List, Optional

from .db import get_db, init_db
from .errors import NotFoundError
from .schema import KnowledgeItem, UnansweredQuestion
from ..util.logging import logger


def _row_to_item(row) -> KnowledgeItem:
    item_id, keywords, answer, reference_link = row
    return KnowledgeItem(
        id=item_id,
        keywords=json.loads(keywords),
        answer=answer,
        reference_link=reference_link or "",
    )


class KnowledgeStore:
    """Durable id -> {keywords, answer, reference_link} mapping in insertion order."""

    def __init__(self, db_path: str = None):
        self.db_path = db_path
        init_db(db_path)

    def list(self) -> List[KnowledgeItem]:
        """List all knowledge items in insertion order."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, keywords, answer, reference_link FROM knowledge ORDER BY rowid"
            )
            return [_row_to_item(row) for row in cursor.fetchall()]

    def get(self, item_id: str) -> Optional[KnowledgeItem]:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, keywords, answer, reference_link FROM knowledge WHERE id = ?",
                (item_id,)
            )
            row = cursor.fetchone()
            return _row_to_item(row) if row else None

    def next_id(self) -> str:
        """1 + the largest numeric id, or "1" for an empty store."""
        numeric_ids = []
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id FROM knowledge")
            for (item_id,) in cursor.fetchall():
                try:
                    numeric_ids.append(int(item_id))
                except ValueError:
                    continue  # non-numeric ids do not take part in assignment

        return str(max(numeric_ids) + 1) if numeric_ids else "1"

    def add(self, keywords: List[str], answer: str, reference_link: str = "") -> KnowledgeItem:
        """Insert a new item with an auto-assigned id."""
        item = KnowledgeItem(
            id=self.next_id(),
            keywords=list(keywords),
            answer=answer,
            reference_link=reference_link or "",
        )

        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO knowledge (id, keywords, answer, reference_link) VALUES (?, ?, ?, ?)",
                (item.id, json.dumps(item.keywords, ensure_ascii=False), item.answer, item.reference_link)
            )
            conn.commit()

        logger.log_knowledge_operation("add", item.id, item.answer)
        return item

    def update(self, item_id: str, keywords: List[str] = None, answer: str = None,
               reference_link: str = None) -> KnowledgeItem:
        """Replace the supplied fields in place. The id and storage position never change."""
        existing = self.get(item_id)
        if existing is None:
            raise NotFoundError("knowledge item", item_id)

        updated = KnowledgeItem(
            id=existing.id,
            keywords=list(keywords) if keywords is not None else existing.keywords,
            answer=answer if answer is not None else existing.answer,
            reference_link=reference_link if reference_link is not None else existing.reference_link,
        )

        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE knowledge SET keywords = ?, answer = ?, reference_link = ?, "
                "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (json.dumps(updated.keywords, ensure_ascii=False), updated.answer,
                 updated.reference_link, item_id)
            )
            conn.commit()

        logger.log_knowledge_operation("update", item_id, updated.answer)
        return updated

    def remove(self, item_id: str) -> KnowledgeItem:
        """Delete an item and return what was removed."""
        existing = self.get(item_id)
        if existing is None:
            raise NotFoundError("knowledge item", item_id)

        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM knowledge WHERE id = ?", (item_id,))
            conn.commit()

        logger.log_knowledge_operation("remove", item_id)
        return existing

    def count(self) -> int:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM knowledge")
            result = cursor.fetchone()
            return result[0] if result else 0


class UnansweredLog:
    """Deduplicated log of questions the cascade could not answer."""

    def __init__(self, db_path: str = None):
        self.db_path = db_path
        init_db(db_path)

    def _new_id(self, cursor) -> str:
        # Millisecond timestamp, bumped until unused
        candidate = int(time.time() * 1000)
        while True:
            cursor.execute("SELECT 1 FROM unanswered WHERE id = ?", (str(candidate),))
            if cursor.fetchone() is None:
                return str(candidate)
            candidate += 1

    def append(self, question: str) -> UnansweredQuestion:
        """Record a question unless the exact same trimmed text is already logged."""
        question = (question or "").strip()
        if not question:
            raise ValueError("question cannot be empty")

        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, question, created_at FROM unanswered WHERE question = ?",
                (question,)
            )
            row = cursor.fetchone()
            if row:
                logger.log_unanswered(row[0], question, status="duplicate")
                return UnansweredQuestion(id=row[0], question=row[1],
                                          created_at=datetime.fromisoformat(row[2]))

            entry = UnansweredQuestion(
                id=self._new_id(cursor),
                question=question,
                created_at=datetime.now(),
            )
            cursor.execute(
                "INSERT INTO unanswered (id, question, created_at) VALUES (?, ?, ?)",
                (entry.id, entry.question, entry.created_at.isoformat())
            )
            conn.commit()

        logger.log_unanswered(entry.id, question)
        return entry

    def list(self) -> List[UnansweredQuestion]:
        """List all entries in insertion order."""
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, question, created_at FROM unanswered ORDER BY rowid")
            return [
                UnansweredQuestion(id=row[0], question=row[1], created_at=datetime.fromisoformat(row[2]))
                for row in cursor.fetchall()
            ]

    def remove(self, question_id: str) -> None:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM unanswered WHERE id = ?", (question_id,))
            deleted = cursor.rowcount
            conn.commit()

        if not deleted:
            raise NotFoundError("unanswered question", question_id)

        logger.log_operation("unanswered.remove", "success", {"id": question_id})

    def count(self) -> int:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM unanswered")
            result = cursor.fetchone()
            return result[0] if result else 0
