#!/usr/bin/env python3
"""
Seed the knowledge store with starter office-guide entries.

Entries go through the administration service, which validates them like the
HTTP API does. Only the SQLite record store outlives this script; the running
server derives its search index from it. Entries whose answer already exists
are skipped, so the script can be re-run safely.
"""

import asyncio
import sys
from pathlib import Path

# Add the project root to sys.path to import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from chavis.core import config
from chavis.core.dao import KnowledgeStore
from chavis.core.knowledge_admin import KnowledgeAdminService
from chavis.vector.knowledge_index import KnowledgeIndex

SEED_KNOWLEDGE = [
    {
        "keywords": ["건전지", "배터리"],
        "answer": "건전지는 탕비실 세 번째 서랍에 있습니다.",
        "reference_link": "",
    },
    {
        "keywords": ["환영 회식", "신규 입사자 회식"],
        "answer": "신규 입사자 환영 회식은 매달 마지막 주 금요일입니다.",
        "reference_link": "",
    },
]


async def seed(admin: KnowledgeAdminService, entries=SEED_KNOWLEDGE) -> int:
    """Add entries not already present. Returns the number added."""
    existing_answers = {item.answer for item in admin.list()}
    added = 0

    for entry in entries:
        if entry["answer"] in existing_answers:
            print(f"  - skipped (already present): {entry['answer']}")
            continue

        result = await admin.add(entry["keywords"], entry["answer"], entry.get("reference_link", ""))
        added += 1
        print(f"  ✓ added #{result.item.id}: {result.item.answer}")

    return added


def main():
    embedding_provider = config.get_embedding_provider()
    index = KnowledgeIndex(config.get_vector_store(embedding_provider.get_dimension()), embedding_provider)
    admin = KnowledgeAdminService(KnowledgeStore(), index)

    print("Seeding knowledge store...")
    added = asyncio.run(seed(admin))
    print(f"✅ Seeded {added} knowledge item(s) into {config.DB_PATH}")
    print("The search index lives in the server process: it is rebuilt at startup "
          "(REINDEX_ON_STARTUP=true) or on POST /knowledge/reindex.")


if __name__ == "__main__":
    main()
