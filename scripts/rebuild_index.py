#!/usr/bin/env python3
"""
Index Rebuild Utility

Asks a running CHAVIS server to rebuild its vector index from the canonical
knowledge store, or only reports drift with --check. The vector index lives in
the server process, so the rebuild has to happen there.
"""

import argparse
import os
import sys

import requests

API_BASE = os.getenv("CHAVIS_API_URL", "http://localhost:3001")


def check(api_base: str) -> bool:
    response = requests.get(f"{api_base}/knowledge/sync-status", timeout=30)
    response.raise_for_status()
    status = response.json()

    if status["in_sync"]:
        print("✓ Vector index is in sync with the knowledge store")
        return True

    print(f"Missing from index: {len(status['missing'])}")
    for doc_id in status["missing"]:
        print(f"  - {doc_id}")
    print(f"Orphaned in index: {len(status['orphaned'])}")
    for doc_id in status["orphaned"]:
        print(f"  - {doc_id}")
    return False


def rebuild(api_base: str) -> bool:
    print("Starting vector index rebuild...")
    response = requests.post(f"{api_base}/knowledge/reindex", timeout=600)
    response.raise_for_status()
    summary = response.json()

    print(f"Found {summary['total_items']} knowledge items in canonical store")
    print(f"✓ Successfully rebuilt index with {summary['indexed']} documents")
    if summary["failed"]:
        print(f"WARNING: Failed to index items: {', '.join(summary['failed'])}")
        return False

    print("Index rebuild complete!")
    return True


def main():
    parser = argparse.ArgumentParser(description="Rebuild the CHAVIS vector index")
    parser.add_argument("--api", default=API_BASE, help=f"API base URL (default: {API_BASE})")
    parser.add_argument("--check", action="store_true", help="Only report drift, do not rebuild")
    args = parser.parse_args()

    try:
        ok = check(args.api) if args.check else rebuild(args.api)
    except requests.RequestException as e:
        print(f"ERROR: Could not reach CHAVIS server at {args.api}: {e}")
        sys.exit(2)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
