#!/usr/bin/env python3
"""
Start the CHAVIS API server.
"""

import argparse
import os
import sys
from pathlib import Path

import uvicorn

# Add the project root to sys.path to import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from chavis.core.config import debug_enabled


def main():
    parser = argparse.ArgumentParser(description="Run the CHAVIS knowledge desk API")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "3001")), help="Port (default: 3001)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    print(f"🚀 CHAVIS server running at http://localhost:{args.port}")
    uvicorn.run(
        "chavis.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="debug" if debug_enabled() else "info",
    )


if __name__ == "__main__":
    main()
