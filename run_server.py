#!/usr/bin/env python3
"""
Search Aggregator Server - HTTP Mode

Runs the search API without installing the package.

Usage:
    python run_server.py --port 8787
    python run_server.py --host 127.0.0.1 --cache-ttl 120

Environment Variables:
    SEARCH_AGG_HOST: Server host (default: 0.0.0.0)
    SEARCH_AGG_PORT: Server port (default: 8787)
    GITHUB_TOKEN: Optional token for a higher GitHub rate limit
"""

import os
import sys

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from search_aggregator.__main__ import main  # noqa: E402

if __name__ == "__main__":
    main()
