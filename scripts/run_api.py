#!/usr/bin/env python3
"""
Launch script for the Exoplanet Classifier API.

Usage:
    python scripts/run_api.py              # Host/port from config/api.yaml
    python scripts/run_api.py --dev        # Development (hot reload)
    python scripts/run_api.py --port 8080  # Custom port
"""

import argparse
import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Ensure project root is on PYTHONPATH
sys.path.insert(0, str(PROJECT_ROOT))
os.chdir(PROJECT_ROOT)

from exoclassifier.utils.config_loader import Config


def main():
    api_config = Config().load_all().api

    parser = argparse.ArgumentParser(description="Exoplanet Classifier API")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with hot reload")
    parser.add_argument("--host", default=api_config.host, help=f"Host to bind (default: {api_config.host})")
    parser.add_argument("--port", type=int, default=api_config.port, help=f"Port (default: {api_config.port})")
    args = parser.parse_args()

    reload = args.dev or api_config.reload
    print(f"Starting Exoplanet Classifier API{' (DEVELOPMENT)' if reload else ''}...")
    print(f"  URL: http://{args.host}:{args.port}")
    print()

    import uvicorn
    uvicorn.run(
        "exoclassifier.api.main:app",
        host=args.host,
        port=args.port,
        reload=reload,
        reload_dirs=[str(PROJECT_ROOT / "exoclassifier")] if reload else None,
        log_level=api_config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
