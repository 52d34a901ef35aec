#!/usr/bin/env python
"""
Entry point for running the repoqa server.

This script sets up the Python path and runs the FastAPI app with uvicorn.
"""

import os
import sys
from pathlib import Path

# Add src directory to Python path
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

# Check for required dependencies
try:
    from dotenv import load_dotenv
    import uvicorn
except ImportError as e:
    print(f"""
Error: Missing required dependencies

{e}

Install the project first:

    pip install -e .

Then try running again:
    python run.py
""")
    sys.exit(1)

# Load environment variables
load_dotenv()

# Configure logging before importing application modules
from repoqa.logging_config import configure_logging
configure_logging()

from repoqa import __version__
from repoqa.config import get_settings
from repoqa.main import app


def main():
    """Run the repoqa server."""
    settings = get_settings()

    print(f"""
repoqa v{__version__} - repository navigation tools

Configuration:
   - Repository cache: {settings.repos_dir}
   - Working directory: {settings.working_dir}
   - Clone timeout: {settings.clone_timeout}s
   - Search timeout: {settings.search_timeout}s
""")

    print(f"Server starting on http://{settings.host}:{settings.port}")
    print(f"API docs available at http://{settings.host}:{settings.port}/docs")
    print(f"Health check: http://{settings.host}:{settings.port}/health\n")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )


if __name__ == "__main__":
    main()
