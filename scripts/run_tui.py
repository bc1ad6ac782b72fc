#!/usr/bin/env python3
"""Entry point for the CourtSide TUI."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
load_dotenv(project_root / ".env")

from courtside.config import Settings
from courtside.tui.app import CourtsideApp


def main():
    app = CourtsideApp(settings=Settings.from_env())
    app.run()


if __name__ == "__main__":
    main()
