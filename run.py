"""
Entry point for running the BizDesk API.

Usage:
    python3 run.py                   # development (default)
    FLASK_ENV=production python3 run.py
"""

import os

from dotenv import load_dotenv

load_dotenv()

from bizdesk import create_app

app = create_app()

if __name__ == "__main__":
    app.run(
        port=int(os.environ.get("PORT", 3001)),
        debug=app.config.get("DEBUG", False),
    )
