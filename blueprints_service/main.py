"""Development entrypoint for running the Flask API locally.

Usage:
- FLASK_APP=blueprints_service.main:app flask run --reload
- python -m blueprints_service.main
"""

from __future__ import annotations

import logging

from blueprints_service import create_app
from blueprints_service.config import Config

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

if __name__ == "__main__":
    # Simple built-in server for quick smoke testing
    app.run(host="127.0.0.1", port=8080, debug=True)
