"""Entry script for the omics dashboard.

Run with:
    python dev_gui.py

Or with panel serve (after installing the package):
    pip install -e .
    panel serve dev_gui.py --show --autoreload

Reads GEMINI_API_KEY from the environment or a local .env file.
"""

import logging

import panel as pn
from dotenv import load_dotenv

from omics_dashboard.app import APP_TITLE, create_app

# =============================================================================
# Configuration
# =============================================================================

# Seconds between simulated pipeline stages
STAGE_DELAY = 0.8

# =============================================================================
# Create and run the app
# =============================================================================

load_dotenv()
logging.basicConfig(level=logging.INFO)

app = create_app(stage_delay=STAGE_DELAY)

# For panel serve
app.view().servable(title=APP_TITLE)

if __name__ == "__main__":
    print("Starting omics dashboard...")

    pn.serve(
        app.view(),
        port=5006,
        show=True,
        autoreload=False,
        title=APP_TITLE,
    )
