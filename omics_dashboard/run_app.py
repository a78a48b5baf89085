#!/usr/bin/env python
"""Launch the omics dashboard.

Usage:
    python -m omics_dashboard.run_app [--port PORT] [--no-browser]
                                      [--stage-delay SECONDS] [--log-level LEVEL]

The Gemini API key is read from GEMINI_API_KEY (or GOOGLE_API_KEY / API_KEY),
including values from a ``.env`` file in the working directory.
"""

import argparse
import logging

from dotenv import load_dotenv

from .simulation import STAGE_DELAY_SECONDS


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description='Launch the omics dashboard')
    parser.add_argument('--port', type=int, default=5007, help='Port to serve on')
    parser.add_argument('--no-browser', action='store_true',
                       help='Do not open browser automatically')
    parser.add_argument('--stage-delay', type=float, default=STAGE_DELAY_SECONDS,
                       help='Seconds between simulated pipeline stages')
    parser.add_argument('--log-level', type=str, default='INFO',
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Logging level')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    load_dotenv()

    from .app import serve

    print(f"Starting omics dashboard on port {args.port}...")

    serve(
        stage_delay=args.stage_delay,
        port=args.port,
        show=not args.no_browser,
    )


if __name__ == "__main__":
    main()
