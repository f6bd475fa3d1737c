#!/usr/bin/env python3
"""
Run script for the Asset Ledger admin
"""

import argparse
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from asset_ledger import create_app
from asset_ledger.logger import get_logger

# Note: API_BASE_URL and SECRET_KEY are read from the environment.
# Run 'python generate_env.py' to create a .env file.

logger = get_logger("asset_ledger.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Asset Ledger admin')
    parser.add_argument('--api-base-url',
                        help='Backend base address (overrides API_BASE_URL)')
    parser.add_argument('--max-pages', type=int,
                        help='Fail list pages that need more than this many backend pages (overrides PAGINATION_MAX_PAGES)')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    if args.api_base_url:
        os.environ['API_BASE_URL'] = args.api_base_url
    if args.max_pages is not None:
        os.environ['PAGINATION_MAX_PAGES'] = str(args.max_pages)

    logger.debug("Starting Asset Ledger admin...")
    app = create_app()

    # FLASK_DEBUG: Enable/disable debug mode (default: False for security)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # USE_RELOADER: Enable/disable auto-reloader (default: False in production)
    use_reloader = os.environ.get('USE_RELOADER', 'False').lower() in ('true', '1', 'yes', 'on')

    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
