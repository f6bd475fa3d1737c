#!/usr/bin/env python3
"""
Environment Configuration Generator for the Asset Ledger admin

This script generates a .env file with:
- Cryptographically secure SECRET_KEY for Flask sessions and CSRF tokens
- Backend API address and request timeout
- Server and HTTPS settings

Usage:
    python generate_env.py                                   # Interactive mode
    python generate_env.py --force                           # Overwrite existing .env
    python generate_env.py --dev                             # Development mode (HTTP, predictable key)
    python generate_env.py --api-base-url https://api.example.com/api/
"""

import secrets
import sys
import os
from datetime import datetime
from pathlib import Path
import argparse

DEFAULT_API_BASE_URL = "http://127.0.0.1:8000/api/"
DEFAULT_API_TIMEOUT_MS = 5000


class EnvGenerator:
    """Generate environment configuration"""

    def __init__(self, dev_mode=False, api_base_url=DEFAULT_API_BASE_URL,
                 api_timeout_ms=DEFAULT_API_TIMEOUT_MS, env_file=None):
        self.dev_mode = dev_mode
        self.api_base_url = api_base_url
        self.api_timeout_ms = api_timeout_ms
        self.env_file = Path(env_file) if env_file else Path(__file__).parent / '.env'

    def generate_secret_key(self, length=64):
        """Generate a cryptographically secure secret key"""
        if self.dev_mode:
            return "dev-secret-key-DO-NOT-USE-IN-PRODUCTION"
        return secrets.token_hex(length)

    def create_env_content(self):
        """Create the full .env file content"""
        secret_key = self.generate_secret_key()
        https = 'False' if self.dev_mode else 'True'

        content = f"""# Asset Ledger Environment Configuration
# Generated: {self._get_timestamp()}
#
# SECURITY WARNING: Keep this file secret! Never commit to version control!

# ============================================================================
# Flask Configuration
# ============================================================================

# Secret key for session signing and CSRF protection
SECRET_KEY={secret_key}

# Flask debug mode: 'True' or 'False'
# WARNING: NEVER set to True in production!
FLASK_DEBUG=False
USE_RELOADER=False

# Server host (0.0.0.0 = all interfaces, 127.0.0.1 = localhost only)
FLASK_HOST=127.0.0.1
FLASK_PORT=5000

# ============================================================================
# Backend API
# ============================================================================

# Base address every relative endpoint (assets/, incomes/, ...) is resolved against
API_BASE_URL={self.api_base_url}

# Timeout for each individual backend request, in milliseconds
API_TIMEOUT_MS={self.api_timeout_ms}

# Optional upper bound on pages followed per list; leave unset to follow every link
# PAGINATION_MAX_PAGES=1000

# ============================================================================
# Security Settings
# ============================================================================

ENABLE_HTTPS={https}
FORCE_HTTPS_REDIRECT={https}
SESSION_COOKIE_SECURE={https}

# ============================================================================
# Logging
# ============================================================================

# LOG_DIR=logs
# LOG_LEVEL=DEBUG
"""

        return content, {
            'secret_key': secret_key,
            'api_base_url': self.api_base_url,
        }

    def _get_timestamp(self):
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def file_exists(self):
        """Check if .env file already exists"""
        return self.env_file.exists()

    def create_backup(self):
        """Create backup of existing .env file"""
        if not self.file_exists():
            return None

        backup_path = self.env_file.parent / f'.env.backup.{self._get_timestamp().replace(":", "-").replace(" ", "_")}'
        import shutil
        shutil.copy2(self.env_file, backup_path)
        return backup_path

    def write_env_file(self, content):
        """Write content to .env file"""
        with open(self.env_file, 'w') as f:
            f.write(content)

        # Set file permissions to 600 (owner read/write only)
        os.chmod(self.env_file, 0o600)

    def display_summary(self, settings):
        print("\n" + "=" * 80)
        if self.dev_mode:
            print("Flask Secret Key: dev-secret-key-DO-NOT-USE-IN-PRODUCTION")
        else:
            print(f"Flask Secret Key: {settings['secret_key'][:8]}... ({len(settings['secret_key'])} characters)")
        print(f"Backend API:      {settings['api_base_url']}")
        print("\nNext Steps:")
        print("   1. Check API_BASE_URL points at the backend")
        print("   2. Run: python app.py")
        print("   3. Keep .env file secure (never commit to git)")
        print("=" * 80 + "\n")

    def generate(self, force=False):
        """
        Generate .env file

        Args:
            force: Overwrite existing .env file without prompting
        """
        if self.file_exists() and not force:
            print(f"\nFile {self.env_file} already exists!")
            response = input("Do you want to overwrite it? (yes/no): ").lower().strip()

            if response not in ['yes', 'y']:
                print("Aborted. Existing .env file was not modified.")
                return False

            backup_path = self.create_backup()
            if backup_path:
                print(f"Backup created: {backup_path}")

        content, settings = self.create_env_content()
        self.write_env_file(content)
        print(f"Created: {self.env_file}")

        self.display_summary(settings)

        return True


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Generate .env configuration for the Asset Ledger admin',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python generate_env.py              # Interactive mode
  python generate_env.py --force      # Overwrite without prompting
  python generate_env.py --dev        # Development mode (HTTP, fixed secret key)
        """
    )

    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing .env file without prompting'
    )

    parser.add_argument(
        '--dev', '-d',
        action='store_true',
        help='Development mode: plain HTTP and a fixed secret key (NOT FOR PRODUCTION!)'
    )

    parser.add_argument(
        '--api-base-url',
        default=DEFAULT_API_BASE_URL,
        help=f'Backend base address (default: {DEFAULT_API_BASE_URL})'
    )

    parser.add_argument(
        '--api-timeout-ms',
        type=int,
        default=DEFAULT_API_TIMEOUT_MS,
        help=f'Per-request timeout in milliseconds (default: {DEFAULT_API_TIMEOUT_MS})'
    )

    args = parser.parse_args()

    if args.dev:
        print("\nWARNING: Development mode enabled! Do not use this .env in production.\n")

    generator = EnvGenerator(dev_mode=args.dev,
                             api_base_url=args.api_base_url,
                             api_timeout_ms=args.api_timeout_ms)

    sys.exit(0 if generator.generate(force=args.force) else 1)


if __name__ == '__main__':
    main()
