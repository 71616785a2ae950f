#!/usr/bin/env python3
"""
Development startup script.

Verifies the local setup (packages, config/.env, token keys, MongoDB),
offers to fix what it can, then serves the storefront with auto-reload.

Usage:
    python scripts/start_dev.py [--skip-mongo]
"""

import argparse
import importlib.util
import shutil
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

REQUIRED_MODULES = ("fastapi", "uvicorn", "pymongo", "jwt", "cryptography", "pydantic_settings")


def missing_modules() -> list[str]:
    return [name for name in REQUIRED_MODULES if importlib.util.find_spec(name) is None]


def ensure_env_file() -> bool:
    """Create config/.env from the example on first run"""
    env_file = CONFIG_DIR / ".env"
    if env_file.exists():
        return True

    example = CONFIG_DIR / ".env.example"
    if not example.exists():
        print("✗ Neither config/.env nor config/.env.example exists")
        return False

    shutil.copy(example, env_file)
    print("! Created config/.env from config/.env.example; review it before deploying")
    return True


def ensure_token_keys(settings) -> None:
    """Offer to generate signing keys when none are configured"""
    if settings.get_token_private_key():
        print("✓ Token signing key configured")
        return

    answer = input("No token signing key configured. Generate one now? [Y/n]: ")
    if answer.strip().lower() == "n":
        print("! Continuing with an ephemeral key; tokens will not survive a restart")
        return
    subprocess.run([sys.executable, str(PROJECT_ROOT / "scripts" / "generate_keys.py")], check=True)


def mongo_reachable(settings) -> bool:
    from pymongo.errors import PyMongoError

    from storefront.database import create_client

    client = create_client(settings)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        print(f"✗ MongoDB at {settings.mongo_uri} did not answer: {e}")
        return False
    finally:
        client.close()

    print(f"✓ MongoDB reachable, database '{settings.mongo_database}'")
    return True


def main():
    parser = argparse.ArgumentParser(description="Run the storefront API locally")
    parser.add_argument("--skip-mongo", action="store_true", help="Do not ping MongoDB before starting")
    args = parser.parse_args()

    missing = missing_modules()
    if missing:
        print(f"✗ Missing packages: {', '.join(missing)}")
        print("  Install with: pip install -e '.[test]'")
        sys.exit(1)

    if not ensure_env_file():
        sys.exit(1)

    from storefront.core.config import Settings

    settings = Settings(_env_file=CONFIG_DIR / ".env")
    ensure_token_keys(settings)

    if not args.skip_mongo and not mongo_reachable(settings):
        sys.exit(1)

    import uvicorn

    print(f"\n🏪 Storefront API on http://localhost:{settings.port} (docs at /docs)\n")
    uvicorn.run(
        "storefront.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=True,
        reload_dirs=[str(PROJECT_ROOT / "storefront")],
    )


if __name__ == "__main__":
    main()
