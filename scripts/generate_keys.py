#!/usr/bin/env python3
"""
Generate the Ed25519 key pair used to sign bearer tokens.

The private key signs tokens issued on register and login.
The public key verifies them on every authenticated request.

Usage:
    python scripts/generate_keys.py
"""

import os
import sys
from pathlib import Path

from storefront.security.tokens import generate_key_pair


def write_key_pair(output_dir: Path) -> tuple[str, str]:
    """
    Generate a key pair and save it to files.

    Returns:
        Tuple of (private_key_path, public_key_path)
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    private_pem, public_pem = generate_key_pair()

    private_path = output_dir / "token_private.pem"
    public_path = output_dir / "token_public.pem"

    with open(private_path, "w") as f:
        f.write(private_pem)
    os.chmod(private_path, 0o600)  # Restrict permissions

    with open(public_path, "w") as f:
        f.write(public_pem)

    return str(private_path), str(public_path)


def main():
    project_root = Path(__file__).parent.parent
    keys_dir = project_root / "config" / "keys"

    print("=" * 60)
    print("Token Key Generator")
    print("=" * 60)

    if (keys_dir / "token_private.pem").exists():
        response = input("\nKeys already exist. Overwrite? [y/N]: ")
        if response.lower() != "y":
            print("Aborted.")
            sys.exit(0)

    print("\nGenerating Ed25519 key pair for token signing...")
    private_path, public_path = write_key_pair(keys_dir)
    print(f"   Private key: {private_path}")
    print(f"   Public key:  {public_path}")

    print("\nUpdate your config/.env file:")
    print(f"   TOKEN_PRIVATE_KEY_PATH={private_path}")
    print(f"   TOKEN_PUBLIC_KEY_PATH={public_path}")

    print("\n" + "=" * 60)
    print("Keys generated successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
