"""
cipherlink-keygen: generate identity key pairs and derive shared secrets.

Nothing is written to disk; key material is printed to stdout only.
"""

import argparse
import json
import sys
from typing import List, Optional

from ..config import ConfigError, load_config
from ..crypto.errors import CipherSuiteError
from ..crypto.keys import KeyPair


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='cipherlink-keygen',
        description='Generate CipherLink identity keys or derive a shared secret',
    )
    parser.add_argument('--format', choices=['text', 'json'], default='text',
                        help='Output format (default: text)')
    parser.add_argument('--signing-key', type=str, default=None,
                        help='Existing 64-byte Ed25519 signing key as hex (instead of generating one)')
    parser.add_argument('--peer', type=str, default=None,
                        help="Peer's 32-byte X25519 public key as hex; prints the shared secret")
    return parser


def _parse_hex(value: str, name: str) -> bytes:
    try:
        return bytes.fromhex(value.strip())
    except ValueError:
        raise ValueError(f"{name} is not valid hex")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the cipherlink-keygen console script."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
        suite = config.create_suite()

        if args.signing_key:
            key_pair = KeyPair.from_signing_key(_parse_hex(args.signing_key, "--signing-key"))
        else:
            key_pair = suite.generate_key_pair()

        output = {
            'suite': suite.name,
            'signing_key': key_pair.signing_key.hex(),
            'verify_key': key_pair.verify_key.hex(),
            'private_key': key_pair.private_key.hex(),
            'public_key': key_pair.public_key.hex(),
        }

        if args.peer:
            peer_public = _parse_hex(args.peer, "--peer")
            output['shared_secret'] = suite.derive_shared_secret(key_pair.private_key, peer_public).hex()

    except (CipherSuiteError, ConfigError, ValueError) as e:
        print(f"cipherlink-keygen: error: {e}", file=sys.stderr)
        return 1

    if args.format == 'json':
        print(json.dumps(output, indent=2))
    else:
        for key, value in output.items():
            print(f"{key}: {value}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
