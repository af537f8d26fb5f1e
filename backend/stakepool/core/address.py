"""Address Derivation — deterministic, collision-resistant record addresses.

Invariants:
    - derive() is PURE: same (namespace, seeds) always yields the same address
    - Each part is length-prefixed, so ("ab", "c") and ("a", "bc") never share input bytes
    - Namespace is hashed as the first part: identical seeds under different
      namespaces (server "x" vs vault "x") produce different addresses
    - Wallets live under their own namespace: no caller identity can name a vault
      or any other derived record as its wallet

Design Decisions:
    - SHA-256 hex digest: stable, printable, usable as a primary key
"""

import hashlib

from stakepool.core.domain_types import Address, Namespace, ServerId


def _encode_part(part: str) -> bytes:
    raw = part.encode("utf-8")
    return len(raw).to_bytes(4, "big") + raw


def derive(namespace: Namespace, *seeds: str) -> Address:
    """Map (namespace, seeds...) to a unique address."""
    digest = hashlib.sha256()
    digest.update(_encode_part(namespace.value))
    digest.update(len(seeds).to_bytes(4, "big"))
    for seed in seeds:
        digest.update(_encode_part(seed))
    return Address(digest.hexdigest())


def main_address() -> Address:
    return derive(Namespace.MAIN)


def server_address(server_id: ServerId) -> Address:
    return derive(Namespace.SERVER, server_id)


def delegation_address(delegator: Address, server_id: ServerId) -> Address:
    return derive(Namespace.DELEGATION, delegator, server_id)


def vault_address(server_id: ServerId) -> Address:
    return derive(Namespace.VAULT, server_id)


def wallet_address(owner: Address) -> Address:
    """Token account an identity pays from and is paid into."""
    return derive(Namespace.WALLET, owner)
