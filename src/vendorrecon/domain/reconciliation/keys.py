"""Lookup key derivation for vendor barcodes.

The inventory system silently drops the last digit of the UPCs it stores, so
a full vendor UPC would miss most existing records. The lookup key is the
vendor UPC without its final digit and is matched as a prefix.
"""

from __future__ import annotations

from vendorrecon.domain.errors import InvalidUpcError


def normalize_upc(upc: str) -> str:
    """Return the lookup key for ``upc``.

    A single-digit UPC is returned unchanged since truncating it would leave
    nothing to look up.
    """

    candidate = upc.strip()
    if not candidate:
        raise InvalidUpcError(upc, "UPC is empty")
    if not (candidate.isascii() and candidate.isdigit()):
        raise InvalidUpcError(upc, "UPC must contain digits only")
    if len(candidate) <= 1:
        return candidate
    return candidate[:-1]
