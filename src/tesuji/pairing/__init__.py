"""Round pairing for Swiss-system Go tournaments."""

from tesuji.pairing.swiss import generate_pairings

__all__ = ["generate_pairings"]
