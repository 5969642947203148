"""ID Generation System.

ULID-based identifiers for component nodes, pages and uploaded assets.

Design:
- ULIDs only: millisecond timestamp + 80 random bits, so two nodes created
  in the same process never collide
- Prefixed: type-specific prefixes for debugging (comp_*, pg_*, asset_*)
- Temporary page ids carry a configurable prefix until the first save
"""

from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

NodeID = NewType("NodeID", str)
"""Component node identifier"""

PageID = NewType("PageID", str)
"""Page identifier (temporary or durable)"""

AssetID = NewType("AssetID", str)
"""Uploaded asset identifier"""

# ============================================================================
# ID Prefixes
# ============================================================================


class Prefix:
    """ID prefix constants."""

    NODE = "comp"
    PAGE = "pg"
    ASSET = "asset"


# ============================================================================
# ULID Generator
# ============================================================================


class Generator:
    """ULID generator."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"


# Singleton instance
_generator = Generator()

# ============================================================================
# Typed ID Generators
# ============================================================================


def new_node_id() -> NodeID:
    """Generate new component node ID."""
    return NodeID(_generator.generate_with_prefix(Prefix.NODE))


def new_page_id() -> PageID:
    """Generate new durable page ID."""
    return PageID(_generator.generate_with_prefix(Prefix.PAGE))


def new_temp_page_id(prefix: str = "page_") -> PageID:
    """Generate a client-side page ID for a page that was never saved.

    Args:
        prefix: Recognizable prefix, including its separator

    Returns:
        Temporary page ID
    """
    return PageID(f"{prefix}{_generator.generate()}")


def new_asset_id() -> AssetID:
    """Generate new asset ID."""
    return AssetID(_generator.generate_with_prefix(Prefix.ASSET))


def is_temporary_page_id(id_str: str, prefix: str = "page_") -> bool:
    """Check if a page ID was generated client-side and never saved."""
    return id_str.startswith(prefix)
