"""
Depth limits and configuration presets for the sparse Merkle tree.

The production preset mirrors the classic 257-level layout: a leaf level
addressed by a full 256-bit key followed by 256 levels of hashing up to a
single root. The test preset keeps the same algorithm but a much shallower
tree, so property tests stay fast.
"""

from pydantic import BaseModel, ConfigDict
from typing_extensions import Final

from sparse_merkle.config import SMT_ENV

MIN_DEPTH: Final = 2
"""A tree needs at least a leaf level and a root level."""

MAX_DEPTH: Final = 257
"""Deepest supported tree; its leaf indices span the whole `Uint256` range."""

NODE_SIZE: Final = 32
"""Size in bytes of every node digest, and of every proof chunk."""


class TreeConfig(BaseModel):
    """A model holding the configuration constants for a tree preset."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    DEPTH: int
    """Number of levels, including the leaf level and the root level."""

    @property
    def LEAF_CAPACITY(self) -> int:  # noqa: N802
        """Number of addressable leaf positions at this depth."""
        return 1 << (self.DEPTH - 1)

    @property
    def PROOF_LENGTH(self) -> int:  # noqa: N802
        """Size in bytes of a proof for a tree of this depth."""
        return NODE_SIZE * (self.DEPTH - 1)


PROD_CONFIG: Final = TreeConfig(DEPTH=257)

TEST_CONFIG: Final = TreeConfig(DEPTH=16)

SMT_ENV_TO_CONFIG: Final = {
    "prod": PROD_CONFIG,
    "test": TEST_CONFIG,
}
"""Preset selected by each supported `SMT_ENV` value."""

DEFAULT_CONFIG: Final = SMT_ENV_TO_CONFIG[SMT_ENV]
"""The preset active for this process."""

DEFAULT_DEPTH: Final = DEFAULT_CONFIG.DEPTH
"""Depth used when a caller does not pass one explicitly."""
