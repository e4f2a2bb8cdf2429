class LayerTreeError(Exception):
    """Base class for errors raised by layertree itself."""


class TreeFrozenError(LayerTreeError):
    """Raised when a builder is mutated after ``freeze()``."""
