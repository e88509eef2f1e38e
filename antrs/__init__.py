"""Typed reading of AnnData (H5AD) style single-cell data from mapping-like trees."""

__version__ = "0.1.0"
__all__ = ["anndata", "arith"]