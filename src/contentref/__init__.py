"""contentref

Field and reference resolution over a content-management entity store.
Dereferences entity references with locale fallback and walks composed
entities up to their owning parent.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
