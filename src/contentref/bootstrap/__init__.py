"""Bootstrap (composition root) for contentref.

Assembles the application at runtime: reads configuration, builds the unit of
work and the locale provider, and hands entrypoints a `ReferenceResolver`
factory.

Import rules:
- Entry points build the application through this package rather than
  wiring adapters themselves.
- This package may import: `contentref.adapters`, `contentref.service_layer`,
  `contentref.interfaces`, `contentref.domain`, and `contentref.config`.
- Inner layers must not import `contentref.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap

__all__ = ["AppContainer", "bootstrap"]
