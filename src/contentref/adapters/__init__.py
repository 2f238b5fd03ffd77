"""Adapters (infrastructure) for contentref.

Provide concrete implementations of the ports in `contentref.interfaces`
(entity stores, locale providers, unit of work), plus persistence mapping and
related wiring (engines, metadata, migrations).

Dependency rule: may import `contentref.domain` and `contentref.interfaces`;
neither of those may import this package.
"""
