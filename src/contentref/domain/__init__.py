"""Domain layer for contentref.

Contains the value objects (entity kinds, capabilities, locales, entity
references) and the domain errors shared by every other layer. This package
is deliberately technology-agnostic.

Dependency rule: do not import from `contentref.adapters` or
`contentref.entrypoints`.
"""
