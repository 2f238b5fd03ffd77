"""Service layer for contentref.

Implements the application use-cases: field access, reference resolution
with translation fallback, and parent walks. Works only against the ports in
`contentref.interfaces`.

Dependency rule: may import `contentref.domain` and `contentref.interfaces`,
but not `contentref.adapters` or `contentref.entrypoints`.
"""
