"""Entrypoints (inbound adapters) for contentref.

Expose the application to the outside world. Currently only the ``contentref``
command-line interface. Parse and validate inputs, call the service layer
through `contentref.bootstrap`, and present results.

Dependency rule: may import `contentref.bootstrap`, `contentref.service_layer`
and `contentref.domain`; avoid importing `contentref.adapters` directly.
"""
