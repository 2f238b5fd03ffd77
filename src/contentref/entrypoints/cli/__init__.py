"""The ``contentref`` command-line interface."""
