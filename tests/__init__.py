"""contentref test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Behaviour every EntityStore implementation must share.
- integration/  : Real databases, migrations and wiring.
- e2e/          : The ``contentref`` command driven through click's CliRunner.
- fixtures/     : Shared pytest fixtures (registered in conftest.py).

General guidance
- Keep unit tests fast and deterministic; use the in-memory store, not mocks.
- Contract tests parametrize implementations to ensure consistent behavior.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
