"""twotrack test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- functional/   : User-visible flows run through both order services.
- contract/     : Shared behavior enforced across interchangeable implementations.
- e2e/          : The installed `twotrack` command, driven through Click's runner.
- fixtures/     : Shared fixtures, loaded through `pytest_plugins` (no tests here).

General guidance
- Keep unit fast and deterministic; everything runs against in-memory adapters.
- Functional asserts observable results (orders, credit, stock), not internals.
- Contract parametrizes implementations to ensure consistent behavior.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
- Async tests use @pytest.mark.asyncio (pytest-asyncio, strict mode).
"""
