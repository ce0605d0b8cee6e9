"""Test suite for slides2scene.

Organized to mirror the source layout: tests/processing for the package readers and
layout extraction, tests/pipelines for the render cascade, tests/internals for config,
manifests and the user scaffold.

Running Tests:
    pytest                                  # Run all tests
    pytest -v                               # Verbose output
    pytest tests/test_cli.py                # Run specific file
    pytest -s                               # Don't capture output (for debugging)
    pytest -k "placeholder"                 # Run tests with matching pattern in function name

Debugging Tests:
    - Use breakpoint() in test code, then run with pytest -s
    - Use pytest --pdb to drop into debugger on failure

Notes:
    - Most package fixtures are raw XML zipped up by tests/helpers.py, because the broken
      packages we care about can't be produced with python-pptx.
    - Monkeypatch for changing values (sys.argv, env vars)
    - Aim for testing behavior, not implementation details
"""
