"""Test suite for the CONSORT diagram builder.

Unit tests cover geometry, content resolution, rendering, sample data
and validation; integration tests run the whole pipeline and the CLI.
To run the tests, execute `pytest` from the project root.
"""
