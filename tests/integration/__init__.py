"""Integration test package.

These tests exercise the end-to-end behaviour of the CONSORT diagram
builder, from subject-level data to an image on disk.  They write to
temporary directories only.
"""
