"""Puts the project root on sys.path so the tests run from a plain checkout."""
