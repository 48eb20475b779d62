"""
Static fixture data for the demo application.

This package holds the page configuration object and the fixed list of
sample records; nothing here is mutated or persisted.
"""
