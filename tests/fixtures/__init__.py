"""
Test Fixtures

Saved Mediapart billing pages (one per known layout, plus malformed and
unknown pages) and the records expected from each.
"""
