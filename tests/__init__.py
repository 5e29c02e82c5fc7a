"""
Test Suite for Mediapart Bills

Test Structure:
- fixtures/: Saved billing pages and expected records
- unit/: Unit tests mirroring src/ package structure
- integration/: Parser, CLI and configuration workflows

Test Data:
All billing pages are synthetic; no real account data is included.
"""
