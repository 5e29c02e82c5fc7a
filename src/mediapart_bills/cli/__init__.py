"""
Command Line Interface Package

CLI for the Mediapart billing history scraper.

Command Structure:
- mediapart-bills: Main entry point with utility commands (version, config)
- mediapart-bills bills fetch: Log in, parse the billing page, store new bills
- mediapart-bills bills parse: Parse a saved billing page to JSON
- mediapart-bills bills summary: Summary of stored bills
"""
