"""Spreadsheet upload parsing."""
