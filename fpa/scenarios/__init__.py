"""Scenario cloning and comparison."""
