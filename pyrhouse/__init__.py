"""Warehouse inventory services, CSV reports, spreadsheet helpers and a Jira client."""

__version__ = "0.1.0"