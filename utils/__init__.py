"""
utils package
-------------

Contains utility modules used throughout the curation service.

Includes helpers for loading configuration constants, logging, spreadsheet ingestion and export,
and the AI collaborator client used by the copilot endpoints.
"""
