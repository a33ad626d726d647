"""Infrastructure layer — file discovery, reading, and JSON export.

This layer depends on the domain layer for parsing and models.
It must never import from services, commands, or output.
"""
