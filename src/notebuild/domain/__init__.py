"""Domain layer — link rewriting, slugs, permalinks, and document models.

This layer depends only on stdlib, pydantic, ruamel.yaml and pymdown-extensions.
It must never import from services, infrastructure, commands, or config.
"""
