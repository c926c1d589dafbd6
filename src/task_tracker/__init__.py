"""Task Tracker - per-user task records with ownership-checked mutations.

Create, list, update and delete personal tasks through an ownership-aware
service layer, exposed via MCP tools and a CLI.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
