"""API layer - routing, pages, and dependencies."""
