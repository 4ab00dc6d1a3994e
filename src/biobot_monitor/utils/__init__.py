"""Small parsing helpers shared across the package."""
