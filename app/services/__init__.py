"""Data access services for the catalog pages."""
