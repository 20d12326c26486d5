"""Data-access layer for the matester social network."""
