"""Design library catalog service."""
