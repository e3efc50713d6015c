"""Resolution engine services."""
