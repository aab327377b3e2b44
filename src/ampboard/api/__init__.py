"""HTTP API for AMPBoard."""
