"""Core services: backups, packages, overlays and workflows."""
