"""Shared helpers: versions, manifest detection, source locations and logging."""
