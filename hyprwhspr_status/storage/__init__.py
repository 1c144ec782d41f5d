"""Filesystem storage: path resolution, atomic writes, history and readers."""
