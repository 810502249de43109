"""Bundled module libraries, projects and price lists (JSON package data)."""
