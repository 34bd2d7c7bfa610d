"""Adapters implementing sheetgraph's domain ports."""
