"""Structured config file loaders."""
