"""Helpers shared by CLI commands and the native host."""
