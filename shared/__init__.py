"""Helpers shared by all tools: logging setup and console output."""
