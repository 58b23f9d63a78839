"""Reporters — terminal, JSON and YAML."""
