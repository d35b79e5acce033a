"""
CLI layer - Typer client for the REST API.
"""
