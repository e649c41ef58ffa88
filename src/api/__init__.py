"""Payload models for the dbt-core-interface server."""
