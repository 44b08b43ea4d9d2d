"""Pydantic schemas for Hushnote."""
