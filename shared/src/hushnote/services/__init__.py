"""Persistence and orchestration services for Hushnote."""
