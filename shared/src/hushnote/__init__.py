"""Hushnote shared core: onboarding state, settings storage and configuration."""
