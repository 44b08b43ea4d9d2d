"""Hushnote local API: command surface for the desktop shell."""
