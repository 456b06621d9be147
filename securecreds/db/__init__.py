"""Relational persistence for the credential vault."""
