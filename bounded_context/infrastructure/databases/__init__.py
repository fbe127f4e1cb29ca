"""Relational storage for the bounded context's core database."""
