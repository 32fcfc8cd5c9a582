"""Ranked classroom voting: ballot validation and vote tallying."""
