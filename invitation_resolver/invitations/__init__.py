"""Invitation URL resolution and classification."""
