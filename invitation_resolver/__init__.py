"""Invitation resolver: locate, decode and classify agent invitation URLs."""
