"""Notification fan-out and delivery for the sake rating social feature."""
