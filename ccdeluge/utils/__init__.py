"""Utility modules for ccDeluge."""
