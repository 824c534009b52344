"""Placement logic: bond candidates, VSEPR guidelines, snapping, and sessions."""
