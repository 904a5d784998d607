"""Reusable UI components for the desktop app."""
