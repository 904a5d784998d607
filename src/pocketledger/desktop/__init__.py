"""Flet desktop shell hosting the expense list controllers."""
