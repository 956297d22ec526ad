"""Travloger back-office API."""
