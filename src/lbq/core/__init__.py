"""Matching, registration and dispatch core plus its configuration helpers."""
