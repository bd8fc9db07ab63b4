"""Counsel: academic guidance chat proxy."""
