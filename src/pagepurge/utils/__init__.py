"""Utility helpers for pagepurge."""

from pagepurge.utils.urls import host_of, is_valid_url

__all__ = ["host_of", "is_valid_url"]
