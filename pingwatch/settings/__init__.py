"""Application settings loading."""

from .app import AppSettings, get_settings, parse_target_urls


__all__ = ["AppSettings", "get_settings", "parse_target_urls"]
