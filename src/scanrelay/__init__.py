"""scanrelay: forward folder-change scans to a Jellyfin server."""

__version__ = "0.1.0"
