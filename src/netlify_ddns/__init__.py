"""
Netlify DDNS - A dynamic DNS updater for Netlify DNS.

This package discovers the host's public IPv4 address and keeps a single
A record in a Netlify-hosted DNS zone pointing at it.
"""

__version__ = "0.1.0"
__author__ = "Netlify DDNS Contributors"
