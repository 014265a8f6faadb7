"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

linkchain: compose LLM provider calls with caching, retries and observers.
"""

__version__ = "0.1.0"
