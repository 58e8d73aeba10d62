"""
Page-settings storage and the admin save flow.

This module handles:
- Reading and writing page content by slug
- Saving admin content and announcing newly-added items to subscribers
"""

from .save_handler import announce_pending, apply_page_save, save_page_content
from .store import PageStore, SupabasePageStore

__all__ = [
    'PageStore',
    'SupabasePageStore',
    'apply_page_save',
    'announce_pending',
    'save_page_content',
]
