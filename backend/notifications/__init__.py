"""
Subscriber notification system for Chai & Chapter.

This module handles:
- Detecting content items added by an admin save
- Resolving SMTP settings (admin overrides or environment)
- Rendering announcement, welcome and test emails
- Sending announcements to every subscribed reader
"""

from .content_diff import find_new_items
from .email_config import resolve_email_config
from .email_sender import (
    announce_content,
    make_announcer,
    send_test_email,
    send_welcome_email,
)
from .errors import EmailError, EmailNotConfiguredError

__all__ = [
    'find_new_items',
    'resolve_email_config',
    'announce_content',
    'make_announcer',
    'send_test_email',
    'send_welcome_email',
    'EmailError',
    'EmailNotConfiguredError',
]
