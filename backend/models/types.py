"""Shared type definitions for type checking.

Uses NewType for the canonical item slug so it is not mixed up with a
page slug or a raw, untrimmed slug.

Uses TypeAlias for JSON shapes that are purely structural.
"""

from typing import Any, Literal, NewType, TypeAlias

# Identity types using NewType for type safety
CanonicalSlug = NewType("CanonicalSlug", str)

# Page slugs accepted by the page-settings store
PageSlug: TypeAlias = Literal[
    "contact",
    "work-with-me",
    "about",
    "terms",
    "privacy",
    "header",
    "footer",
    "home",
    "book-clubs",
    "blog",
    "recommendations",
    "musings",
    "email-settings",
]

# Structural aliases for loosely-typed page content
JSONObject: TypeAlias = dict[str, Any]
ContentCollection: TypeAlias = list[Any]  # raw `posts` / `items` / `clubs`
