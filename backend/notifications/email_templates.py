"""
HTML builders for subscriber emails.

Pure functions only: nothing here performs I/O or raises. Every message
built here carries a personalised unsubscribe link and is a complete HTML
document, whether it comes from the built-in layout or an admin template.
"""

import re
from urllib.parse import quote

from models.content import (
    BlogPost,
    BookClub,
    ContentItem,
    ContentType,
)

SITE_NAME = "Chai & Chapter"
SIGNATURE_LINE = f"— {SITE_NAME}"
UNSUBSCRIBE_PATH = "/subscribe/unsubscribe"
WELCOME_SUBJECT = "Welcome to the reading list — Chapters.aur.Chai"
TEST_SUBJECT = f"Test email — {SITE_NAME}"
MAX_WELCOME_CLUBS = 12

BODY_STYLE = (
    "font-family:Georgia,serif;max-width:560px;margin:0 auto;padding:24px;"
    "color:#3d3329;background:#faf8f5;"
)

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")
_WHITESPACE = re.compile(r"\s+")

# Wording of the built-in layout per content type: (intro, button label, default subject)
_DEFAULT_COPY = {
    ContentType.BLOG: (
        "A new book review is live:",
        "Read the review",
        "New book review: {title} — " + SITE_NAME,
    ),
    ContentType.RECOMMENDATION: (
        "A new book recommendation list is live:",
        "Read the list",
        "New book recommendation: {title} — " + SITE_NAME,
    ),
    ContentType.MUSINGS: (
        "A new Her Musings Verse piece is live:",
        "Read more",
        "New musing: {title} — " + SITE_NAME,
    ),
    ContentType.BOOK_CLUB: (
        "We've just added a new book club you might like:",
        "Join this book club",
        "New book club: {title} — " + SITE_NAME,
    ),
}


def escape_html(text: str) -> str:
    """Escape &, <, > and double quotes for safe insertion into markup."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def encode_component(text: str) -> str:
    """Percent-encode a value for use as a single URL path or query component."""
    return quote(text, safe="!~*'()")


def build_unsubscribe_url(site_url: str, email: str) -> str:
    return f"{site_url}{UNSUBSCRIBE_PATH}?email={encode_component(email)}"


def build_unsubscribe_footer(site_url: str, email: str) -> str:
    url = build_unsubscribe_url(site_url, email)
    return (
        '<p style="margin:24px 0 0;font-size:14px;color:#8b7355;">'
        f'You can <a href="{url}" style="color:#c4704a;">unsubscribe anytime</a>'
        " from our emails.</p>"
    )


def to_absolute_image_url(site_url: str, image: str) -> str:
    """Make an uploaded image path absolute; empty input gives an empty string."""
    trimmed = (image or "").strip()
    if not trimmed:
        return ""
    if trimmed.startswith(("http://", "https://")):
        return trimmed
    return site_url + trimmed if trimmed.startswith("/") else f"{site_url}/{trimmed}"


def build_image_tag(image_url: str, alt: str) -> str:
    if not image_url:
        return ""
    return (
        f'<img src="{escape_html(image_url)}" alt="{escape_html(alt)}" width="560" '
        'style="max-width:100%;height:auto;border-radius:8px;display:block;" />'
    )


def add_unsubscribe_footer(html: str, footer: str) -> str:
    """Insert the footer before </body>, or append it when there is no body tag."""
    if "</body>" in html:
        return html.replace("</body>", f"{footer}</body>", 1)
    return html + footer


def wrap_document(html: str) -> str:
    """Wrap a fragment in a minimal HTML document unless it already is one."""
    if "<!DOCTYPE" in html or "<html" in html:
        return html
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width,initial-scale=1"></head>'
        f'<body style="{BODY_STYLE}">{html}</body></html>'
    )


def fill_placeholders(template: str, values: dict[str, str]) -> str:
    """Replace each known {{token}} in one pass; unknown tokens are left as-is."""
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def build_item_link(site_url: str, content_type: ContentType, item: ContentItem) -> str:
    """Absolute link to a content item on the public site."""
    if isinstance(item, BookClub):
        return item.join_link.strip() or f"{site_url}/{content_type.site_path}"
    return f"{site_url}/{content_type.site_path}/{encode_component(item.canonical_slug)}"


def _display_fields(item: ContentItem) -> tuple[str, str, str]:
    """(title, description, raw image) for either item shape."""
    if isinstance(item, BookClub):
        return item.name, item.description, item.logo
    return item.title, item.excerpt, item.image


def _placeholder_values(
    item: ContentItem,
    link: str,
    image_url: str,
    image_tag: str,
    unsubscribe_url: str,
) -> dict[str, str]:
    if isinstance(item, BookClub):
        return {
            "clubName": escape_html(item.name),
            "clubDescription": escape_html(item.description),
            "clubImage": image_tag,
            "clubImageUrl": escape_html(image_url),
            "joinLink": link,
            "unsubscribeUrl": unsubscribe_url,
        }

    values = {
        "title": escape_html(item.title),
        "excerpt": escape_html(item.excerpt),
        "description": escape_html(item.excerpt),
        "link": link,
        "image": image_tag,
        "imageUrl": escape_html(image_url),
        "author": escape_html(item.author),
        "unsubscribeUrl": unsubscribe_url,
    }
    if isinstance(item, BlogPost):
        values["bookTitle"] = escape_html(item.book_title)
    return values


def _default_announcement_body(
    content_type: ContentType,
    title: str,
    description: str,
    link: str,
    image_tag: str,
    footer: str,
) -> str:
    intro, button_label, _ = _DEFAULT_COPY[content_type]
    img_block = f'<p style="margin:0 0 16px;">{image_tag}</p>' if image_tag else ""

    return f"""
  <p style="margin:0 0 16px;font-size:18px;">Hi there,</p>
  <p style="margin:0 0 16px;color:#5c4d3d;">{intro}</p>
  {img_block}
  <h2 style="margin:0 0 12px;font-size:22px;color:#3d3329;">{escape_html(title)}</h2>
  <p style="margin:0 0 16px;color:#5c4d3d;line-height:1.5;">{escape_html(description)}</p>
  <p style="margin:0 0 24px;"><a href="{escape_html(link)}" style="display:inline-block;background:#c4704a;color:#fff;padding:12px 20px;text-decoration:none;border-radius:8px;font-weight:600;">{button_label}</a></p>
  {footer}
  <p style="margin:8px 0 0;font-size:14px;color:#8b7355;">{SIGNATURE_LINE}</p>"""


def render_announcement_html(
    item: ContentItem,
    content_type: ContentType,
    recipient: str,
    site_url: str,
    body_template: str | None = None,
) -> str:
    """
    Build the announcement email for one recipient.

    Args:
        item: Parsed content item (post, list, musing or book club)
        content_type: Which kind of content the item is
        recipient: Subscriber address the unsubscribe link is bound to
        site_url: Public site URL without trailing slash
        body_template: Admin HTML template with {{placeholders}}; None or
            blank selects the built-in layout

    Returns:
        Complete HTML document
    """
    title, description, raw_image = _display_fields(item)
    link = build_item_link(site_url, content_type, item)
    image_url = to_absolute_image_url(site_url, raw_image)
    image_tag = build_image_tag(image_url, title)
    footer = build_unsubscribe_footer(site_url, recipient)

    if body_template and body_template.strip():
        values = _placeholder_values(
            item,
            link,
            image_url,
            image_tag,
            build_unsubscribe_url(site_url, recipient),
        )
        html = fill_placeholders(body_template, values)
        return wrap_document(add_unsubscribe_footer(html, footer))

    body = _default_announcement_body(
        content_type, title, description, link, image_tag, footer
    )
    return wrap_document(body)


def single_line(text: str) -> str:
    """Collapse CR/LF and other whitespace runs so text is safe in a mail header."""
    return _WHITESPACE.sub(" ", text).strip()


def render_announcement_subject(
    item: ContentItem,
    content_type: ContentType,
    subject_template: str | None = None,
) -> str:
    """Admin subject with its title/club-name placeholder filled, else the default."""
    title, _, _ = _display_fields(item)
    if subject_template and subject_template.strip():
        token = "clubName" if content_type is ContentType.BOOK_CLUB else "title"
        return single_line(subject_template.replace("{{" + token + "}}", title))
    return single_line(_DEFAULT_COPY[content_type][2].format(title=title))


def build_clubs_block(clubs: list[BookClub], site_url: str) -> str:
    """List of book clubs for the welcome email."""
    clubs_url = f"{site_url}/book-clubs"
    if not clubs:
        return (
            '<p style="margin:0 0 16px;color:#5c4d3d;">You can always explore our '
            f'<a href="{clubs_url}" style="color:#c4704a;">book clubs page</a> '
            "to see what we offer.</p>"
        )

    entries = []
    for club in clubs[:MAX_WELCOME_CLUBS]:
        href = escape_html(club.join_link.strip()) if club.join_link.strip() else clubs_url
        theme = f" — {escape_html(club.theme.strip())}" if club.theme.strip() else ""
        entries.append(
            f'<li style="margin-bottom:6px;"><a href="{href}" style="color:#c4704a;">'
            f"{escape_html(club.name.strip())}</a>{theme}</li>"
        )

    return f"""
  <p style="margin:0 0 12px;color:#5c4d3d;">Interested in joining a book club? Here are ours:</p>
  <ul style="margin:0 0 16px;padding-left:20px;color:#5c4d3d;">
    {''.join(entries)}
  </ul>
  <p style="margin:0 0 16px;"><a href="{clubs_url}" style="color:#c4704a;font-weight:600;">View all book clubs →</a></p>"""


def render_welcome_html(
    recipient: str,
    name: str | None,
    clubs: list[BookClub],
    site_url: str,
    body_template: str | None = None,
    signature: str | None = None,
) -> str:
    """
    Build the welcome email for a new subscriber.

    Admin templates may use {{name}}, {{bookClubs}} and {{unsubscribeUrl}};
    the admin signature is appended after the body in both paths.
    """
    footer = build_unsubscribe_footer(site_url, recipient)
    signature = signature.strip() if signature else ""

    if body_template and body_template.strip():
        html = fill_placeholders(
            body_template,
            {
                "name": escape_html(name) if name else "there",
                "bookClubs": build_clubs_block(clubs, site_url),
                "unsubscribeUrl": build_unsubscribe_url(site_url, recipient),
            },
        )
        if signature:
            html = f"{html}\n{signature}"
        return wrap_document(add_unsubscribe_footer(html, footer))

    greeting = f"Hi {escape_html(name)}," if name else "Hi there,"
    body = f"""
  <p style="margin:0 0 16px;font-size:18px;">{greeting}</p>
  <p style="margin:0 0 16px;color:#5c4d3d;">Welcome to the reading list! You'll get book recommendations, blog updates, and reading lists straight to your inbox.</p>
  {build_clubs_block(clubs, site_url)}
  {footer}
  <p style="margin:8px 0 0;font-size:14px;color:#8b7355;">{SIGNATURE_LINE}</p>{signature}"""
    return wrap_document(body)


def render_test_html() -> str:
    return wrap_document(
        f"""
  <p style="margin:0 0 16px;font-size:18px;">This is a test email.</p>
  <p style="margin:0 0 16px;color:#5c4d3d;">If you received this, your SMTP setup for {SITE_NAME} is working. Welcome emails will be sent from the same account.</p>
  <p style="margin:24px 0 0;font-size:14px;color:#8b7355;">{SIGNATURE_LINE}</p>"""
    )
