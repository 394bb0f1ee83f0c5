"""
Contact Form Validation Helpers

Email normalization and HTML sanitization for contact submissions.
"""
from django.utils.html import escape


GMAIL_DOMAINS = ('gmail.com', 'googlemail.com')

ICLOUD_DOMAINS = ('icloud.com', 'me.com', 'mac.com')

OUTLOOK_DOMAINS = (
    'hotmail.com', 'hotmail.co.uk', 'hotmail.fr', 'hotmail.de', 'hotmail.it',
    'live.com', 'live.co.uk', 'live.fr', 'live.de', 'live.it',
    'outlook.com', 'outlook.co.uk', 'outlook.fr', 'outlook.de', 'outlook.it',
    'msn.com', 'passport.com',
)

YAHOO_DOMAINS = (
    'yahoo.com', 'yahoo.co.uk', 'yahoo.ca', 'yahoo.de', 'yahoo.fr',
    'yahoo.in', 'yahoo.it', 'ymail.com', 'rocketmail.com',
)

YANDEX_DOMAINS = (
    'yandex.ru', 'yandex.ua', 'yandex.kz', 'yandex.com', 'yandex.by', 'ya.ru',
)


def normalize_email(value):
    """
    Canonicalize an email address so aliases of one mailbox compare equal.

    The address is lower-cased and provider-specific aliasing is folded:
    Gmail ignores dots and ``+tags``, Outlook and iCloud ignore ``+tags``,
    Yahoo ignores ``-tags`` and Yandex has several interchangeable domains.
    Applying it to its own output returns the same value.

    Raises:
        ValueError: if the address has no local part left after folding.
    """
    local, sep, domain = value.strip().rpartition('@')
    if not sep or not local or not domain:
        raise ValueError(f"Not an email address: {value!r}")

    local = local.lower()
    domain = domain.lower()

    if domain in GMAIL_DOMAINS:
        local = local.split('+', 1)[0].replace('.', '')
        domain = 'gmail.com'
    elif domain in ICLOUD_DOMAINS or domain in OUTLOOK_DOMAINS:
        local = local.split('+', 1)[0]
    elif domain in YAHOO_DOMAINS:
        local = local.split('-', 1)[0]
    elif domain in YANDEX_DOMAINS:
        domain = 'yandex.ru'

    if not local:
        raise ValueError(f"Email address has an empty mailbox: {value!r}")

    return f"{local}@{domain}"


def sanitize_text(value):
    """Trim and HTML-escape free text before it is stored."""
    return escape(value.strip())
