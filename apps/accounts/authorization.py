"""
Admin allow-list.

Snack admins are not stored in the database. Whoever's e-mail address is
listed in the ``ADMIN_EMAILS`` setting (comma-separated, case-insensitive)
may purchase requests and read the order history. Keeping the check behind
``is_admin`` lets a real role system replace it without touching callers.
"""

from django.conf import settings


def admin_emails(raw=None):
    """
    Normalise the configured allow-list.

    Args:
        raw: A comma-separated string or an iterable of addresses.
            Defaults to ``settings.ADMIN_EMAILS``.

    Returns:
        frozenset of lower-cased, stripped, non-empty addresses.
    """
    if raw is None:
        raw = getattr(settings, 'ADMIN_EMAILS', '')
    if isinstance(raw, str):
        raw = raw.split(',')
    return frozenset(
        email.strip().lower() for email in raw if email and email.strip()
    )


def is_admin(user, allow_list=None) -> bool:
    """Return True when ``user`` has an e-mail on the admin allow-list."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    email = getattr(user, 'email', None)
    if not email:
        return False
    return email.lower() in admin_emails(allow_list)
