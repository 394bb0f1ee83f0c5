"""
Rate Limiting Utilities for Contact Form

Prevents spam and abuse of the contact form.

Counters live in a Django cache (see ``CONTACT_RATE_LIMIT_CACHE``), so the
local-memory backend gives a per-process limiter and a Redis backend gives
one shared by every worker. Nothing here needs to change to switch.
"""
import math
import time
from functools import wraps

from django.conf import settings
from django.core.cache import caches
from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address

from .exceptions import RateLimited


def _valid_ip(value):
    if not value:
        return None
    try:
        validate_ipv46_address(value)
    except ValidationError:
        return None
    return value


def get_client_ip(request):
    """
    Get client IP address from request.

    ``X-Forwarded-For`` is only read when ``CONTACT_TRUSTED_PROXY_COUNT``
    proxies sit in front of the app. Each trusted proxy appends one hop, so
    the client is the hop that many places from the right; anything left of
    it is client-supplied. Falls back to ``REMOTE_ADDR``.

    Returns:
        str or None: a valid IPv4/IPv6 address, or None when there is none
    """
    proxy_count = settings.CONTACT_TRUSTED_PROXY_COUNT
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if proxy_count > 0 and x_forwarded_for:
        hops = [hop.strip() for hop in x_forwarded_for.split(',')]
        if len(hops) >= proxy_count:
            ip = _valid_ip(hops[-proxy_count])
            if ip:
                return ip
    return _valid_ip(request.META.get('REMOTE_ADDR'))


class CacheRateLimiter:
    """
    Fixed-window submission counter keyed by client identity.

    Windows are aligned on multiples of ``window_seconds`` since the epoch,
    and each (identity, window) pair gets its own cache key that expires
    with the window.
    """

    key_prefix = 'contact-rate-limit'

    def __init__(self, max_count, window_seconds, cache_alias='default'):
        self.max_count = max_count
        self.window_seconds = window_seconds
        self.cache_alias = cache_alias

    @property
    def cache(self):
        return caches[self.cache_alias]

    def hit(self, identifier, now=None):
        """
        Record one request for ``identifier``.

        Returns:
            tuple: (is_allowed, remaining, reset_after_seconds)
        """
        if now is None:
            now = time.time()

        window = int(now // self.window_seconds)
        reset_after = max(1, math.ceil((window + 1) * self.window_seconds - now))
        key = f'{self.key_prefix}:{identifier}:{window}'

        # add() is a no-op for an existing key and incr() is atomic in the
        # locmem and redis backends, so concurrent hits never share a count
        self.cache.add(key, 0, timeout=self.window_seconds + 1)
        try:
            count = self.cache.incr(key)
        except ValueError:
            # Key expired between add() and incr()
            self.cache.set(key, 1, timeout=self.window_seconds + 1)
            count = 1

        remaining = max(self.max_count - count, 0)
        return count <= self.max_count, remaining, reset_after

    def reset(self, identifier, now=None):
        """Forget the current window's count for ``identifier``."""
        if now is None:
            now = time.time()
        window = int(now // self.window_seconds)
        self.cache.delete(f'{self.key_prefix}:{identifier}:{window}')


def get_contact_rate_limiter():
    """Build the limiter from the current contact form settings."""
    return CacheRateLimiter(
        max_count=settings.CONTACT_RATE_LIMIT_MAX,
        window_seconds=settings.CONTACT_RATE_LIMIT_WINDOW_SECONDS,
        cache_alias=settings.CONTACT_RATE_LIMIT_CACHE,
    )


def rate_limit_contact_form(view_func):
    """
    Decorator for rate limiting contact form submissions per client IP.

    Every request that reaches the view counts, whatever its outcome.
    Over the cap, ``RateLimited`` is raised before the view runs.
    Responses that get through carry ``RateLimit-*`` headers.
    """
    @wraps(view_func)
    def wrapped_view(self, request, *args, **kwargs):
        limiter = get_contact_rate_limiter()
        # Clients without an address share one bucket
        identifier = get_client_ip(request) or 'unknown'
        allowed, remaining, reset_after = limiter.hit(identifier)

        if not allowed:
            raise RateLimited(retry_after=reset_after, limit=limiter.max_count)

        response = view_func(self, request, *args, **kwargs)
        response['RateLimit-Limit'] = str(limiter.max_count)
        response['RateLimit-Remaining'] = str(remaining)
        response['RateLimit-Reset'] = str(reset_after)
        return response

    return wrapped_view
