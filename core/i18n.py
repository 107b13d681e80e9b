"""
core/i18n.py -- Message resolution and locale negotiation.

Every user-visible string produced by the API, the validators and the web
pages goes through a MessageResolver: a callable bound to one locale and one
catalog namespace ("API", "Schemas", "Web") that maps a message id to text.
Handlers build one per request from the negotiated locale and pass it down
explicitly; nothing reads a global "current locale".

Lookup order for a message id:
  1. requested locale, requested namespace
  2. fallback (default) locale, same namespace
  3. the message id itself (logged -- a missing id is a catalog bug)

Locale negotiation uses Babel so regional tags ("ru-RU") resolve to the
supported base language ("ru").

Layer rule: core/ may not import from api/, web/, auth/ or companies/.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional, Protocol

from babel import Locale, UnknownLocaleError

from core.messages import CATALOGS

logger = logging.getLogger("companyhub.i18n")


class MessageResolver(Protocol):
    """Anything that turns a message id into localized text."""

    locale: str

    def __call__(self, message_id: str, **params: object) -> str: ...


class Translator:
    """Catalog-backed MessageResolver.

    Usage:
        t = Translator("ru", "API")
        t("serverError")                       # "Ошибка сервера..."
        t("newRoleTitle", companyName="Acme")  # str.format-style params
    """

    def __init__(
        self,
        locale: str,
        namespace: str,
        fallback_locale: str = "en",
        catalogs: Optional[dict] = None,
    ) -> None:
        self.locale = locale
        self.namespace = namespace
        self.fallback_locale = fallback_locale
        self._catalogs = catalogs if catalogs is not None else CATALOGS

    def _lookup(self, locale: str, message_id: str) -> Optional[str]:
        return self._catalogs.get(locale, {}).get(self.namespace, {}).get(message_id)

    def __call__(self, message_id: str, **params: object) -> str:
        template = self._lookup(self.locale, message_id)
        if template is None:
            template = self._lookup(self.fallback_locale, message_id)
        if template is None:
            logger.warning("Missing message %s.%s for locale %s", self.namespace, message_id, self.locale)
            return message_id
        if params:
            return template.format(**params)
        return template

    def __repr__(self) -> str:
        return f"Translator(locale={self.locale!r}, namespace={self.namespace!r})"


def parse_accept_language(header: Optional[str]) -> list[str]:
    """Return the language tags of an Accept-Language header, best first.

    Tags with q=0 and the "*" wildcard are dropped. Ties keep header order.
    """
    if not header:
        return []
    weighted: list[tuple[float, int, str]] = []
    for position, item in enumerate(header.split(",")):
        parts = [p.strip() for p in item.split(";")]
        tag = parts[0]
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in parts[1:]:
            if param.startswith("q="):
                try:
                    quality = float(param[2:])
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((-quality, position, tag))
    return [tag for _, _, tag in sorted(weighted)]


def negotiate_locale(preferred: Iterable[str], supported: list[str], default: str) -> str:
    """Pick the best supported locale for a list of preferred tags."""
    candidates = [p for p in preferred if p]
    if not candidates:
        return default
    try:
        locale = Locale.negotiate(candidates, supported, sep="-")
    except (UnknownLocaleError, ValueError):
        locale = None
    if locale is None:
        return default
    return str(locale)


def locale_display_name(code: str) -> str:
    """Human-readable name of a locale in its own language (e.g. "русский")."""
    try:
        return Locale.parse(code).display_name or code
    except (UnknownLocaleError, ValueError):
        return code
