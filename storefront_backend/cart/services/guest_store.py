# cart/services/guest_store.py

"""
GUEST CART STORE (SESSION)

Anonymous carts live in the Django session under a fixed key
(settings.GUEST_CART_SESSION_KEY). With the signed-cookie session engine
the data stays on the client, like browser local storage.

Stored shape: JSON list of {product_id, quantity, title, price, image_url}.
The signed cookie is capped at 4 KB by browsers, so lines carry no more.
Unreadable data is treated as an empty cart.
"""

from __future__ import annotations

import logging

from django.conf import settings

from cart.models import CartItem

logger = logging.getLogger(__name__)


class SessionGuestCartStore:
    def __init__(self, session, *, key: str | None = None):
        self.session = session
        self.key = key or getattr(settings, "GUEST_CART_SESSION_KEY", "guest_cart")

    def load(self) -> list[CartItem]:
        raw = self.session.get(self.key) or []
        items = []
        for entry in raw:
            try:
                items.append(CartItem.from_snapshot(entry))
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropping unreadable guest cart entry")
        return items

    def save(self, items: list[CartItem]) -> None:
        self.session[self.key] = [item.to_snapshot() for item in items]
        self.session.modified = True

    def clear(self) -> None:
        if self.key in self.session:
            del self.session[self.key]
            self.session.modified = True
