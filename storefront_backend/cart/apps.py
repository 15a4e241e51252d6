# cart/apps.py

"""
CART APP CONFIG

Shopper cart:
- account carts persisted in the remote `carts` table
- guest carts held in the session (client-side signed cookie)
- merge of the guest cart into the account cart on login
"""

from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cart"
    verbose_name = "Cart"
