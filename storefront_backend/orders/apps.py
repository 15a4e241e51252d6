# orders/apps.py

"""
ORDERS APP CONFIG

Checkout, order history and the admin fulfilment workflow.
Orders are stored in the remote `orders` table.
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Orders"
