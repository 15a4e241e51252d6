# remote/apps.py

"""
REMOTE APP CONFIG

Hosted backend-as-a-service access:
- Tables (users, products, carts, orders) over the REST dialect
- Auth (sign up / sign in / sessions)
- Object storage (product images)
"""

from django.apps import AppConfig


class RemoteConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "remote"
    verbose_name = "Remote Store"
