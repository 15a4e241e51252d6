# users/apps.py

"""
USERS APP CONFIG

Accounts live in the remote store (auth service + `users` profile table).
This app adapts them to DRF: token authentication, roles, auth endpoints.
"""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
    verbose_name = "Users"
