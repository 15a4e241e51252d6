from .auth import LoginView, LogoutView, PasswordResetView, RegisterView
from .me import MeView

__all__ = [
    "RegisterView",
    "LoginView",
    "LogoutView",
    "PasswordResetView",
    "MeView",
]
