from .user import ROLE_ADMIN, ROLE_USER, ROLES, StoreUser

__all__ = [
    "ROLE_ADMIN",
    "ROLE_USER",
    "ROLES",
    "StoreUser",
]
