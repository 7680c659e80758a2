"""Services package for the Wishcard application."""

from wishcard.services.auth import login, register, verify_token
from wishcard.services.image import delete_image, save_image, validate_image
from wishcard.services.wishes import create_wish, get_wish, list_user_wishes
from wishcard.services.admin import verify_admin_key, delete_wish, list_users, list_wishes
from wishcard.services.retention import RetentionSweeper, sweep_uploads

__all__ = [
    "login",
    "register",
    "verify_token",
    "delete_image",
    "save_image",
    "validate_image",
    "create_wish",
    "get_wish",
    "list_user_wishes",
    "verify_admin_key",
    "delete_wish",
    "list_users",
    "list_wishes",
    "RetentionSweeper",
    "sweep_uploads",
]
