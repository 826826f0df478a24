"""Services"""

from cloudhub.services.account_status import (
    can_transition,
    dashboard_for,
    require_approved,
    update_account_status,
)
from cloudhub.services.auth import ensure_admin, login, signup
from cloudhub.services.collections import CollectionKind, get_collection, save_collection
from cloudhub.services.portfolio import get_portfolio, get_public_portfolio, save_portfolio
from cloudhub.services.profile import get_profile, save_profile
from cloudhub.services.user_data import load_user_data

__all__ = [
    "CollectionKind",
    "can_transition",
    "dashboard_for",
    "require_approved",
    "update_account_status",
    "ensure_admin",
    "login",
    "signup",
    "get_collection",
    "save_collection",
    "get_portfolio",
    "get_public_portfolio",
    "save_portfolio",
    "get_profile",
    "save_profile",
    "load_user_data",
]
