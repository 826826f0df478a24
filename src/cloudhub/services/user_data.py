"""Bulk load of everything a user owns, used right after login."""

from __future__ import annotations

from cloudhub.constants import CollectionKind
from cloudhub.services.collections import get_collection
from cloudhub.services.portfolio import get_portfolio
from cloudhub.services.profile import get_profile
from cloudhub.services.users import get_user


def load_user_data(email: str) -> dict:
    """Return the account, every collection, portfolio and profile of a user.

    ``portfolio`` and ``profile`` are None when the user never saved them.

    Raises:
        NotFoundError: If no account exists for the email.
    """
    data: dict = {"user": get_user(email)}
    for kind in CollectionKind:
        data[kind.value] = get_collection(kind, email)
    data["portfolio"] = get_portfolio(email)
    data["profile"] = get_profile(email)
    return data
