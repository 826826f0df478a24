"""Portfolio page settings and the shareable public portfolio view."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, TypedDict

from sqlalchemy.orm import Session

from cloudhub.constants import AccountStatus, CollectionKind
from cloudhub.data.db import get_session
from cloudhub.data.models import Portfolio, User
from cloudhub.exceptions import NotFoundError
from cloudhub.services.collections import get_collection
from cloudhub.services.users import find_user, require_user

logger = logging.getLogger(__name__)

__all__ = [
    "PortfolioData",
    "get_portfolio",
    "save_portfolio",
    "get_public_portfolio",
]

DEFAULT_THEME_COLOR = "#000000"


class PortfolioData(TypedDict, total=False):
    """TypedDict for portfolio data."""

    headline: str
    bio: str
    skills: list[str]
    social_links: dict[str, str]
    theme_color: str
    is_public: bool


def _load_json(raw: str | None, fallback: Any) -> Any:
    try:
        decoded = json.loads(raw) if raw else fallback
    except (TypeError, ValueError):
        return fallback
    return decoded if isinstance(decoded, type(fallback)) else fallback


def _portfolio_to_dict(portfolio: Portfolio) -> dict:
    return {
        "id": portfolio.id,
        "user_id": portfolio.user_id,
        "headline": portfolio.headline,
        "bio": portfolio.bio,
        "skills": _load_json(portfolio.skills, []),
        "social_links": _load_json(portfolio.social_links, {}),
        "theme_color": portfolio.theme_color,
        "is_public": portfolio.is_public,
        "updated_at": portfolio.updated_at,
    }


def _get_portfolio_row(session: Session, user: User) -> Portfolio | None:
    return session.query(Portfolio).filter(Portfolio.user_id == user.id).first()


def get_portfolio(email: str) -> dict | None:
    """Return a user's portfolio, or None if they never saved one.

    Raises:
        NotFoundError: If no account exists for the email.
    """
    with get_session() as session:
        user = require_user(session, email)
        portfolio = _get_portfolio_row(session, user)
        return _portfolio_to_dict(portfolio) if portfolio else None


def save_portfolio(email: str, data: Mapping[str, Any]) -> dict:
    """Create or replace a user's portfolio.

    Every field is overwritten; fields missing from ``data`` fall back to
    their defaults (empty text, no skills or links, black theme, public).

    Raises:
        NotFoundError: If no account exists for the email.
    """
    skills = [str(skill) for skill in data.get("skills") or []]
    social_links = {str(k): str(v) for k, v in (data.get("social_links") or {}).items()}
    is_public = data.get("is_public")

    with get_session() as session:
        user = require_user(session, email)
        portfolio = _get_portfolio_row(session, user)
        if portfolio is None:
            portfolio = Portfolio(user_id=user.id)
            session.add(portfolio)

        portfolio.headline = data.get("headline") or ""
        portfolio.bio = data.get("bio") or ""
        portfolio.skills = json.dumps(skills)
        portfolio.social_links = json.dumps(social_links)
        portfolio.theme_color = data.get("theme_color") or DEFAULT_THEME_COLOR
        portfolio.is_public = True if is_public is None else bool(is_public)

        session.flush()
        logger.info("Saved portfolio for %s", user.email)
        return _portfolio_to_dict(portfolio)


def get_public_portfolio(email: str) -> dict:
    """Return the shareable portfolio page for a user.

    The page is only available for approved accounts whose portfolio is
    public. Any other case is reported as not found so private pages do
    not reveal that the account exists.

    Raises:
        NotFoundError: If the page is unavailable.
    """
    with get_session() as session:
        user = find_user(session, email)
        if user is None or user.account_status != AccountStatus.APPROVED:
            raise NotFoundError("Portfolio not found")
        portfolio = _get_portfolio_row(session, user)
        if portfolio is None or not portfolio.is_public:
            raise NotFoundError("Portfolio not found")

        owner = {
            "full_name": user.full_name,
            "email": user.email,
            "role": user.role,
            "department": user.department,
            "year_semester": user.year_semester,
        }
        portfolio_data = _portfolio_to_dict(portfolio)

    return {
        "owner": owner,
        "portfolio": portfolio_data,
        "projects": get_collection(CollectionKind.PROJECTS, email),
        "certificates": get_collection(CollectionKind.CERTIFICATES, email),
    }
