"""Portfolio routes: owner fetch/upsert and the shareable public page."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from cloudhub.api.dependencies import require_owner
from cloudhub.api.schemas.portfolio import (
    PortfolioRequest,
    PortfolioResponse,
    PublicPortfolioResponse,
    SavePortfolioResponse,
)
from cloudhub.services.portfolio import get_portfolio, get_public_portfolio, save_portfolio

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/{email}/public", response_model=PublicPortfolioResponse)
def get_public_portfolio_page(
    email: Annotated[str, Path(description="Email of the portfolio owner")],
) -> PublicPortfolioResponse:
    """Return the shareable portfolio page.

    No caller header is needed. Private portfolios and unapproved owners
    are reported as 404.
    """
    return PublicPortfolioResponse.model_validate(get_public_portfolio(email))


@router.get("/{email}", response_model=PortfolioResponse)
def get_portfolio_endpoint(email: Annotated[str, Depends(require_owner)]) -> PortfolioResponse:
    """Get the caller's portfolio settings.

    Raises:
        HTTPException: If the portfolio was never saved (404).
    """
    portfolio = get_portfolio(email)
    if portfolio is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Portfolio not found",
        )
    return PortfolioResponse.model_validate(portfolio)


@router.post("/{email}", response_model=SavePortfolioResponse)
def save_portfolio_endpoint(
    request: PortfolioRequest,
    email: Annotated[str, Depends(require_owner)],
) -> SavePortfolioResponse:
    """Create or replace the caller's portfolio. Omitted fields reset to defaults."""
    saved = save_portfolio(email, request.model_dump())
    return SavePortfolioResponse(portfolio=PortfolioResponse.model_validate(saved))
