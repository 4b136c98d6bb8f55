"""Authentication router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from sims_api.dependencies import get_auth_service
from sims_api.models.dto.auth import LoginRequest, TokenResponse
from sims_api.security.rate_limit import client_ip, enforce_login_limit
from sims_api.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=TokenResponse, dependencies=[Depends(enforce_login_limit)])
async def login(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    body: LoginRequest | None = None,
) -> TokenResponse:
    """Exchange email and password for a one-hour session token."""
    # A missing body is just another failed login
    body = body or LoginRequest()
    return await auth_service.authenticate(
        email=body.email,
        password=body.password,
        ip_address=client_ip(request),
    )
