"""
OTP HTTP Router
===============
FastAPI endpoints exposing requestCode and submitCode to the form frontend.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field
import structlog

from ..errors import USER_FRIENDLY_MESSAGE, StoreUnavailableError
from ..otp import OtpEngine
from ..rate_limit import resolve_client_origin

logger = structlog.get_logger(__name__)


class RequestCodeBody(BaseModel):
    phone: str = Field(default="", max_length=64)


class SubmitCodeBody(BaseModel):
    phone: str = Field(default="", max_length=64)
    code: str = Field(default="", max_length=32)


class OtpResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    expires_in_seconds: Optional[int] = Field(default=None, alias="expiresInSeconds")
    proof_token: Optional[str] = Field(default=None, alias="proofToken")
    verified_phone: Optional[str] = Field(default=None, alias="verifiedPhone")
    error: Optional[str] = None
    error_message: Optional[str] = Field(default=None, alias="errorMessage")


def _client_origin(request: Request) -> str:
    remote_addr = request.client.host if request.client else None
    return resolve_client_origin(remote_addr, request.headers)


def _store_unavailable(error: StoreUnavailableError) -> HTTPException:
    logger.error("[STORE_UNAVAILABLE] OTP store unreachable", detail=error.details)
    return HTTPException(
        status_code=503,
        detail={
            "error": "Service temporarily unavailable",
            "message": USER_FRIENDLY_MESSAGE,
            "code": "STORE_UNAVAILABLE",
        },
    )


def create_otp_router(engine: OtpEngine, prefix: str = "/otp") -> APIRouter:
    """
    Create the OTP router.

    Args:
        engine: Configured OtpEngine
        prefix: URL prefix for the endpoints

    Returns:
        FastAPI router with POST {prefix}/request and POST {prefix}/verify
    """
    router = APIRouter(prefix=prefix, tags=["OTP"])

    @router.post(
        "/request",
        response_model=OtpResponse,
        response_model_exclude_none=True,
        response_model_by_alias=True,
    )
    async def request_code(body: RequestCodeBody, request: Request):
        """Send a verification code to the given phone."""
        try:
            result = await engine.request_code(body.phone, origin=_client_origin(request))
        except StoreUnavailableError as e:
            raise _store_unavailable(e)
        return result.to_response()

    @router.post(
        "/verify",
        response_model=OtpResponse,
        response_model_exclude_none=True,
        response_model_by_alias=True,
    )
    async def submit_code(body: SubmitCodeBody, request: Request):
        """Check a code and return a proof token."""
        try:
            result = await engine.submit_code(
                body.phone, body.code, origin=_client_origin(request)
            )
        except StoreUnavailableError as e:
            raise _store_unavailable(e)
        return result.to_response()

    return router
