from .router import OtpResponse, RequestCodeBody, SubmitCodeBody, create_otp_router

__all__ = [
    "OtpResponse",
    "RequestCodeBody",
    "SubmitCodeBody",
    "create_otp_router",
]
