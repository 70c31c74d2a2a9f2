"""
SMS Gateways
============
Delivery abstraction and provider adapters.
"""

from .base import BaseSmsGateway, SendFailureReason, SendResult
from .msg_ge import (
    MsgGeGateway,
    ProviderAccepted,
    ProviderRejected,
    ProviderUnrecognized,
    ProviderReply,
    parse_provider_reply,
    reply_to_result,
)

__all__ = [
    "BaseSmsGateway",
    "SendFailureReason",
    "SendResult",
    "MsgGeGateway",
    "ProviderAccepted",
    "ProviderRejected",
    "ProviderUnrecognized",
    "ProviderReply",
    "parse_provider_reply",
    "reply_to_result",
]
