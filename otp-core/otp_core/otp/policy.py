"""
Submission Policy
=================
Which forms need a phone proof, and the check run when one is submitted.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
import structlog

from ..phone import mask_phone_key
from .proof import ProofConsumer

logger = structlog.get_logger(__name__)


DEFAULT_FORM_RULES: Dict[str, bool] = {
    "registration": True,
    "checkout": True,
    "account_details": True,
    "sms_consent": True,
}


@dataclass
class VerificationPolicy:
    """Declarative form type -> requires proof table."""
    rules: Dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_FORM_RULES))
    default: bool = True  # Unknown form types require proof

    def requires_proof(self, form_type: str) -> bool:
        return self.rules.get(form_type, self.default)


class SubmissionGuard:
    """Decides whether a form submission carries acceptable phone proof."""

    def __init__(self, consumer: ProofConsumer, policy: Optional[VerificationPolicy] = None):
        self.consumer = consumer
        self.policy = policy or VerificationPolicy()

    async def check(
        self,
        form_type: str,
        phone: str,
        token: Optional[str],
        known_verified_phone: Optional[str] = None,
    ) -> bool:
        """
        Args:
            form_type: Key into the policy table
            phone: Phone number submitted with the form
            token: Proof token submitted with the form
            known_verified_phone: Phone already verified for the current user

        Returns:
            True if the submission may be treated as phone-verified
        """
        if not self.policy.requires_proof(form_type):
            return True

        phone_key = self.consumer.normalize(phone)
        if phone_key and known_verified_phone:
            if phone_key == self.consumer.normalize(known_verified_phone):
                return True

        verified = await self.consumer.is_verified(phone, token)
        if not verified:
            logger.info(
                "Phone verification required",
                form_type=form_type,
                phone=mask_phone_key(phone_key),
            )
        return verified
