"""
cf-cache-utils — Clear-Cache Action

The authenticated, interactive purge behind the admin toolbar buttons.
Unlike lifecycle purges, the caller gets a short human-readable answer.

Gates, in order:
1. input validation (ClearCacheInput)
2. a one-time token issued for this action and user
3. the required capability
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from .credentials.store import CredentialStore
from .errors import ErrorCode, ForbiddenError, UnauthorizedError, extract_error_code, make_error_response
from .purge.dispatcher import PurgeDispatcher
from .purge.models import PurgeOutcome, PurgeRequest, PurgeResult
from .security.nonces import NonceStore
from .validation import ClearCacheInput, validate_input

logger = logging.getLogger(__name__)

CLEAR_CACHE_ACTION = "clear_cloudflare_cache"


@dataclass(frozen=True)
class Principal:
    """The user invoking an action."""

    user_id: int
    capabilities: frozenset[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities


def success_response(message: str, **data: Any) -> dict[str, Any]:
    return {"success": True, "data": {"message": message, **data}}


def describe_result(result: PurgeResult, url: str | None) -> dict[str, Any]:
    """Translate a purge result into an action reply."""
    context = {"url": url, "outcome": result.outcome.value}

    if result.outcome == PurgeOutcome.NOT_CONFIGURED:
        return make_error_response(
            ErrorCode.NOT_CONFIGURED,
            "Cloudflare zone settings are not configured.",
            context,
        )
    if result.outcome == PurgeOutcome.TRANSPORT_ERROR:
        return make_error_response(
            ErrorCode.PROVIDER_UNAVAILABLE,
            f"Cloudflare cache purge failed: {result.message}",
            context,
        )
    if not result.ok:
        return make_error_response(
            ErrorCode.PURGE_FAILED,
            f"Cloudflare cache purge failed with response code: {result.status_code}",
            {**context, "status_code": result.status_code},
        )

    if url:
        return success_response(f"Cloudflare cache cleared for {url}.", url=url)
    return success_response("Cloudflare cache cleared successfully.")


class ClearCacheAction:
    """
    Interactive purge of one URL or the whole zone.

    Args:
        dispatcher: Purge dispatcher
        credentials: Credential resolver
        nonces: One-time token store
        required_capability: Capability the principal must hold
    """

    def __init__(
        self,
        dispatcher: PurgeDispatcher,
        credentials: CredentialStore,
        nonces: NonceStore,
        required_capability: str = "manage_options",
    ) -> None:
        self.dispatcher = dispatcher
        self.credentials = credentials
        self.nonces = nonces
        self.required_capability = required_capability

    def issue_token(self, principal: Principal) -> str:
        """Token to embed in the toolbar for this principal."""
        return self.nonces.issue(CLEAR_CACHE_ACTION, principal.user_id)

    def _authorize(self, principal: Principal, nonce: str) -> None:
        if not self.nonces.consume(CLEAR_CACHE_ACTION, principal.user_id, nonce):
            raise UnauthorizedError("Invalid or expired action token.")
        if not principal.can(self.required_capability):
            raise ForbiddenError("You are not allowed to clear the Cloudflare cache.")

    @validate_input(ClearCacheInput)
    def handle(self, principal: Principal, nonce: str, url: str | None = None) -> dict[str, Any]:
        """
        Run the action.

        Args:
            principal: Calling user
            nonce: One-time token from issue_token()
            url: URL to purge, None for the whole zone

        Returns:
            {"success": True, "data": {"message": ...}} or a structured error response
        """
        try:
            self._authorize(principal, nonce)
        except (UnauthorizedError, ForbiddenError) as e:
            logger.warning(
                f"Clear-cache action refused: {e.message}",
                extra={"user_id": principal.user_id, "status_code": e.status_code},
            )
            return make_error_response(extract_error_code(e), e.message)

        request = PurgeRequest.single_url(url) if url else PurgeRequest.everything()
        result = self.dispatcher.purge(request, self.credentials.credentials())
        logger.info(
            "Clear-cache action finished",
            extra={"user_id": principal.user_id, "purge_url": url, "outcome": result.outcome.value},
        )
        return describe_result(result, url)
