"""
cf-cache-utils — Leaked Credential Check

Cloudflare's leaked-credential detection adds an ``Exposed-Credential-Check``
request header when a login uses a password found in a known breach. On
such a login the user is logged out and sent to the lost-password page.
"""

from collections.abc import Mapping

EXPOSED_CREDENTIAL_HEADER = "Exposed-Credential-Check"
LEAKED_REASON = "leaked_credentials"

_NOTICE = (
    '<p class="message" style="border-left-color:red;">According to '
    '<a href="https://haveibeenpwned.com/">have i been pwned</a> &amp; '
    '<a href="https://developers.cloudflare.com/waf/detections/leaked-credentials/">Cloudflare</a> '
    "your login credentials have been exposed in a data breach. "
    "Please reset your password to secure your account.</p>"
)


def check_leaked_credentials(request_headers: Mapping[str, str], lost_password_url: str) -> str | None:
    """
    Decide whether a fresh login must be forced through a password reset.

    Returns:
        The redirect URL when the header is present, else None
    """
    wanted = EXPOSED_CREDENTIAL_HEADER.lower()
    if not any(name.lower() == wanted for name in request_headers):
        return None
    separator = "&" if "?" in lost_password_url else "?"
    return f"{lost_password_url}{separator}reason={LEAKED_REASON}"


def password_reset_notice(message: str, reason: str | None) -> str:
    """Prepend the breach notice to a login-screen message when the reason matches."""
    if reason != LEAKED_REASON:
        return message
    return _NOTICE + message
