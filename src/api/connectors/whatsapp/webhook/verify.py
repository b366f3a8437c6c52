"""Handshake GET de assinatura do webhook (hub.mode/hub.verify_token)."""

from __future__ import annotations

import hmac

SUBSCRIBE_MODE = "subscribe"


class WebhookChallengeError(ValueError):
    """Handshake recusado (token ausente no servidor ou divergente)."""


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str:
    """Confere o handshake e devolve o hub.challenge a ecoar.

    Raises:
        WebhookChallengeError: missing_verify_token se o servidor não tem
            token configurado; verification_failed se modo ou token não batem.
    """
    if not expected_token:
        raise WebhookChallengeError("missing_verify_token")

    token_ok = hmac.compare_digest(
        (hub_verify_token or "").encode("utf-8"), expected_token.encode("utf-8")
    )
    if hub_mode != SUBSCRIBE_MODE or not token_ok:
        raise WebhookChallengeError("verification_failed")

    return hub_challenge or ""
