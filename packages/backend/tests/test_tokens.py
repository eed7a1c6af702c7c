"""Token service tests — signing, claims, expiry."""

import dataclasses
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from todogate.auth.jwt import TokenConfig, TokenError, TokenService

CONFIG = TokenConfig(
    secret="test-secret-that-is-long-enough-for-hs256",
    issuer="todogate-test",
    audience="todogate-test-clients",
    expire_minutes=60,
)
USER = SimpleNamespace(id=42, name="alice")


def _at(moment: datetime) -> TokenService:
    return TokenService(CONFIG, clock=lambda: moment)


def test_issue_then_validate():
    svc = TokenService(CONFIG)
    claims = svc.validate(svc.issue(USER))
    assert claims.user_id == 42
    assert claims.name == "alice"
    assert claims.issuer == "todogate-test"
    assert claims.audience == "todogate-test-clients"


def test_expiry_uses_configured_lifetime():
    now = datetime.now(timezone.utc).replace(microsecond=0)
    claims = TokenService(CONFIG).validate(_at(now).issue(USER))
    assert claims.expires_at == now + timedelta(minutes=60)


def test_lifetime_comes_only_from_config():
    """A short-lived config can't be stretched by the caller."""
    now = datetime.now(timezone.utc).replace(microsecond=0)
    short = TokenService(dataclasses.replace(CONFIG, expire_minutes=1), clock=lambda: now)
    claims = TokenService(CONFIG).validate(short.issue(USER))
    assert claims.expires_at == now + timedelta(minutes=1)
    with pytest.raises(TypeError):
        short.issue(USER, 600)


@pytest.mark.parametrize("segment_char", [0, 5, 10])
def test_tampered_signature_rejected(segment_char):
    svc = TokenService(CONFIG)
    header, payload, sig = svc.issue(USER).split(".")
    flipped = "A" if sig[segment_char] != "A" else "B"
    sig = sig[:segment_char] + flipped + sig[segment_char + 1:]

    with pytest.raises(TokenError):
        svc.validate(".".join([header, payload, sig]))


def test_tampered_payload_rejected():
    svc = TokenService(CONFIG)
    other = svc.issue(SimpleNamespace(id=1, name="mallory"))
    header, _, sig = svc.issue(USER).split(".")
    forged = ".".join([header, other.split(".")[1], sig])

    with pytest.raises(TokenError):
        svc.validate(forged)


def test_valid_until_window_ends():
    now = datetime.now(timezone.utc)
    token = _at(now - timedelta(minutes=59)).issue(USER)
    assert TokenService(CONFIG).validate(token).user_id == 42


def test_rejected_after_window_ends():
    now = datetime.now(timezone.utc)
    token = _at(now - timedelta(minutes=60, seconds=5)).issue(USER)
    with pytest.raises(TokenError):
        TokenService(CONFIG).validate(token)


def test_wrong_key_rejected():
    token = TokenService(
        dataclasses.replace(CONFIG, secret="another-secret-that-is-also-long-enough")
    ).issue(USER)
    with pytest.raises(TokenError):
        TokenService(CONFIG).validate(token)


def test_wrong_issuer_rejected():
    token = TokenService(dataclasses.replace(CONFIG, issuer="someone-else")).issue(USER)
    with pytest.raises(TokenError):
        TokenService(CONFIG).validate(token)


def test_wrong_audience_rejected():
    token = TokenService(dataclasses.replace(CONFIG, audience="other-app")).issue(USER)
    with pytest.raises(TokenError):
        TokenService(CONFIG).validate(token)


def test_failures_share_one_message():
    """No hint about which check failed."""
    svc = TokenService(CONFIG)
    expired = _at(datetime.now(timezone.utc) - timedelta(days=1)).issue(USER)
    wrong_aud = TokenService(dataclasses.replace(CONFIG, audience="x")).issue(USER)

    messages = set()
    for bad in (expired, wrong_aud, "not-a-jwt", ""):
        with pytest.raises(TokenError) as exc:
            svc.validate(bad)
        messages.add(str(exc.value))
    assert messages == {"Invalid token"}


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        CONFIG.secret = "rotated"
