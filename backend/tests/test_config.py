import pytest
from fastapi_users.jwt import generate_jwt

from scaleadvisor.config.config import resolve_secret_key

OLD_BUILTIN_SECRET = "dev-only-secret-key-change-me-in-production-0123456789"


@pytest.mark.parametrize("app_env", ["production", "staging", ""])
@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_outside_development_fails(secret, app_env):
    with pytest.raises(RuntimeError, match="SECRET_KEY"):
        resolve_secret_key(secret, app_env)


def test_configured_secret_is_used():
    assert resolve_secret_key("from-env", "production") == "from-env"


def test_development_falls_back_to_random_secret():
    first = resolve_secret_key(None, "development")
    second = resolve_secret_key(None, "development")
    assert len(first) >= 32
    assert first != second
    assert OLD_BUILTIN_SECRET not in (first, second)


async def test_token_signed_with_guessable_secret_is_rejected(client, auth_headers):
    me = await client.get("/users/me", headers=auth_headers)
    assert me.status_code == 200

    forged = generate_jwt(
        {"sub": me.json()["id"], "aud": ["fastapi-users:auth"]}, OLD_BUILTIN_SECRET, 3600
    )
    resp = await client.get("/users/me", headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401
