import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.tokens import AccessToken

from sportmate.realtime.auth import JWTAuthMiddleware
from sportmate.realtime.auth import token_from_scope


class ScopeRecorder:
    def __init__(self):
        self.scope = None

    async def __call__(self, scope, receive, send):
        self.scope = scope


async def run_middleware(scope):
    inner = ScopeRecorder()
    await JWTAuthMiddleware(inner)(scope, None, None)
    return inner.scope["user"]


@pytest.fixture
def user(transactional_db):
    return get_user_model().objects.create_user(
        username="ws001",
        email="ws001@example.com",
        password="testpass123",  # noqa: S106
    )


def test_extract_token_sources():
    assert token_from_scope({"query_string": b"token=abc&x=1"}) == "abc"
    assert (
        token_from_scope({"headers": [(b"authorization", b"Bearer def")]}) == "def"
    )
    assert token_from_scope({"headers": [(b"authorization", b"Basic zzz")]}) is None
    assert token_from_scope({}) is None


@pytest.mark.asyncio
async def test_query_token_authenticates(user):
    token = AccessToken.for_user(user)

    resolved = await run_middleware(
        {"type": "websocket", "query_string": f"token={token}".encode()}
    )

    assert resolved.pk == user.pk


@pytest.mark.asyncio
async def test_header_token_authenticates(user):
    token = AccessToken.for_user(user)

    resolved = await run_middleware(
        {
            "type": "websocket",
            "query_string": b"",
            "headers": [(b"authorization", f"Bearer {token}".encode())],
        }
    )

    assert resolved.pk == user.pk


@pytest.mark.asyncio
async def test_bad_token_leaves_connection_anonymous(user):
    resolved = await run_middleware(
        {"type": "websocket", "query_string": b"token=junk"}
    )
    assert isinstance(resolved, AnonymousUser)


@pytest.mark.asyncio
async def test_missing_token_is_anonymous():
    resolved = await run_middleware({"type": "websocket", "query_string": b""})
    assert isinstance(resolved, AnonymousUser)
