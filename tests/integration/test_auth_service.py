"""
Integration tests for GoTrueAuthService against a mocked auth API.
"""

import httpx
import pytest

from notas_ui.services.auth_service_impl import GoTrueAuthService
from notas_ui.services.errors import AuthError

pytestmark = pytest.mark.integration

USER = {
    "id": "u1",
    "email": "ana@empresa.com.br",
    "user_metadata": {"display_name": "Ana", "role": "admin"},
}
SESSION = {"access_token": "at", "refresh_token": "rt", "user": USER}


@pytest.fixture
def auth_for(settings, recorder):
    def _build(handler):
        rec = recorder(handler)
        return GoTrueAuthService(settings, transport=rec.transport), rec

    return _build


class TestSessions:
    @pytest.mark.asyncio
    async def test_sign_in(self, auth_for, recorder):
        auth, rec = auth_for(lambda request: httpx.Response(200, json=SESSION))
        session = await auth.sign_in("ana@empresa.com.br", "segredo")
        assert session.access_token == "at"
        assert session.user.is_admin
        request = rec.requests[0]
        assert request.url.path == "/auth/v1/token"
        assert request.url.params["grant_type"] == "password"
        assert request.headers["apikey"] == "anon-key"
        assert recorder.body(request) == {"email": "ana@empresa.com.br", "password": "segredo"}

    @pytest.mark.asyncio
    async def test_bad_credentials(self, auth_for):
        auth, _ = auth_for(lambda request: httpx.Response(400, json={"error": "invalid_grant"}))
        with pytest.raises(AuthError) as excinfo:
            await auth.sign_in("ana@empresa.com.br", "errada")
        assert excinfo.value.message == "Email ou senha inválidos"

    @pytest.mark.asyncio
    async def test_refresh(self, auth_for, recorder):
        auth, rec = auth_for(lambda request: httpx.Response(200, json=SESSION))
        session = await auth.refresh_session("rt-old")
        assert session.refresh_token == "rt"
        assert rec.requests[0].url.params["grant_type"] == "refresh_token"
        assert recorder.body(rec.requests[0]) == {"refresh_token": "rt-old"}

    @pytest.mark.asyncio
    async def test_refresh_without_user_fails(self, auth_for):
        auth, _ = auth_for(lambda request: httpx.Response(200, json={"access_token": "at"}))
        with pytest.raises(AuthError):
            await auth.refresh_session("rt")


class TestUser:
    @pytest.mark.asyncio
    async def test_get_user_with_bearer(self, auth_for):
        auth, rec = auth_for(lambda request: httpx.Response(200, json=USER))
        user = await auth.get_user("at")
        assert user.email == "ana@empresa.com.br"
        assert rec.requests[0].headers["Authorization"] == "Bearer at"

    @pytest.mark.asyncio
    async def test_expired_token_is_no_user(self, auth_for):
        auth, _ = auth_for(lambda request: httpx.Response(401))
        assert await auth.get_user("old") is None

    @pytest.mark.asyncio
    async def test_server_error_propagates(self, auth_for):
        auth, _ = auth_for(lambda request: httpx.Response(500))
        with pytest.raises(AuthError):
            await auth.get_user("at")


class TestPasswords:
    @pytest.mark.asyncio
    async def test_recover(self, auth_for, recorder):
        auth, rec = auth_for(lambda request: httpx.Response(200, json={}))
        await auth.send_reset_password_email("ana@empresa.com.br", "https://app.test/reset-password")
        request = rec.requests[0]
        assert request.url.path == "/auth/v1/recover"
        assert request.url.params["redirect_to"] == "https://app.test/reset-password"
        assert recorder.body(request) == {"email": "ana@empresa.com.br"}

    @pytest.mark.asyncio
    async def test_update_password(self, auth_for, recorder):
        auth, rec = auth_for(lambda request: httpx.Response(200, json=USER))
        await auth.update_password("at", "nova123")
        request = rec.requests[0]
        assert (request.method, request.url.path) == ("PUT", "/auth/v1/user")
        assert request.headers["Authorization"] == "Bearer at"
        assert recorder.body(request) == {"password": "nova123"}

    @pytest.mark.asyncio
    async def test_update_password_failure_message(self, auth_for):
        auth, _ = auth_for(lambda request: httpx.Response(422))
        with pytest.raises(AuthError) as excinfo:
            await auth.update_password("at", "nova123")
        assert excinfo.value.message == (
            "Ocorreu um erro ao definir sua senha. Tente novamente."
        )
