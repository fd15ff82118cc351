"""요청 로그 미들웨어 테스트 — 마스킹과 제외 경로."""

from httpx import AsyncClient

from foundation.middleware.axiom_logging import is_logged, mask


class TestMask:
    def test_secret_keys_masked(self):
        body = {"email": "jane@fondation.ma", "password": "secret123", "refresh_token": "abc"}
        assert mask(body) == {"email": "jane@fondation.ma", "password": "***", "refresh_token": "***"}

    def test_nested_and_lists(self):
        body = {"items": [{"api_key": "k", "n": i} for i in range(30)]}
        masked = mask(body)
        assert len(masked["items"]) == 20
        assert masked["items"][0] == {"api_key": "***", "n": 0}

    def test_long_text_truncated(self):
        assert mask("x" * 2500).endswith("...(truncated)")


class TestPaths:
    def test_unlogged(self):
        assert not is_logged("/health")
        assert not is_logged("/files/avatars/2026/01/01/a.png")
        assert is_logged("/api/v1/public/news")

    async def test_passthrough_without_axiom(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.json() == {"status": "ok"}
