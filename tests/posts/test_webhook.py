"""Tests for the CMS webhook client."""

from unittest.mock import MagicMock

import pytest

from src.common.config import WebhookSettings
from src.common.errors import WebhookError
from src.posts.models import BlogPost
from src.posts.webhook import WebhookClient


def _response(status: int, text: str) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.text = text
    return resp


@pytest.fixture
def session() -> MagicMock:
    return MagicMock()


@pytest.fixture
def client(session) -> WebhookClient:
    return WebhookClient(config=WebhookSettings(url="https://hook.test/blog"), session=session)


class TestSend:
    def test_json_body(self, client, session):
        session.post.return_value = _response(200, '{"posts": []}')
        assert client.send({"action": "get_posts"}) == {"posts": []}
        assert session.post.call_args.args[0] == "https://hook.test/blog"

    def test_text_body(self, client, session):
        session.post.return_value = _response(200, "ok")
        assert client.send({"action": "x"}) == "ok"

    def test_error_message_from_json(self, client, session):
        session.post.return_value = _response(500, '{"message": "boom"}')
        with pytest.raises(WebhookError, match="boom") as exc_info:
            client.send({"action": "x"})
        assert exc_info.value.status_code == 500

    def test_error_without_body(self, client, session):
        session.post.return_value = _response(502, "")
        with pytest.raises(WebhookError, match="Request failed"):
            client.send({"action": "x"})


class TestActions:
    def test_get_posts(self, client, session):
        session.post.return_value = _response(200, "[]")
        client.get_posts("en")
        assert session.post.call_args.kwargs["json"] == {"action": "get_posts", "lang": "en"}

    def test_edit_post_drops_slug_map(self, client, session):
        session.post.return_value = _response(200, "{}")
        post = BlogPost(id="1", title="A", category="tech", slugs={"en": "a"}, read_time="5 min")
        client.edit_post("pt", post)

        payload = session.post.call_args.kwargs["json"]
        assert payload["action"] == "edit_post"
        assert payload["lang"] == "pt"
        assert payload["categoria"] == "tech"
        assert payload["readTime"] == "5 min"
        assert "slugs" not in payload

    def test_delete_post(self, client, session):
        session.post.return_value = _response(200, "{}")
        client.delete_post("es", "7", slug="hola")
        assert session.post.call_args.kwargs["json"] == {
            "action": "delete_post",
            "lang": "es",
            "id": "7",
            "slug": "hola",
        }

    def test_fetch_posts_normalizes_and_translates(self, session):
        session.post.return_value = _response(200, '{"data": [{"titulo": "Olá", "id": "1"}]}')
        translator = MagicMock()
        translator.translate_posts.side_effect = lambda posts, lang: posts
        client = WebhookClient(
            config=WebhookSettings(url="https://hook.test/blog"),
            session=session,
            translator=translator,
        )

        posts = client.fetch_posts("en")

        assert [p.title for p in posts] == ["Olá"]
        assert posts[0].lang == "en"
        translator.translate_posts.assert_called_once()
