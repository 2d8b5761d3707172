"""Tests for the publisher command line."""

import json

from src.publisher.main import main

ORIGIN = "https://seommerce.test"


def _run(capsys, root, *args):
    code = main(["--root", str(root), "--origin", ORIGIN, *args])
    return code, json.loads(capsys.readouterr().out)


class TestPublisherCli:
    def test_publish_then_status(self, capsys, generated_dir, tmp_path):
        payload = tmp_path / "post.json"
        payload.write_text(json.dumps({"slug": "a", "title": "A", "lang": "en"}), encoding="utf-8")

        code, output = _run(capsys, generated_dir, "publish", str(payload))
        assert code == 0
        assert output["posts"][0]["links"] == {"en": f"{ORIGIN}/en/post/a"}

        code, output = _run(capsys, generated_dir, "status")
        assert code == 0
        assert output["sitemapEntries"] == [f"{ORIGIN}/en/post/a"]

    def test_delete_not_found(self, capsys, generated_dir, tmp_path):
        request = tmp_path / "delete.json"
        request.write_text('{"slug": "missing"}', encoding="utf-8")
        code, output = _run(capsys, generated_dir, "delete", str(request))
        assert code == 2
        assert output == {"error": "Post not found"}

    def test_delete_with_array_request(self, capsys, generated_dir, tmp_path):
        request = tmp_path / "delete.json"
        request.write_text('[{"slug": "a"}]', encoding="utf-8")
        code, output = _run(capsys, generated_dir, "delete", str(request))
        assert code == 1
        assert output == {"error": "Delete request must be a JSON object"}

    def test_publish_without_slug(self, capsys, generated_dir, tmp_path):
        payload = tmp_path / "post.json"
        payload.write_text('{"title": "A"}', encoding="utf-8")
        code, output = _run(capsys, generated_dir, "publish", str(payload))
        assert code == 1
        assert output == {"error": "Missing slug"}

    def test_rebuild_sitemap_and_delete_all(self, capsys, generated_dir):
        code, output = _run(capsys, generated_dir, "rebuild-sitemap")
        assert (code, output) == (0, {"ok": True})
        assert (generated_dir / "sitemap.xml").exists()

        code, output = _run(capsys, generated_dir, "delete-all")
        assert code == 0
        assert output["logs"][-1] == "sitemap:rebuilt"
