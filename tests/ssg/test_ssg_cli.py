"""Tests for the SSG command line."""

from src.ssg.main import main


class TestSsgCli:
    def test_builds_site(self, tmp_path, index_writer, capsys):
        generated = tmp_path / "generated"
        index_writer(generated / "pt" / "posts.json", [{"titulo": "Olá", "slug": "ola"}])
        dist = tmp_path / "dist"

        code = main(
            [
                "--dist", str(dist),
                "--generated-dir", str(generated),
                "--origin", "https://seommerce.test",
            ]
        )

        assert code == 0
        assert (dist / "pt" / "post" / "ola" / "index.html").exists()
        assert "<loc>https://seommerce.test/pt/post/ola</loc>" in (dist / "sitemap.xml").read_text(encoding="utf-8")
        assert "Rendered 34 routes" in capsys.readouterr().out
