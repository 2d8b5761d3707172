"""Tests for standalone post page rendering."""

from src.publisher.renderer import (
    PostPageRenderer,
    format_iso_date,
    render_post_page,
    resolve_keywords,
    resolve_page_meta,
)

ORIGIN = "https://seommerce.test"


class TestResolvePageMeta:
    def test_fields(self, publish_payload):
        meta = resolve_page_meta(publish_payload)
        assert meta.title == "Guia de SEO local para pequenas empresas"
        assert meta.description == "Passo a passo para aparecer no mapa."
        assert meta.image == "/media/pt/guia/capa.jpg"
        assert meta.image_alt == meta.title
        assert meta.published_at == "2024-03-01T10:00:00Z"
        assert meta.updated_at is None
        assert meta.content_raw == "Primeiro passo.\n\nSegundo passo.\n\nConclusão."
        assert meta.keywords == "seo, local"

    def test_fallbacks(self):
        meta = resolve_page_meta({"criado_em": "2024-01-01", "keywords": "a, b"})
        assert meta.title == "Post"
        assert meta.description == ""
        assert meta.published_at == "2024-01-01"
        assert meta.keywords == "a, b"

    def test_keywords_list_skips_blanks(self):
        assert resolve_keywords({"palavras_chave": ["seo", " ", None, "ia"]}) == "seo, ia"
        assert resolve_keywords({"palavras_chave": [], "keywords": "x"}) == "x"


class TestFormatIsoDate:
    def test_milliseconds_utc(self):
        assert format_iso_date("2024-03-01T07:00:00-03:00") == "2024-03-01T10:00:00.000Z"

    def test_invalid(self):
        assert format_iso_date("ontem") is None
        assert format_iso_date(None) is None

    def test_out_of_range(self):
        assert format_iso_date("0001-01-01T00:00:00+01:00") is None


class TestRenderPostPage:
    def test_page(self, publish_payload):
        rendered = render_post_page(publish_payload, ORIGIN + "/")

        assert rendered.lang == "pt"
        assert rendered.slug == "guia-de-seo-local"
        assert rendered.canonical_url == f"{ORIGIN}/pt/post/guia-de-seo-local"
        html = rendered.html
        assert '<html lang="pt">' in html
        assert "<title>Guia de SEO local para pequenas empresas</title>" in html
        assert f'<link rel="canonical" href="{ORIGIN}/pt/post/guia-de-seo-local" />' in html
        assert '<meta name="keywords" content="seo, local" />' in html
        assert '<meta property="og:image" content="/media/pt/guia/capa.jpg" />' in html
        assert '<meta property="article:published_time" content="2024-03-01T10:00:00.000Z" />' in html
        assert '<meta property="article:modified_time" content="2024-03-01T10:00:00.000Z" />' in html
        assert "<p>Primeiro passo.</p>" in html

    def test_escapes_text_but_not_body(self):
        renderer = PostPageRenderer(origin=ORIGIN)
        rendered = renderer.render(
            {"slug": "x", "title": 'Tom & "Jerry"', "contentHtml": "<h2>Seção</h2>"}
        )
        assert "<title>Tom &amp; &#34;Jerry&#34;</title>" in rendered.html
        assert "<h2>Seção</h2>" in rendered.html
        assert "og:image" not in rendered.html
        assert "article:published_time" not in rendered.html
