"""Shared test fixtures for the Curioso content engine."""

import json
import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def sample_record() -> dict:
    """A CMS record with Portuguese base fields and en/es overrides."""
    return {
        "id": "abc-123",
        "titulo": "Como a IA muda o varejo",
        "title_en": "How AI is changing retail",
        "resumo": "Um panorama da IA no varejo.",
        "conteudo": "Texto **completo** do artigo.",
        "categoria": "IA",
        "imagem": "https://drive.google.com/file/d/FILE123/view?usp=sharing",
        "publicado_em": "2024-05-10T12:00:00Z",
        "autor": "Equipe Curioso",
        "tempo_leitura_minutos": 7,
        "palavras_chave": "ia, varejo; tecnologia",
        "featured": "true",
        "slug": "como-a-ia-muda-o-varejo",
        "slugs": {"en": "how-ai-is-changing-retail"},
        "slug_es": "como-la-ia-cambia-el-comercio",
        "translations": {
            "es": {
                "title": "Cómo la IA cambia el comercio",
                "resumo": "Un panorama de la IA en el comercio.",
            }
        },
    }


@pytest.fixture
def sample_payload(sample_record) -> dict:
    """A webhook response wrapping posts in {data: {posts}}."""
    second = {
        "id": 42,
        "title": "Marketing de conteúdo em 2024",
        "description": "Tendências de conteúdo.",
        "category": "marketing/seo",
        "date": "2024-06-01",
        "slug": "marketing-de-conteudo-2024",
    }
    return {"data": {"posts": [sample_record, second, {"slug": "sem-titulo"}]}}


@pytest.fixture
def publish_payload() -> dict:
    """A publish request as pushed by the CMS."""
    return {
        "id": "post-9",
        "lang": "pt",
        "slug": "Guia de SEO Local",
        "titulo": "Guia de SEO local",
        "meta_title": "Guia de SEO local para pequenas empresas",
        "resumo": "Passo a passo para aparecer no mapa.",
        "conteudo": json.dumps(
            {
                "paragrafo_2": "Segundo passo.",
                "paragrafo_1": "Primeiro passo.",
                "paragrafo_final": "Conclusão.",
            }
        ),
        "cover_image_url": "/media/pt/guia/capa.jpg",
        "publicado_em": "2024-03-01T10:00:00Z",
        "palavras_chave": ["seo", "local"],
        "slugs": {"en": "local-seo-guide"},
        "slug_es": "guia-de-seo-local",
    }


@pytest.fixture
def generated_dir(tmp_path) -> Path:
    """An empty generated posts directory."""
    root = tmp_path / "generated"
    root.mkdir()
    return root


def write_index(path: Path, posts: list) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"posts": posts}, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def index_writer():
    """Write a {"posts": [...]} index file."""
    return write_index
