# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-17
# Description: test_config_and_content.py
# -----------------------------------------------------------------------------
import json

import pytest

from config.Config import Config
from content.PortfolioContent import Education, Experience, Project, StructuredContent

from conftest import ROOT, SAMPLE_CONTENT


def test_config_from_env_strips_and_defaults(monkeypatch):
    for env_name in Config.ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-abc  ")
    monkeypatch.setenv("CHROMA_PERSIST_DIR", "/tmp/chroma")

    cfg = Config.from_env()

    assert cfg.openai_api_key == "sk-abc"
    assert cfg.has_chat_credentials
    assert not cfg.has_chroma_cloud
    assert cfg.has_vector_backend


def test_config_summary_never_contains_secrets():
    cfg = Config(openai_api_key="sk-secret", chroma_api_key="ck-secret", chroma_tenant="t", chroma_database="d")
    summary = json.dumps(cfg.summary())
    assert "secret" not in summary
    assert cfg.summary()["chroma_cloud"] is True


def test_empty_config_has_no_backends():
    cfg = Config()
    assert not cfg.has_chat_credentials
    assert not cfg.has_vector_backend


def test_structured_content_accepts_camel_case(content):
    assert content.about.name == "Sam Taylor"
    assert content.projects[0].short_description == "Semantic search for notes"
    assert content.education[0].degree_level == "BSc"
    assert content.experience[0].impact == {"latencyReductionPct": 30}
    assert content.company_names() == ["Acme Corp", "Initech"]
    assert content.contact_email == "sam@example.com"


def test_projects_key_is_accepted_in_place_of_apps():
    data = dict(SAMPLE_CONTENT)
    data["projects"] = data.pop("apps")
    assert StructuredContent.model_validate(data).projects[0].title == "Finder"


def test_missing_required_field_is_rejected():
    with pytest.raises(ValueError, match="company"):
        Experience.model_validate({"id": "x", "role": "Engineer"})

    with pytest.raises(ValueError):
        StructuredContent.model_validate({"apps": []})


def test_bundled_content_file_loads():
    content = StructuredContent.from_json_file(ROOT / "data" / "content.json")
    assert content.about.name
    assert content.contact_email
    assert content.experience


def test_snake_case_keys_are_accepted():
    project = Project.model_validate({"id": "p", "title": "P", "short_description": "desc", "date_range": "2023"})
    assert project.short_description == "desc"
    assert project.date_range == "2023"


def test_blank_required_field_is_rejected():
    with pytest.raises(ValueError, match="institution"):
        Education.model_validate({"id": "e", "institution": "   ", "program": "CS"})


def test_content_records_are_immutable(content):
    with pytest.raises(ValueError):
        content.about.name = "Someone Else"
