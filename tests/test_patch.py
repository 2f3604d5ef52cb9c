"""Tests for the config patch builders."""

import pytest

from modelgate.config.patch import (
    ConfigPatch,
    build_add_or_update,
    build_delete,
    build_set_default,
)
from modelgate.providers.errors import ParameterError


def _add(**overrides):
    args = {
        "provider_id": "local",
        "model_id": "llama3",
        "model_name": "Llama 3",
        "base_url": "http://localhost:11434/v1",
        "api_key": "",
        "set_as_default": False,
    }
    args.update(overrides)
    return build_add_or_update(**args)


class TestBuildAddOrUpdate:
    """Tests for build_add_or_update."""

    def test_document_shape(self):
        document = _add(api_key="sk-1").to_document()

        assert document == {
            "models": {
                "mode": "merge",
                "providers": {
                    "local": {
                        "baseUrl": "http://localhost:11434/v1",
                        "api": "openai-completions",
                        "apiKey": "sk-1",
                        "models": [
                            {
                                "id": "llama3",
                                "name": "Llama 3",
                                "reasoning": False,
                                "input": ["text"],
                                "cost": {
                                    "input": 0,
                                    "output": 0,
                                    "cacheRead": 0,
                                    "cacheWrite": 0,
                                },
                                "contextWindow": 200000,
                                "maxTokens": 8192,
                            },
                        ],
                    },
                },
            },
        }

    def test_identical_inputs_give_equal_patches(self):
        first = _add(api_key="${KEY}", set_as_default=True)
        second = _add(api_key="${KEY}", set_as_default=True)

        assert first == second
        assert first.to_document() == second.to_document()

    @pytest.mark.parametrize("api_key", ["", "   ", None])
    def test_blank_api_key_is_omitted(self, api_key):
        provider = _add(api_key=api_key).to_document()["models"]["providers"]

        assert "apiKey" not in provider["local"]

    def test_api_key_kept_unresolved(self):
        provider = _add(api_key="${OLLAMA_KEY}").to_document()
        config = provider["models"]["providers"]["local"]

        assert config["apiKey"] == "${OLLAMA_KEY}"

    def test_set_as_default_adds_primary(self):
        document = _add(set_as_default=True).to_document()

        assert document["agents"] == {
            "defaults": {"model": {"primary": "local/llama3"}},
        }

    def test_default_untouched_when_not_requested(self):
        assert "agents" not in _add().to_document()

    def test_inputs_are_trimmed(self):
        document = _add(
            provider_id="  local ",
            model_id=" llama3 ",
            base_url=" http://h/v1 ",
            set_as_default=True,
        ).to_document()

        config = document["models"]["providers"]["local"]
        assert config["baseUrl"] == "http://h/v1"
        assert config["models"][0]["id"] == "llama3"
        assert document["agents"]["defaults"]["model"]["primary"] == (
            "local/llama3"
        )

    def test_model_name_defaults_to_id(self):
        document = _add(model_name="  ").to_document()

        model = document["models"]["providers"]["local"]["models"][0]
        assert model["name"] == "llama3"

    @pytest.mark.parametrize(
        "field", ["provider_id", "model_id", "base_url"],
    )
    def test_blank_required_field(self, field):
        with pytest.raises(ParameterError):
            _add(**{field: "  "})


class TestBuildDelete:
    """Tests for build_delete."""

    def test_exact_document(self):
        assert build_delete("local").to_document() == {
            "models": {"mode": "merge", "providers": {"local": None}},
        }

    def test_blank_provider(self):
        with pytest.raises(ParameterError):
            build_delete("")


class TestBuildSetDefault:
    """Tests for build_set_default."""

    def test_touches_only_default_path(self):
        assert build_set_default("local", "llama3").to_document() == {
            "agents": {"defaults": {"model": {"primary": "local/llama3"}}},
        }

    def test_model_id_with_slash(self):
        document = build_set_default("router", "meta/llama-3").to_document()

        assert document["agents"]["defaults"]["model"]["primary"] == (
            "router/meta/llama-3"
        )

    def test_blank_model(self):
        with pytest.raises(ParameterError, match="modelId is required"):
            build_set_default("local", " ")


class TestConfigPatch:
    """Tests for ConfigPatch itself."""

    def test_empty_patch_renders_empty_document(self):
        assert ConfigPatch().to_document() == {}
