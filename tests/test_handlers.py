"""Tests for the models.validate / models.list RPC handlers."""

from unittest.mock import AsyncMock

import pytest

from modelgate.app.handlers import (
    ErrorCodes,
    GatewayContext,
    dispatch,
    handle_models_list,
    handle_models_validate,
    store_catalog_loader,
)
from modelgate.providers import (
    CatalogUnavailableError,
    ModelCatalogEntry,
    OpenAIChatClient,
    ProviderValidator,
)

from .helpers import mock_transport, write_config


def _context(validator=None, catalog=None):
    return GatewayContext(
        load_model_catalog=catalog or AsyncMock(return_value=[]),
        validator=validator or AsyncMock(),
    )


class TestModelsValidate:
    """Tests for handle_models_validate."""

    @pytest.mark.asyncio
    async def test_schema_violation_skips_validation(self):
        validator = AsyncMock()

        response = await handle_models_validate(
            {"baseUrl": "https://x.test"},
            _context(validator=validator),
        )

        assert response.ok is False
        assert response.error.code == ErrorCodes.INVALID_REQUEST
        assert response.error.message.startswith(
            "invalid models.validate params:",
        )
        assert "modelId" in response.error.message
        validator.validate.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self):
        response = await handle_models_validate(
            {"baseUrl": "u", "modelId": "m", "extra": 1},
            _context(),
        )

        assert response.error.code == ErrorCodes.INVALID_REQUEST
        assert "extra" in response.error.message

    @pytest.mark.asyncio
    async def test_empty_string_rejected(self):
        response = await handle_models_validate(
            {"baseUrl": "", "modelId": "m"},
            _context(),
        )

        assert response.error.code == ErrorCodes.INVALID_REQUEST
        assert "baseUrl" in response.error.message

    @pytest.mark.asyncio
    async def test_ok(self, ok_validator):
        response = await handle_models_validate(
            {"baseUrl": "https://x.test", "modelId": "m", "apiKey": "k"},
            _context(validator=ok_validator),
        )

        assert response.ok is True
        assert response.payload == {"ok": True}
        assert response.error is None
        assert ok_validator.calls == [("https://x.test", "m", "k")]

    @pytest.mark.asyncio
    async def test_failed_outcome_maps_to_invalid_request(
        self,
        failing_validator,
    ):
        response = await handle_models_validate(
            {"baseUrl": "https://x.test", "modelId": "m"},
            _context(validator=failing_validator),
        )

        assert response.ok is False
        assert response.error.code == ErrorCodes.INVALID_REQUEST
        assert response.error.message == "Invalid API key or unauthorized"

    @pytest.mark.asyncio
    async def test_end_to_end_unauthorized(self):
        validator = ProviderValidator(
            client=OpenAIChatClient(transport=mock_transport(401)),
            env={},
        )

        response = await handle_models_validate(
            {"baseUrl": "https://api.example.com/", "modelId": "gpt-x"},
            _context(validator=validator),
        )

        assert response.error.message == "Invalid API key or unauthorized"


class TestModelsList:
    """Tests for handle_models_list."""

    @pytest.mark.asyncio
    async def test_returns_catalog(self):
        catalog = AsyncMock(
            return_value=[
                ModelCatalogEntry(
                    id="m",
                    name="M",
                    provider="p",
                    context_window=8192,
                ),
            ],
        )

        response = await handle_models_list({}, _context(catalog=catalog))

        assert response.ok is True
        assert response.payload == {
            "models": [
                {"id": "m", "name": "M", "provider": "p", "contextWindow": 8192},
            ],
        }

    @pytest.mark.asyncio
    async def test_catalog_failure_is_unavailable(self):
        catalog = AsyncMock(
            side_effect=CatalogUnavailableError("catalog offline"),
        )

        response = await handle_models_list(None, _context(catalog=catalog))

        assert response.ok is False
        assert response.error.code == ErrorCodes.UNAVAILABLE
        assert response.error.message == "catalog offline"

    @pytest.mark.asyncio
    async def test_params_must_be_empty(self):
        catalog = AsyncMock()

        response = await handle_models_list(
            {"provider": "p"},
            _context(catalog=catalog),
        )

        assert response.error.code == ErrorCodes.INVALID_REQUEST
        catalog.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_catalog_loader(self, store):
        write_config(
            store,
            {
                "models": {
                    "providers": {
                        "p": {
                            "baseUrl": "u",
                            "models": [
                                {"id": "b", "name": "B", "reasoning": True},
                                {"id": "a"},
                            ],
                        },
                    },
                },
            },
        )

        entries = await store_catalog_loader(store)()

        assert [(e.provider, e.id, e.name) for e in entries] == [
            ("p", "a", "a"),
            ("p", "b", "B"),
        ]
        assert entries[1].reasoning is True

    @pytest.mark.asyncio
    async def test_unreadable_config_is_unavailable(self, store):
        store.path.write_text('{"models": {},}', encoding="utf-8")
        context = _context(catalog=store_catalog_loader(store))

        response = await handle_models_list({}, context)

        assert response.ok is False
        assert response.error.code == ErrorCodes.UNAVAILABLE
        assert "unreadable" in response.error.message


class TestDispatch:
    """Tests for dispatch."""

    @pytest.mark.asyncio
    async def test_unknown_method(self):
        response = await dispatch("models.nope", {}, _context())

        assert response.error.code == ErrorCodes.NOT_FOUND

    @pytest.mark.asyncio
    async def test_routes_to_handler(self, ok_validator):
        response = await dispatch(
            "models.validate",
            {"baseUrl": "https://x.test", "modelId": "m"},
            _context(validator=ok_validator),
        )

        assert response.ok is True

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self):
        validator = AsyncMock()
        validator.validate.side_effect = RuntimeError("bug")

        response = await dispatch(
            "models.validate",
            {"baseUrl": "https://x.test", "modelId": "m"},
            _context(validator=validator),
        )

        assert response.error.code == ErrorCodes.INTERNAL
