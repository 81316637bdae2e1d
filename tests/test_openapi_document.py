"""Tests for barabara.openapi.document — config validation and the document."""

from typing import Any

import pytest

from barabara.errors import OpenAPIConfigError
from barabara.http.request import Request
from barabara.openapi.document import OPENAPI_VERSION, build_base_document, validate_openapi_config
from barabara.openapi.merge import create_document_handler
from barabara.testing import RecordingResponder


def _config(**overrides: Any) -> dict[str, Any]:
    config: dict[str, Any] = {
        "title": "Shop",
        "version": "2.1.0",
        "description": "Shop API",
        "servers": [{"url": "https://shop.example/api"}],
    }
    config.update(overrides)
    return config


class TestValidation:
    def test_minimal_config(self) -> None:
        document = build_base_document(_config()).to_dict()

        assert document["openapi"] == OPENAPI_VERSION == "3.0.1"
        assert document["info"] == {
            "title": "Shop",
            "version": "2.1.0",
            "description": "Shop API",
        }
        assert document["servers"] == [{"url": "https://shop.example/api"}]
        assert document["tags"] == []
        assert document["paths"] == {}
        assert document["components"] == {
            "schemas": {},
            "responses": {},
            "parameters": {},
            "securitySchemes": {},
        }
        assert document["security"] == {}

    @pytest.mark.parametrize("field", ["title", "version", "description", "servers"])
    def test_missing_required_field(self, field: str) -> None:
        config = _config()
        del config[field]
        with pytest.raises(OpenAPIConfigError) as exc_info:
            build_base_document(config)
        message = str(exc_info.value)
        assert f'"{field}"' in message
        others = {"title", "version", "description", "servers"} - {field}
        assert not any(f'"{other}"' in message for other in others)

    @pytest.mark.parametrize(
        ("field", "value", "expected"),
        [
            ("title", 1, "a string"),
            ("version", None, "a string"),
            ("description", ["x"], "a string"),
            ("termsOfService", 5, "a string"),
            ("contact", "ops@example.com", "an object"),
            ("license", "MIT", "an object"),
            ("servers", {"url": "/"}, "an array"),
            ("tags", "shop", "an array"),
            ("security", ["bearerAuth"], "an object"),
        ],
    )
    def test_wrong_types(self, field: str, value: Any, expected: str) -> None:
        with pytest.raises(OpenAPIConfigError, match=f'"{field}" must be {expected}'):
            build_base_document(_config(**{field: value}))

    @pytest.mark.parametrize("config", [None, "config", ["title"]])
    def test_config_must_be_object(self, config: Any) -> None:
        with pytest.raises(OpenAPIConfigError, match="must be an object"):
            build_base_document(config)

    def test_security_scheme_must_be_object(self) -> None:
        with pytest.raises(OpenAPIConfigError, match="'bearerAuth'"):
            build_base_document(_config(security={"bearerAuth": "bearer"}))

    def test_security_requirements_must_be_array(self) -> None:
        with pytest.raises(OpenAPIConfigError, match="requirements"):
            build_base_document(_config(security={"bearerAuth": {"requirements": "r"}}))

    def test_validate_without_building(self) -> None:
        config = _config(security={"bearerAuth": {"type": "http", "requirements": ["r"]}})
        assert validate_openapi_config(config) is None
        assert config["security"]["bearerAuth"]["requirements"] == ["r"]

        del config["servers"]
        with pytest.raises(OpenAPIConfigError, match='"servers"'):
            validate_openapi_config(config)


class TestBaseDocument:
    def test_optional_info_fields(self) -> None:
        document = build_base_document(
            _config(
                termsOfService="https://shop.example/terms",
                contact={"email": "ops@shop.example"},
                license={"name": "MIT"},
            )
        ).to_dict()

        assert document["info"]["termsOfService"] == "https://shop.example/terms"
        assert document["info"]["contact"] == {"email": "ops@shop.example"}
        assert document["info"]["license"] == {"name": "MIT"}

    def test_absent_optional_fields_are_omitted(self) -> None:
        info = build_base_document(_config()).to_dict()["info"]
        assert "termsOfService" not in info
        assert "contact" not in info
        assert "license" not in info

    def test_tags_copied(self) -> None:
        tags = [{"name": "orders"}]
        assert build_base_document(_config(tags=tags)).to_dict()["tags"] == tags

    def test_security_requirements_relocated(self) -> None:
        scheme = {"type": "http", "scheme": "bearer", "requirements": ["r"]}
        document = build_base_document(
            _config(security={"bearerAuth": scheme, "apiKey": {"type": "apiKey"}})
        ).to_dict()

        assert document["security"] == {"bearerAuth": ["r"], "apiKey": []}
        assert document["components"]["securitySchemes"]["bearerAuth"]["type"] == "http"
        assert document["components"]["securitySchemes"]["bearerAuth"]["scheme"] == "bearer"
        assert document["components"]["securitySchemes"]["apiKey"] == {"type": "apiKey"}

    def test_config_is_not_shared(self) -> None:
        config = _config()
        document = build_base_document(config)
        config["servers"].append({"url": "/other"})
        assert len(document.to_dict()["servers"]) == 1


class TestOpenAPIDocument:
    def test_add_operation(self) -> None:
        document = build_base_document(_config())
        document.add_operation("/users", "get", {"summary": "List"})
        assert document.paths == {"/users": {"get": {"summary": "List"}}}

    def test_merge_components_is_additive(self) -> None:
        document = build_base_document(_config())
        document.merge_components("schemas", {"User": {"type": "object"}})
        document.merge_components("schemas", {"Order": {"type": "object"}})
        assert set(document.components["schemas"]) == {"User", "Order"}

    def test_seal_blocks_mutation(self) -> None:
        document = build_base_document(_config())
        document.seal()

        assert document.sealed is True
        with pytest.raises(RuntimeError, match="after router construction"):
            document.add_operation("/users", "get", {})
        with pytest.raises(RuntimeError):
            document.merge_components("schemas", {"User": {}})

    def test_to_dict_is_a_copy(self) -> None:
        document = build_base_document(_config())
        snapshot = document.to_dict()
        snapshot["paths"]["/hacked"] = {}
        assert document.paths == {}

    def test_views_are_read_only_after_seal(self) -> None:
        document = build_base_document(
            _config(security={"bearerAuth": {"type": "http", "requirements": ["r"]}})
        )
        document.add_operation("/users", "get", {"tags": ["users"]})
        document.seal()

        with pytest.raises(TypeError):
            document.paths["/injected"] = {"get": {}}
        with pytest.raises(TypeError):
            document.paths["/users"]["post"] = {}
        with pytest.raises(TypeError):
            document.components["schemas"]["Injected"] = {}
        with pytest.raises(TypeError):
            document.security["apiKey"] = []
        with pytest.raises(AttributeError):
            document.paths["/users"]["get"]["tags"].append("injected")

        snapshot = document.to_dict()
        assert snapshot["paths"] == {"/users": {"get": {"tags": ["users"]}}}
        assert snapshot["components"]["schemas"] == {}
        assert snapshot["security"] == {"bearerAuth": ["r"]}

    def test_views_are_snapshots(self) -> None:
        document = build_base_document(_config())
        paths = document.paths
        document.add_operation("/users", "get", {})

        assert paths == {}
        assert set(document.paths) == {"/users"}

    def test_security_view(self) -> None:
        document = build_base_document(
            _config(
                security={
                    "bearerAuth": {"type": "http", "requirements": ["r"]},
                    "apiKey": {"type": "apiKey"},
                }
            )
        )
        assert dict(document.security) == {"bearerAuth": ("r",), "apiKey": ()}


class TestDocumentHandler:
    @pytest.mark.asyncio
    async def test_serves_snapshot_as_json(self) -> None:
        document = build_base_document(_config())
        document.add_operation("/users", "get", {"summary": "List"})
        handler = create_document_handler(document)
        document.seal()

        respond = RecordingResponder()
        await handler(Request(), respond, lambda exc: None)

        assert respond.methods == ["json"]
        assert respond.json_body == document.to_dict()

    @pytest.mark.asyncio
    async def test_responder_errors_are_forwarded(self) -> None:
        class BrokenResponder(RecordingResponder):
            def json(self, value: Any) -> None:
                raise OSError("socket closed")

        failures: list[BaseException] = []
        handler = create_document_handler(build_base_document(_config()))
        await handler(Request(), BrokenResponder(), failures.append)

        assert isinstance(failures[0], OSError)
