import logging

from bruno_api.converter.models import ConversionOptions, Server
from bruno_api.converter.openapi import build_contract, build_operation, generate_operation_id
from bruno_api.parser.bru import parse_bru

GET_USER = """meta {
  name: Get User
  type: http
}

get {{baseUrl}}/api/users/:id

docs {
  {"id": 1, "name": "John"}
}
"""

POST_USER = """post {{baseUrl}}/api/users

headers {
  Content-Type: application/json
  X-Request-Id: 42
}

body:json {
  {"name": "Jane"}
}
"""


def _json_schema(media_owner):
    return media_owner.content["application/json"].schema_


class TestGenerateOperationId:
    def test_operation_id(self):
        assert generate_operation_id("GET", "/api/users/{id}", "users") == "get-users-api-users-id"

    def test_root_path(self):
        assert generate_operation_id("POST", "/", "default") == "post-default"

    def test_hyphens_are_collapsed(self):
        assert generate_operation_id("GET", "/a//{b}/", "x") == "get-x-a-b"


class TestBuildOperation:
    def test_summary_and_tags(self):
        operation = build_operation(parse_bru(GET_USER), "users")
        assert operation.summary == "Get User"
        assert operation.tags == ["users"]
        assert operation.operation_id == "get-users-api-users-id"

    def test_summary_fallback(self):
        operation = build_operation(parse_bru("get /api/items?x=1\n"), "items")
        assert operation.summary == "GET /api/items"

    def test_header_parameters(self):
        operation = build_operation(parse_bru(POST_USER), "users")
        assert [p.name for p in operation.parameters] == ["Content-Type", "X-Request-Id"]
        request_id = operation.parameters[1]
        assert request_id.location == "header"
        assert request_id.required is False
        assert request_id.schema_ == {"type": "string"}
        assert request_id.example == "42"

    def test_request_body_schema(self):
        operation = build_operation(parse_bru(POST_USER), "users")
        assert operation.request_body.required is True
        schema = _json_schema(operation.request_body)
        assert schema["title"] == "PostApiUsersRequest"
        assert schema["properties"] == {"name": {"type": "string"}}
        assert operation.request_body.content["application/json"].example == {"name": "Jane"}

    def test_invalid_body_means_no_request_body(self):
        operation = build_operation(parse_bru("post /api/users\nbody:json {\n  {name: Jane\n}\n"), "users")
        assert operation.request_body is None

    def test_response_schema_from_docs(self):
        operation = build_operation(parse_bru(GET_USER), "users")
        response = operation.responses["200"]
        schema = _json_schema(response)
        assert schema["title"] == "GetApiUsersByIdResponse"
        assert schema["properties"] == {"id": {"type": "number"}, "name": {"type": "string"}}
        assert response.content["application/json"].example == {"id": 1, "name": "John"}

    def test_default_response_without_docs_payload(self):
        operation = build_operation(parse_bru("get /api/x\ndocs {\n  Nothing useful.\n}\n"), "x")
        assert operation.responses["200"].description == "Successful response"
        assert operation.responses["200"].content is None


class TestBuildContract:
    def test_paths_and_methods(self):
        contract = build_contract([(parse_bru(GET_USER), "users"), (parse_bru(POST_USER), "users")])
        assert set(contract.paths) == {"/api/users/{id}", "/api/users"}
        assert list(contract.paths["/api/users/{id}"]) == ["get"]
        assert list(contract.paths["/api/users"]) == ["post"]
        assert contract.operation("/api/users", "POST") is contract.paths["/api/users"]["post"]

    def test_default_options(self):
        contract = build_contract([])
        assert contract.openapi == "3.0.0"
        assert contract.info.title == "API"
        assert contract.info.version == "1.0.0"
        assert contract.servers is None
        assert contract.components.schemas == {}

    def test_options(self):
        options = ConversionOptions(
            title="Shop", version="2.1.0", description="Shop API", base_url="https://api.example.com"
        )
        contract = build_contract([], options)
        assert contract.info.title == "Shop"
        assert contract.info.description == "Shop API"
        assert contract.servers == [Server(url="https://api.example.com")]

    def test_later_document_overwrites_same_path_and_method(self):
        first = parse_bru("meta {\n  name: First\n}\nget /api/users/:id\n")
        second = parse_bru("meta {\n  name: Second\n}\nget {{baseUrl}}/api/users/{id}?full=1\n")
        contract = build_contract([(first, "users"), (second, "people")])
        assert list(contract.paths) == ["/api/users/{id}"]
        assert contract.paths["/api/users/{id}"]["get"].summary == "Second"

    def test_documents_without_url_are_skipped(self):
        contract = build_contract([(parse_bru("vars {\n  a: 1\n}\n"), "environments")])
        assert contract.paths == {}
        assert contract.tags == []

    def test_tags_in_first_seen_order(self):
        documents = [
            (parse_bru("get /orders\n"), "orders"),
            (parse_bru("get /users\n"), "users"),
            (parse_bru("post /orders\n"), "orders"),
        ]
        contract = build_contract(documents)
        assert [t.name for t in contract.tags] == ["orders", "users"]
        assert contract.tags[0].description == "orders related endpoints"


class TestContractSerialization:
    def test_to_dict_uses_openapi_names(self):
        contract = build_contract([(parse_bru(GET_USER), "users"), (parse_bru(POST_USER), "users")])
        data = contract.to_dict()
        assert data["openapi"] == "3.0.0"
        assert "servers" not in data
        assert "description" not in data["info"]
        assert data["components"] == {"schemas": {}}

        post = data["paths"]["/api/users"]["post"]
        assert post["operationId"] == "post-users-api-users"
        assert post["requestBody"]["content"]["application/json"]["schema"]["type"] == "object"
        assert post["parameters"][0] == {
            "name": "Content-Type",
            "in": "header",
            "required": False,
            "schema": {"type": "string"},
            "example": "application/json",
        }
        assert post["responses"] == {"200": {"description": "Successful response"}}

        get = data["paths"]["/api/users/{id}"]["get"]
        assert "requestBody" not in get
        assert get["parameters"] == []


DEEP_BODY = "post /api/deep\nbody:json {\n" + '{"a":' * 600 + "1" + "}" * 600 + "\n}\n"


class TestBuildContractIsolation:
    def test_deeply_nested_document_is_skipped(self, caplog):
        errors = []
        documents = [(parse_bru(DEEP_BODY), "deep"), (parse_bru("get /api/ok\n"), "ok")]

        with caplog.at_level(logging.WARNING, logger="bruno_api.converter.openapi"):
            contract = build_contract(documents, on_error=lambda document, e: errors.append(e))

        assert list(contract.paths) == ["/api/ok"]
        assert [t.name for t in contract.tags] == ["ok"]
        assert len(errors) == 1
        assert isinstance(errors[0], RecursionError)
        assert "Skipping POST /api/deep" in caplog.text

    def test_deeply_nested_body_without_callback(self):
        contract = build_contract([(parse_bru(DEEP_BODY), "deep"), (parse_bru("get /api/ok\n"), "ok")])
        assert "/api/deep" not in contract.paths
        assert "/api/ok" in contract.paths

    def test_body_too_deep_to_decode_means_no_request_body(self):
        body = "[" * 100000 + "]" * 100000
        operation = build_operation(parse_bru(f"post /api/x\nbody:json {{\n{body}\n}}\n"), "x")
        assert operation.request_body is None
