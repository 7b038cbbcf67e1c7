from types import SimpleNamespace as Case

import pytest

from restool.config.builder import (
    DEFAULT_SSL_VERIFY,
    DEFAULT_TIMEOUT,
    build_operation,
    build_operation_response,
    build_representations,
    build_service,
    compose_path,
    uri_params,
)
from restool.config.error import InvalidFieldError, MissingFieldError
from restool.config.schema import RawField, RawOperation
from restool.models import (
    BasicAuthentication,
    Operation,
    OperationResponse,
    OperationResponseField,
    PersistentConnection,
    Representation,
    RepresentationField,
)
from restool.symbol import Symbol


def service_config(**overrides):
    d = dict(
        name="billing",
        url="https://api.example.com/v2/",
        operations=[
            dict(name="get_invoice", path="/invoices/:id", method="get"),
            dict(name="create_invoice", path="invoices", method="POST"),
        ],
    )
    d.update(overrides)
    return d


class Test_BuildService:
    def test_build(self):
        service = build_service(
            service_config(
                timeout=5,
                ssl_verify=True,
                basic_auth=dict(user="user", password="password"),
                persistent=dict(pool_size=3, warn_timeout=0.5, force_retry=True),
                representations=dict(
                    invoice=[dict(key="id", metonym="identifier", type="integer")]
                ),
            )
        )

        assert service.name == "billing"
        assert service.base_url == "https://api.example.com/v2/"
        assert service.timeout == 5
        assert service.ssl_verify is True
        assert service.basic_auth == BasicAuthentication(
            user="user", password="password"
        )
        assert service.persistent_connection == PersistentConnection(
            pool_size=3, warn_timeout=0.5, force_retry=True
        )
        assert list(service.representations) == [Symbol("invoice")]
        assert service.operations == (
            Operation(
                name="get_invoice",
                path="v2/invoices/:id",
                method="get",
                uri_params=[":id"],
            ),
            Operation(
                name="create_invoice",
                path="v2/invoices",
                method="POST",
                uri_params=[],
            ),
        )

    def test_operations_count(self):
        operations = [
            dict(name=f"op{i}", path=f"/items/{i}", method="get") for i in range(7)
        ]
        service = build_service(service_config(operations=operations))

        assert len(service.operations) == len(operations)

    def test_defaults(self):
        service = build_service(service_config())

        assert service.timeout == DEFAULT_TIMEOUT == 60
        assert service.ssl_verify is DEFAULT_SSL_VERIFY is False
        assert service.basic_auth is None
        assert service.persistent_connection is None
        assert dict(service.representations) == {}

    def test_ssl_verify_false_and_unset_are_alike(self):
        unset = build_service(service_config())
        explicit = build_service(service_config(ssl_verify=False))

        assert unset.ssl_verify == explicit.ssl_verify == DEFAULT_SSL_VERIFY

    def test_zero_timeout_is_kept(self):
        service = build_service(service_config(timeout=0))

        assert service.timeout == 0

    def test_basic_authentication_alias(self):
        service = build_service(
            service_config(basic_authentication=dict(user="u", password="p"))
        )

        assert service.basic_auth == BasicAuthentication(user="u", password="p")

    def test_url_without_path(self):
        service = build_service(
            service_config(
                url="https://api.example.com",
                operations=[dict(name="get", path="/users/:id", method="get")],
            )
        )

        assert service.operations[0].path == "users/:id"

    def test_prefix_does_not_add_uri_params(self):
        service = build_service(
            service_config(
                url="https://api.example.com/:tenant/",
                operations=[dict(name="get", path="/users/:id", method="get")],
            )
        )

        assert service.operations[0].path == ":tenant/users/:id"
        assert service.operations[0].uri_params == (":id",)

    def test_missing_operations(self):
        with pytest.raises(MissingFieldError) as excinfo:
            build_service(dict(name="billing", url="https://api.example.com"))

        assert excinfo.value.field == "operations"
        assert "service=billing" in str(excinfo.value)

    def test_unparseable_url(self):
        with pytest.raises(InvalidFieldError):
            build_service(service_config(url="https://[::1/v2"))

    def test_fresh_service_on_each_build(self):
        config = service_config()

        first = build_service(config)
        second = build_service(config)

        assert first == second
        assert first is not second


class Test_BuildOperation:
    def test_build(self):
        operation = build_operation(
            RawOperation(
                name="get_post",
                path="/users/:id/posts/:postId2",
                method="get",
                response=(RawField(key="id", metonym="identifier", type="integer"),),
            ),
            "/v2/",
        )

        assert operation.name == "get_post"
        assert operation.path == "v2/users/:id/posts/:postId2"
        assert operation.method == "get"
        assert operation.uri_params == (":id", ":postId2")
        assert operation.response == OperationResponse(
            fields=[
                OperationResponseField(key="id", metonym="identifier", type="integer")
            ]
        )

    def test_no_response(self):
        operation = build_operation(
            RawOperation(name="ping", path="ping", method="head"), ""
        )

        assert operation.response is None
        assert operation.path == "ping"


class Test_ComposePath:
    def test_compose_path(self):
        cases = [
            Case(prefix="/v2/", path="/users/:id", expected="v2/users/:id"),
            Case(prefix="/v2", path="users/:id", expected="v2/users/:id"),
            Case(prefix="/v2/", path="users", expected="v2/users"),
            Case(prefix="/api/v2", path="/users/", expected="api/v2/users/"),
            Case(prefix="", path="/users", expected="users"),
            Case(prefix="/", path="/users", expected="users"),
            Case(prefix="/v2/", path="", expected="v2/"),
        ]

        for case in cases:
            assert compose_path(case.prefix, case.path) == case.expected

    def test_single_slash_only_is_stripped(self):
        assert compose_path("/v2//", "//users") == "v2///users"


class Test_UriParams:
    def test_uri_params(self):
        cases = [
            Case(path="/users/:id/posts/:postId2", expected=[":id", ":postId2"]),
            Case(path="/users/:user_id2", expected=[":user_id2"]),
            Case(path="/users/:id/friends/:id", expected=[":id", ":id"]),
            Case(path="/a:b2c/:x9", expected=[":b2c", ":x9"]),
            Case(path="/users", expected=[]),
            Case(path="/users/:1", expected=[]),
            Case(path="/files/:name.json", expected=[":name"]),
        ]

        for case in cases:
            assert uri_params(case.path) == case.expected


class Test_BuildRepresentations:
    def test_build(self):
        representations = build_representations(
            {
                "user": (RawField(key="id", metonym="id", type="integer"),),
                "address": (
                    RawField(key="street", metonym="street", type="string"),
                    RawField(key="zip", metonym="postal_code", type="string"),
                ),
            }
        )

        assert list(representations) == ["user", "address"]
        assert all(isinstance(name, Symbol) for name in representations)

        user = representations[Symbol("user")]
        assert user == Representation(
            name="user",
            fields=[RepresentationField(key="id", metonym="id", type="integer")],
        )
        assert user.fields[0].type == Symbol("integer")
        assert isinstance(user.fields[0].type, Symbol)

        assert [f.metonym for f in representations["address"].fields] == [
            "street",
            "postal_code",
        ]

    def test_empty(self):
        assert build_representations({}) == {}


class Test_BuildOperationResponse:
    def test_build(self):
        response = build_operation_response(
            (
                RawField(key="id", metonym="identifier", type="integer"),
                RawField(key="name", metonym="full_name", type="string"),
            )
        )

        assert [(f.key, f.metonym, f.type) for f in response.fields] == [
            ("id", "identifier", Symbol("integer")),
            ("name", "full_name", Symbol("string")),
        ]
        assert all(isinstance(f.type, Symbol) for f in response.fields)
