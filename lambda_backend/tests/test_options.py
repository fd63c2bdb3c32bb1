import pytest

from lambda_backend.core.exceptions import MalformedAdapterConfig, NoAdapterConfig
from lambda_backend.core.function_name import ConstantFunctionName, ParamFunctionName
from lambda_backend.core.options import NAMESPACE, ConnectionOptions, parse_options
from lambda_backend.core.payload import PayloadFormat
from lambda_backend.models.request import BackendConfig, Request


def test_parse_options_without_namespace():
    """Routes without Lambda configuration are not ours"""
    backend = BackendConfig(method="GET", extra_config={"other/namespace": {}})

    with pytest.raises(NoAdapterConfig):
        parse_options(backend)


@pytest.mark.parametrize("value", [42, "function", ["a", "b"], None, True])
def test_parse_options_non_mapping_value(value):
    backend = BackendConfig(method="GET", extra_config={NAMESPACE: value})

    with pytest.raises(MalformedAdapterConfig):
        parse_options(backend)


@pytest.mark.parametrize(
    "options",
    [
        {"function_name": 42},
        {"function_param_name": ["function"]},
        {"region": 1},
        {"max_retries": "3"},
        {"max_retries": True},
        {"aws_api_gateway_format": True},
        {"aws_api_gateway_format": {"enabled": "yes"}},
    ],
)
def test_parse_options_wrong_option_types(lambda_backend_config, options):
    with pytest.raises(MalformedAdapterConfig):
        parse_options(lambda_backend_config(**options))


def test_function_name_wins_over_param(lambda_backend_config):
    """An explicit function_name ignores the request parameters"""
    options = parse_options(
        lambda_backend_config(function_name="configured", function_param_name="fn")
    )
    request = Request(method="GET", params={"fn": "from-request", "function": "other"})

    assert options.function_resolver == ConstantFunctionName("configured")
    assert options.function_resolver(request) == "configured"


def test_function_param_defaults_to_function(lambda_backend_config):
    options = parse_options(lambda_backend_config())

    assert options.function_resolver == ParamFunctionName("function")
    assert options.function_resolver(Request(method="GET", params={"function": "f1"})) == "f1"
    assert options.function_resolver(Request(method="GET")) == ""


def test_null_function_param_name_falls_back_to_function():
    """`function_param_name: null` in YAML behaves like an absent option"""
    options = parse_options(
        BackendConfig(method="GET", extra_config={NAMESPACE: {"function_param_name": None}})
    )

    assert options.function_resolver == ParamFunctionName("function")
    assert options.function_resolver(Request(method="GET", params={"function": "f1"})) == "f1"


def test_function_param_name_is_case_sensitive(lambda_backend_config):
    options = parse_options(lambda_backend_config(function_param_name="Lambda"))

    assert options.function_resolver(Request(method="GET", params={"Lambda": "f2"})) == "f2"
    assert options.function_resolver(Request(method="GET", params={"lambda": "f2"})) == ""


@pytest.mark.parametrize(
    "method, options, expected",
    [
        ("GET", {}, PayloadFormat.PARAMS),
        ("POST", {}, PayloadFormat.BODY),
        ("GET", {"aws_api_gateway_format": {"enabled": True}}, PayloadFormat.API_GATEWAY_V1),
        ("POST", {"aws_api_gateway_format": {"enabled": False}}, PayloadFormat.BODY),
        ("GET", {"aws_api_gateway_format": {}}, PayloadFormat.PARAMS),
    ],
)
def test_payload_format_selection(lambda_backend_config, method, options, expected):
    assert parse_options(lambda_backend_config(method, **options)).payload_format is expected


def test_method_is_normalized(lambda_backend_config):
    assert parse_options(lambda_backend_config("get")).payload_format is PayloadFormat.PARAMS


def test_connection_defaults_to_ambient(lambda_backend_config):
    options = parse_options(lambda_backend_config(function_name="f"))

    assert options.connection is None
    assert options.qualifier is None


def test_connection_options_are_independent(lambda_backend_config):
    options = parse_options(lambda_backend_config(endpoint="http://localhost:4566"))
    assert options.connection == ConnectionOptions(endpoint="http://localhost:4566")

    options = parse_options(lambda_backend_config(max_retries=0))
    assert options.connection == ConnectionOptions(max_retries=0)

    options = parse_options(
        lambda_backend_config(
            region="eu-west-1", endpoint="http://localhost:4566", max_retries=3, qualifier="live"
        )
    )
    assert options.connection == ConnectionOptions(
        region="eu-west-1", endpoint="http://localhost:4566", max_retries=3
    )
    assert options.qualifier == "live"


def test_unknown_options_are_ignored(lambda_backend_config):
    options = parse_options(lambda_backend_config(function_name="f", timeout="3s"))

    assert options.function_resolver(Request(method="GET")) == "f"
