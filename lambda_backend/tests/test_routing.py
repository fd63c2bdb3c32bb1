import logging

from lambda_backend.core.options import NAMESPACE
from lambda_backend.routing import load_endpoints

ROUTING_YAML = """
endpoints:
  - endpoint: /hello/{first_name}
    method: get
    backend:
      - url_pattern: /hello
        deny: [foo]
        extra_config:
          github.com/devopsfaith/krakend-lambda:
            function_name: ${HELLO_FUNCTION}
            max_retries: 2
  - endpoint: /users/{id}
    backend:
      - url_pattern: /users/{id}
        host: [http://origin]
  - method: GET
"""


def test_load_endpoints(tmp_path, monkeypatch):
    monkeypatch.setenv("HELLO_FUNCTION", "hello-prod")
    path = tmp_path / "routing.yml"
    path.write_text(ROUTING_YAML, encoding="utf-8")

    endpoints = load_endpoints(str(path))

    # The third entry has no endpoint and is skipped
    assert len(endpoints) == 2

    hello = endpoints[0]
    assert hello.endpoint == "/hello/{first_name}"
    assert hello.method == "GET"
    assert hello.backend[0].deny == ["foo"]
    assert hello.backend[0].extra_config[NAMESPACE] == {
        "function_name": "hello-prod",
        "max_retries": 2,
    }

    users = endpoints[1]
    assert users.method == "GET"
    assert users.backend[0].host == ["http://origin"]
    assert users.backend[0].extra_config == {}


def test_load_endpoints_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        assert load_endpoints(str(tmp_path / "missing.yml")) == []

    assert "Routing config not found" in caplog.text


def test_load_endpoints_invalid_yaml(tmp_path):
    path = tmp_path / "routing.yml"
    path.write_text("endpoints: [\n  - {", encoding="utf-8")

    assert load_endpoints(str(path)) == []
