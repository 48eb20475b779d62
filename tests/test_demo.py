import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from webnify.core.dependencies import get_fetch_delay, load_demo_settings, load_minify_settings
from webnify.data.sample_data import APP_CONFIG, SAMPLE_PACKAGES
from webnify.domain.demo_utils import add_numbers, format_number
from webnify.main import create_app
from webnify.services.rendering import render_package_table


@pytest.fixture
def client():
    app = create_app()
    app.dependency_overrides[get_fetch_delay] = lambda: 0.0
    with TestClient(app) as c:
        yield c


# ---------------------------------------------------------------------------
# Fixture data and helpers
# ---------------------------------------------------------------------------


def test_sample_packages_has_four_entries():
    assert len(SAMPLE_PACKAGES) == 4
    assert [p.name for p in SAMPLE_PACKAGES] == [
        "HTML Minifier",
        "CSS Optimizer",
        "JS Compressor",
        "Image Compressor",
    ]


def test_app_config_values():
    assert APP_CONFIG.api_endpoint == "https://api.example.com/data"
    assert APP_CONFIG.max_retries == 3
    assert APP_CONFIG.timeout == 5000
    assert APP_CONFIG.features.dark_mode is True
    assert APP_CONFIG.features.analytics is False


@pytest.mark.parametrize(
    "value, expected",
    [(12500, "12,500"), (0, "0"), (999, "999"), (1000, "1,000"), (1234567, "1,234,567")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_add_numbers():
    assert add_numbers(5, 10) == 15


def test_render_table_has_four_rows_and_four_columns():
    html = render_package_table(SAMPLE_PACKAGES)

    header, body = html.split("</thead>", 1)
    assert header.count("<th>") == 4
    assert body.split("</tbody>", 1)[0].count("<tr>") == 4
    assert "12,500" in html
    assert "<style>" in html


def test_render_empty_table_keeps_header():
    html = render_package_table([])

    header, body = html.split("</thead>", 1)
    assert header.count("<th>") == 4
    assert "<tr>" not in body.split("</tbody>", 1)[0]


# ---------------------------------------------------------------------------
# Settings loading
# ---------------------------------------------------------------------------


def test_load_minify_settings_from_environment():
    settings = load_minify_settings({
        "WEBNIFY_MINIFY_JSON": "true",
        "WEBNIFY_MINIFY_HTML": "0",
        "WEBNIFY_SUPPRESS_WARNINGS": "yes",
        "UNRELATED": "1",
    })
    assert settings.minify_json is True
    assert settings.minify_html is False
    assert settings.suppress_warnings is True
    assert settings.minify_css is True


def test_load_minify_settings_rejects_bad_values():
    with pytest.raises(ValueError):
        load_minify_settings({"WEBNIFY_MINIFY_JSON": "sometimes"})


def test_fetch_delay_from_environment(monkeypatch):
    monkeypatch.setenv("WEBNIFY_FETCH_DELAY", "0.25")
    assert get_fetch_delay() == 0.25


def test_fetch_delay_defaults():
    assert load_demo_settings({}).fetch_delay == 1.5


@pytest.mark.parametrize("value", ["abc", "nan", "inf", "-1"])
def test_bad_fetch_delay_fails_at_startup(monkeypatch, value):
    monkeypatch.setenv("WEBNIFY_FETCH_DELAY", value)
    with pytest.raises(ValidationError):
        create_app()


# ---------------------------------------------------------------------------
# HTTP endpoints
# ---------------------------------------------------------------------------


def test_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_index_renders_first_two_rows(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert "HTML Minifier" in response.text
    assert "CSS Optimizer" in response.text
    assert "JS Compressor" not in response.text
    assert "12,500" in response.text
    # Template comments are stripped by the middleware
    assert "Stylesheet is served" not in response.text


def test_config_endpoint(client: TestClient):
    response = client.get("/api/config")
    assert response.status_code == 200
    data = response.json()
    assert data["max_retries"] == 3
    assert data["features"]["dark_mode"] is True


def test_packages_endpoint(client: TestClient):
    response = client.get("/api/packages")
    assert response.status_code == 200
    assert len(response.json()) == 4
    assert response.json()[0] == {"id": 1, "name": "HTML Minifier", "version": "1.2.0", "downloads": 12500}


def test_package_table_endpoint(client: TestClient):
    response = client.get("/api/packages/table")
    assert response.status_code == 200
    assert response.text.count("<th>") == 4
    assert response.text.count("<tr>") == 5
    assert "21,500" in response.text


def test_static_script_is_minified(client: TestClient):
    response = client.get("/static/js/sample.js")
    assert response.status_code == 200
    assert "This comment will be removed" not in response.text
    assert "function addNumbers(num1,num2)" in response.text
    assert response.headers["content-length"] == str(len(response.content))


def test_static_stylesheet_is_minified(client: TestClient):
    response = client.get("/static/css/style.css")
    assert response.status_code == 200
    assert "Base layout" not in response.text
    assert "\n" not in response.text
