"""locale-sync – Pytest Configuration.

Shared fixtures for all tests.
"""

import json
import os
import threading
from pathlib import Path
from typing import Any, Callable

# Never let a developer's AWS environment leak into the tests
for _var in ("AWS_REGION", "AWS_DEFAULT_REGION", "AWS_ACCESS_KEY_ID",
             "AWS_SECRET_ACCESS_KEY", "AWS_SESSION_TOKEN", "TARGET_LOCALES"):
    os.environ.pop(_var, None)

import pytest
import structlog

from config.settings import Settings
from locale_sync.integrations.translate import TranslationGateway


class FakeProvider:
    """Deterministic provider: 'Hello' → 'it:Hello'. Records every call."""

    def __init__(self, fail_on: tuple[str, ...] = ()) -> None:
        self.fail_on = set(fail_on)
        self.calls: list[tuple[str, str, str]] = []
        self._lock = threading.Lock()

    def translate_text(self, text: str, source_lang: str, target_lang: str) -> str:
        with self._lock:
            self.calls.append((text, source_lang, target_lang))
        if text in self.fail_on:
            raise RuntimeError("ThrottlingException: rate exceeded")
        return f"{target_lang}:{text}"


class DownProvider:
    """Provider whose backend is unreachable."""

    def translate_text(self, text: str, source_lang: str, target_lang: str) -> str:
        raise ConnectionError("Could not connect to the endpoint URL")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def gateway(provider: FakeProvider) -> TranslationGateway:
    return TranslationGateway(provider)


@pytest.fixture
def down_gateway() -> TranslationGateway:
    return TranslationGateway(DownProvider())


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Write a JSON document (creating parent dirs) and return its path."""

    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def read_json() -> Callable[[Path], Any]:
    def _read(path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def locales_dir(tmp_path: Path, write_json) -> Path:
    """Locale tree with an English reference and two targets (it, es)."""
    write_json(tmp_path / "en" / "en.json", {
        "title": "Hello",
        "menu": {"open": "Open", "close": "Close"},
    })
    write_json(tmp_path / "it" / "it.json", {
        "title": "Ciao",
        "menu": {"open": "Apri"},
    })
    write_json(tmp_path / "es" / "es.json", {
        "title": "Hola",
        "menu": {"open": "Abrir", "close": "Cerrar"},
        "legacy": "Antiguo",
    })
    return tmp_path


@pytest.fixture
def make_settings(locales_dir: Path) -> Callable[..., Settings]:
    """Settings factory pointing at ``locales_dir``, ignoring any .env file."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "locales_dir": str(locales_dir),
            "target_locales": {"it": "it/it.json", "es": "es/es.json"},
            "translate_max_workers": 1,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture(autouse=True)
def reset_structlog():
    """setup_logging() binds the current stderr; drop it after each test."""
    yield
    structlog.reset_defaults()
