from __future__ import annotations

import argparse
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

import pytest
import requests


REPO_ROOT = Path(__file__).resolve().parents[1]


def load_script_module(module_name: str, relative_path: str) -> ModuleType:
    module_path = REPO_ROOT / relative_path
    scripts_dir = str(module_path.parent)
    if scripts_dir not in sys.path:
        sys.path.insert(0, scripts_dir)

    spec = importlib.util.spec_from_file_location(module_name, module_path)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"unable to load module from {module_path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def make_namespace() -> Callable[..., argparse.Namespace]:
    def _factory(**kwargs: Any) -> argparse.Namespace:
        defaults: dict[str, Any] = {
            "github_token": None,
            "repository": None,
            "api_base_url": None,
            "match_tag": None,
            "alias_minor": None,
            "alias_major": None,
            "remote": "origin",
            "per_page": 100,
            "limit": 500,
            "timeout": 30,
            "dry_run": False,
        }
        defaults.update(kwargs)
        return argparse.Namespace(**defaults)

    return _factory


class FakeResponse:
    def __init__(self, *, status_code: int, json_data: Any = None, text: str = ""):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text

    def json(self) -> Any:
        return self._json_data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            error = requests.HTTPError(f"HTTP {self.status_code}")
            error.response = self
            raise error


class RequestSequenceSession:
    def __init__(self, outcomes: list[object]):
        self._outcomes = list(outcomes)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def request(self, *, method: str, url: str, timeout: int, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, "timeout": timeout, "kwargs": kwargs})
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True


def tag_page(*names: str) -> FakeResponse:
    return FakeResponse(status_code=200, json_data=[{"name": name, "commit": {"sha": "abc"}} for name in names])


@pytest.fixture
def request_session_factory():
    return RequestSequenceSession


@pytest.fixture(scope="session")
def update_alias_tags():
    return load_script_module("tagalias_update_alias_tags", "scripts/update-alias-tags.py")
