"""
Pytest configuration for unit tests.

Provides small on-disk source trees: an application under `lib/` and a
Closure-style library under `closure-library/closure/goog/`.
"""
import pytest
from pathlib import Path

from depscan.config import DepsConfig


LIBRARY_FILES = {
    'base.js': "// bootstrap\nvar goog = goog || {};\n",
    'array/array.js': (
        "goog.provide('goog.array');\n"
        "\n"
        "goog.require('goog.asserts');\n"
    ),
    'asserts/asserts.js': (
        "goog.provide('goog.asserts');\n"
        "goog.provide('goog.asserts.AssertionError');\n"
        "goog.require('goog.debug.Error');\n"
    ),
    'debug/error.js': "goog.provide('goog.debug.Error');\n",
    'string/string.js': (
        "goog.provide('goog.string');\n"
        "goog.provide('goog.string.Unicode');\n"
    ),
    'promise/promise.js': (
        "goog.provide('goog.Promise');\n"
        "goog.require('goog.async.run');\n"
    ),
    'async/run.js': (
        "goog.provide('goog.async.run');\n"
        "goog.require('goog.Promise');\n"
    ),
    'unused/unused.js': (
        "goog.provide('goog.unused');\n"
        "goog.require('goog.string');\n"
    ),
}

APP_FILES = {
    'a.js': (
        "goog.provide('lf.A');\n"
        "\n"
        "goog.require('lf.B');\n"
        "goog.require('goog.array');\n"
    ),
    'b.js': (
        "goog.provide('lf.B');\n"
        "goog.require('goog.string');\n"
    ),
}


def write_tree(root: Path, files: dict) -> Path:
    """Write {relative path: content} under root."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment out of config loading."""
    monkeypatch.delenv("DEPSCAN_CONFIG", raising=False)
    monkeypatch.delenv("DEPSCAN_LIBRARY_PATH", raising=False)


@pytest.fixture
def library_path(tmp_path):
    """Library checkout root (contains closure/goog)."""
    root = tmp_path / "closure-library"
    write_tree(root / "closure" / "goog", LIBRARY_FILES)
    return root


@pytest.fixture
def library_root(library_path):
    return library_path / "closure" / "goog"


@pytest.fixture
def app_root(tmp_path):
    return write_tree(tmp_path / "lib", APP_FILES)


@pytest.fixture
def deps_config(tmp_path, library_path, app_root):
    """Config pointing at the fixture trees."""
    return DepsConfig({
        'deps': {
            'library_path': str(library_path),
            'app_root': 'lib',
        }
    }, base_dir=tmp_path)
