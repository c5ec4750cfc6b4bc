"""
Unit tests for depscan configuration loading.
"""
import os
import pytest
import yaml
from pathlib import Path

from depscan.config import DepsConfig, load_config


class TestDepsConfig:
    """Test config defaults and overrides."""

    def test_defaults(self, tmp_path):
        config = DepsConfig(base_dir=tmp_path)

        assert config.library_path == tmp_path / "closure-library"
        assert config.library_root == tmp_path / "closure-library" / "closure" / "goog"
        assert config.bootstrap_file == str(tmp_path / "closure-library" / "closure" / "goog" / "base.js")
        assert config.app_root == tmp_path / "lib"
        assert config.namespace_prefix == 'goog'
        assert config.extensions == ['.js']
        assert config.exclude == []
        assert config.statement == 'goog.addDependency'
        assert config.serve_prefix == '../../'
        assert config.syntax.declare_keyword == 'goog.provide'
        assert config.syntax.require_keyword == 'goog.require'

    def test_overrides(self, tmp_path):
        config = DepsConfig({
            'deps': {
                'library_path': '/opt/lib',
                'library_subdir': 'src',
                'bootstrap': 'src/boot.src',
                'namespace_prefix': 'e.',
                'extensions': ['.src'],
                'declare_keyword': 'declare',
                'require_keyword': 'require',
                'statement': 'DECLARE_DEPENDENCY',
            }
        }, base_dir=tmp_path)

        assert config.library_root == Path('/opt/lib/src')
        assert config.bootstrap_file == os.path.abspath('/opt/lib/src/boot.src')
        assert config.extensions == ['.src']
        assert config.syntax.declare_keyword == 'declare'
        assert config.statement == 'DECLARE_DEPENDENCY'

    def test_library_path_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DEPSCAN_LIBRARY_PATH", "/env/closure")

        config = DepsConfig({'deps': {'library_path': 'ignored'}}, base_dir=tmp_path)

        assert config.library_path == Path("/env/closure")

    def test_invalid_document(self):
        with pytest.raises(ValueError, match="expected mapping"):
            DepsConfig(['not', 'a', 'mapping'])

    def test_invalid_deps_section(self):
        with pytest.raises(ValueError, match="'deps' must be a mapping"):
            DepsConfig({'deps': 'lib'})

    def test_invalid_list_field(self):
        with pytest.raises(ValueError, match="'extensions' must be a list"):
            DepsConfig({'deps': {'extensions': '.js'}})

    @pytest.mark.parametrize('document', [[], 0, '', 'deps'])
    def test_falsy_or_scalar_document_rejected(self, document):
        """Only None means defaults; any other non-mapping is an error."""
        with pytest.raises(ValueError, match="expected mapping"):
            DepsConfig(document)

    def test_empty_deps_section_rejected(self):
        with pytest.raises(ValueError, match="'deps' must be a mapping"):
            DepsConfig({'deps': []})

    def test_null_deps_section_uses_defaults(self, tmp_path):
        assert DepsConfig({'deps': None}, base_dir=tmp_path).namespace_prefix == 'goog'

    def test_null_library_path(self):
        """A bare `library_path:` key is a config error, not a crash."""
        with pytest.raises(ValueError, match="'library_path' must be a string, got NoneType"):
            DepsConfig({'deps': {'library_path': None}})

    @pytest.mark.parametrize('key', [
        'library_path', 'library_subdir', 'bootstrap', 'namespace_prefix', 'app_root',
        'declare_keyword', 'require_keyword', 'statement', 'serve_prefix',
    ])
    def test_string_fields_validated(self, key):
        with pytest.raises(ValueError, match=f"'{key}' must be a string, got int"):
            DepsConfig({'deps': {key: 123}})

    def test_null_field_in_yaml_file(self, tmp_path):
        config_file = tmp_path / "depscan.yaml"
        config_file.write_text("deps:\n  library_path:\n")

        with pytest.raises(ValueError, match="'library_path' must be a string"):
            load_config(config_file)


class TestLoadConfig:
    """Test locating and parsing depscan.yaml."""

    def test_explicit_path_relative_to_config_dir(self, tmp_path):
        config_file = tmp_path / "conf" / "depscan.yaml"
        config_file.parent.mkdir()
        with open(config_file, 'w') as f:
            yaml.dump({'deps': {'library_path': '../closure', 'app_root': 'src'}}, f)

        config = load_config(config_file)

        assert config.library_path == (tmp_path / "conf").resolve() / ".." / "closure"
        assert config.app_root == (tmp_path / "conf").resolve() / "src"

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config not found"):
            load_config(tmp_path / "missing.yaml")

    def test_env_path(self, tmp_path, monkeypatch):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("deps:\n  namespace_prefix: lf\n")
        monkeypatch.setenv("DEPSCAN_CONFIG", str(config_file))

        assert load_config().namespace_prefix == 'lf'

    def test_cwd_default_file(self, tmp_path, monkeypatch):
        (tmp_path / "depscan.yaml").write_text("deps:\n  statement: DECLARE_DEPENDENCY\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().statement == 'DECLARE_DEPENDENCY'

    def test_no_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.namespace_prefix == 'goog'
        assert config.app_root == Path.cwd() / "lib"

    def test_empty_file_uses_defaults(self, tmp_path):
        config_file = tmp_path / "depscan.yaml"
        config_file.write_text("")

        assert load_config(config_file).statement == 'goog.addDependency'
