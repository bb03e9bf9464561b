"""Tests for configuration loading, validation and CLI merging."""

import argparse

import pytest
import yaml

import migrate
from config_loader import ConfigLoader, get_nested


def _json_config(**export):
    return {'source': {'mode': 'json', 'json_path': 'dump.json'}, 'export': export}


class TestLoad:

    def test_load_with_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv('WP_APP_PASSWORD', 's3cret')
        path = tmp_path / 'config.yaml'
        path.write_text(
            'source:\n'
            '  mode: api\n'
            '  base_url: https://example.org\n'
            '  application_password: ${WP_APP_PASSWORD}\n'
            '  post_types: [post, "${UNSET_VARIABLE_FOR_TEST}"]\n',
            encoding='utf-8',
        )

        config = ConfigLoader.load(str(path))

        assert config['source']['application_password'] == 's3cret'
        assert config['source']['post_types'] == ['post', '${UNSET_VARIABLE_FOR_TEST}']

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / 'missing.yaml'))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('- just\n- a list\n', encoding='utf-8')
        with pytest.raises(ValueError):
            ConfigLoader.load(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('source: [unclosed\n', encoding='utf-8')
        with pytest.raises(yaml.YAMLError):
            ConfigLoader.load(str(path))


class TestValidate:

    def test_minimal_json_config(self):
        ConfigLoader.validate(_json_config())

    def test_json_mode_requires_path(self):
        with pytest.raises(ValueError, match='json_path'):
            ConfigLoader.validate({'source': {'mode': 'json'}})

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match='source.mode'):
            ConfigLoader.validate({'source': {'mode': 'sql'}})

    def test_api_mode_requires_valid_url(self):
        with pytest.raises(ValueError, match='base_url'):
            ConfigLoader.validate({'source': {'mode': 'api'}})
        with pytest.raises(ValueError, match='scheme'):
            ConfigLoader.validate({'source': {'mode': 'api', 'base_url': 'ftp://example.org'}})

    def test_api_username_requires_password(self):
        config = {'source': {'mode': 'api', 'base_url': 'https://example.org', 'username': 'editor'}}
        with pytest.raises(ValueError, match='application_password'):
            ConfigLoader.validate(config)

    def test_unsubstituted_variable_is_reported(self):
        config = {'source': {
            'mode': 'api',
            'base_url': 'https://example.org',
            'username': 'editor',
            'application_password': '${WP_APP_PASSWORD}',
        }}
        with pytest.raises(ValueError, match='WP_APP_PASSWORD'):
            ConfigLoader.validate(config)

    @pytest.mark.parametrize('max_records', [0, -1, 'ten', True])
    def test_max_records_must_be_positive_int(self, max_records):
        config = _json_config()
        config['source']['max_records'] = max_records
        with pytest.raises(ValueError, match='max_records'):
            ConfigLoader.validate(config)

    def test_post_types_must_be_list(self):
        config = _json_config()
        config['source']['post_types'] = 'post'
        with pytest.raises(ValueError, match='post_types'):
            ConfigLoader.validate(config)

    def test_featured_image_mode(self):
        with pytest.raises(ValueError, match='featured_image_mode'):
            ConfigLoader.validate(_json_config(featured_image_mode='cdn'))

    def test_image_directory_must_be_absolute(self):
        with pytest.raises(ValueError, match='image_directory'):
            ConfigLoader.validate(_json_config(image_directory='images'))

    def test_output_directory_must_not_be_file(self, tmp_path):
        target = tmp_path / 'file.txt'
        target.write_text('x', encoding='utf-8')
        with pytest.raises(ValueError, match='output_directory'):
            ConfigLoader.validate(_json_config(output_directory=str(target)))

    def test_request_timeout(self):
        config = _json_config()
        config['advanced'] = {'request_timeout': 0}
        with pytest.raises(ValueError, match='request_timeout'):
            ConfigLoader.validate(config)


class TestMergeWithArgs:

    def test_cli_values_override(self):
        args = argparse.Namespace(dry_run=True, verbose=2)

        merged = ConfigLoader.merge_with_args(_json_config(dry_run=False, output_directory='site'), args)

        assert merged['export']['dry_run'] is True
        assert merged['export']['output_directory'] == 'site'
        assert merged['logging']['level'] == 'DEBUG'

    def test_merge_with_parsed_cli_arguments(self):
        args = migrate.create_argument_parser().parse_args(['--no-dry-run', '-v'])

        merged = ConfigLoader.merge_with_args(_json_config(dry_run=True), args)

        assert merged['export']['dry_run'] is False
        assert merged['logging']['level'] == 'INFO'

    def test_unset_flags_keep_config(self):
        config = _json_config(dry_run=True)
        merged = ConfigLoader.merge_with_args(config, argparse.Namespace(dry_run=None, verbose=0))

        assert merged['export']['dry_run'] is True
        assert 'level' not in merged['logging']
        assert merged is not config


def test_get_nested():
    config = {'a': {'b': {'c': 1}}, 'x': None}

    assert get_nested(config, 'a.b.c') == 1
    assert get_nested(config, 'a.missing', 'default') == 'default'
    assert get_nested(config, 'x.y', 5) == 5
