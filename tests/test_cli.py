"""Tests for the command-line entry point."""

import json

import pytest

import migrate


@pytest.fixture
def site(tmp_path):
    """Config file pointing at a JSON dump and an output directory."""
    output = tmp_path / 'site'
    dump = tmp_path / 'dump.json'
    config_path = tmp_path / 'config.yaml'

    def _write(records, **export):
        dump.write_text(json.dumps(records), encoding='utf-8')
        lines = [
            'source:',
            '  mode: json',
            f'  json_path: {dump}',
            'export:',
            f'  output_directory: {output}',
        ]
        lines.extend(f'  {key}: {str(value).lower()}' for key, value in export.items())
        config_path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
        return config_path, output

    return _write


def _movie(showtimes):
    return {
        'id': 7,
        'type': 'evans_movie',
        'title': 'Alien',
        'slug': 'alien',
        'permalink': 'https://evans.example.org/movie/alien/',
        'date_gmt': '2023-11-14T22:13:20',
        'content': '<p>In space no one can hear you scream.</p>',
        'excerpt': '',
        'thumbnail_url': 'https://evans.example.org/wp-content/uploads/foo/bar.jpg',
        'meta': {'_evans_showtime': showtimes},
    }


def test_successful_export(site):
    config_path, output = site([_movie([1700000000])])

    assert migrate.main(['--config', str(config_path)]) == 0

    content = (output / 'movie' / '2023' / 'alien.md').read_text(encoding='utf-8')
    assert 'layout: movie\n' in content
    assert 'featured_img: /images/feature/bar.jpg\n' in content


def test_dry_run_flag(site):
    config_path, output = site([_movie([1700000000])])

    assert migrate.main(['--config', str(config_path), '--dry-run']) == 0
    assert not output.exists()


def test_malformed_showtimes_exit_code(site, capsys):
    config_path, output = site([_movie([True])])

    assert migrate.main(['--config', str(config_path)]) == 1

    err = capsys.readouterr().err
    assert 'Whoops! Malformed showtimes for record 7:' in err
    assert '[True]' in err
    assert not (output / 'movie').exists()


def test_missing_dump_exit_code(site, tmp_path):
    config_path, _ = site([])
    (tmp_path / 'dump.json').unlink()

    assert migrate.main(['--config', str(config_path)]) == 1


def test_missing_config_exit_code(tmp_path, capsys):
    assert migrate.main(['--config', str(tmp_path / 'missing.yaml')]) == 2
    assert 'not found' in capsys.readouterr().err


def test_invalid_config_exit_code(tmp_path):
    config_path = tmp_path / 'config.yaml'
    config_path.write_text('source:\n  mode: sql\n', encoding='utf-8')

    assert migrate.main(['--config', str(config_path)]) == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        migrate.main(['--version'])
    assert excinfo.value.code == 0
    assert migrate.__version__ in capsys.readouterr().out
