import numpy as np
import pytest
from common import png_size

from stlplot.chart_config import Granularity
from stlplot.cli import build_arg_parser, main, resolve_options


@pytest.fixture
def series_csv(tmp_path):
    idx = np.arange(72)
    values = 50 + 5 * np.sin(2 * np.pi * idx / 12) + 0.2 * idx
    lines = ['timestamp,value'] + [f'{i * 60000},{v:.4f}' for i, v in zip(idx, values)]
    path = tmp_path / 'series.csv'
    path.write_text('\n'.join(lines) + '\n')
    return path


def test_cli_help_exits_cleanly():
    with pytest.raises(SystemExit) as excinfo:
        build_arg_parser().parse_args(['--help'])
    assert excinfo.value.code == 0


def test_cli_rejects_unknown_granularity():
    with pytest.raises(SystemExit) as excinfo:
        build_arg_parser().parse_args(['12', 'series.csv', '--granularity', 'fortnight'])
    assert excinfo.value.code == 2


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv('STLPLOT_TITLE', 'Env Title')
    monkeypatch.setenv('STLPLOT_OUTPUT', 'env.png')
    args = build_arg_parser().parse_args(['12', 'series.csv', '--granularity', 'hour', '--output', 'flag.png'])

    options = resolve_options(args)

    assert options.title == 'Env Title'
    assert options.granularity is Granularity.HOUR
    assert options.destination == 'flag.png'


def test_main_writes_decomposition_plot(series_csv, tmp_path):
    output = tmp_path / 'out.png'

    exit_code = main(['12', str(series_csv), '--output', str(output), '--title', 'Test Series'])

    assert exit_code == 0
    assert png_size(output.read_bytes()) == (800, 600)


def test_main_reports_missing_input(tmp_path):
    exit_code = main(['12', str(tmp_path / 'absent.csv'), '--output', str(tmp_path / 'out.png')])

    assert exit_code == 1
    assert not (tmp_path / 'out.png').exists()


def test_main_reports_short_series(series_csv, tmp_path):
    exit_code = main(['60', str(series_csv), '--output', str(tmp_path / 'out.png')])

    assert exit_code == 1
