import io
from pathlib import Path

import pytest
from common import png_size

from stlplot import (
    DataShapeError,
    DecompositionResult,
    Granularity,
    RenderOptions,
    build_display_figure,
    compose_figure,
    render,
)


def test_render_minute_scenario(minute_result, tmp_path):
    target = tmp_path / 'stl.png'

    written = render(minute_result, destination=target)

    assert written == target
    data = target.read_bytes()
    assert len(data) > 0
    assert png_size(data) == (800, 600)


def test_render_default_destination(minute_result, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    written = render(minute_result)

    assert written == Path('stl-decomposition.png')
    assert (tmp_path / 'stl-decomposition.png').exists()


def test_render_twice_gives_identical_files(hourly_result, tmp_path):
    first = render(hourly_result, title='Load', granularity='hour', destination=tmp_path / 'a.png')
    second = render(hourly_result, title='Load', granularity='hour', destination=tmp_path / 'b.png')

    assert first.read_bytes() == second.read_bytes()


def test_render_to_buffer(minute_result):
    buffer = io.BytesIO()

    assert render(minute_result, RenderOptions(destination=buffer)) is None
    assert png_size(buffer.getvalue()) == (800, 600)


def test_render_rejects_mismatched_shapes(tmp_path):
    result = DecompositionResult(times=[0, 60000], series=[1], seasonal=[1], trend=[1], remainder=[1])
    target = tmp_path / 'never.png'

    with pytest.raises(DataShapeError):
        render(result, destination=target)
    assert not target.exists()


def test_compose_figure_applies_options(hourly_result):
    figure = compose_figure(hourly_result, RenderOptions(title='Traffic', granularity=Granularity.DAY))

    assert figure.title == 'Traffic'
    assert figure.panel_labels == ('Series', 'Seasonal', 'Trend', 'Remainder', 'S & T')
    assert len(figure.panels[0].channels[0]) == 3


def test_build_display_figure_uses_display_size(minute_result):
    fig = build_display_figure(minute_result)

    width, height = fig.get_size_inches() * fig.dpi
    assert (round(width), round(height)) == (1000, 500)


def test_render_options_defaults():
    options = RenderOptions()

    assert options.title == 'Seasonal Decomposition'
    assert options.granularity is Granularity.MINUTE
    assert options.destination == 'stl-decomposition.png'
    assert (options.width, options.height) == (800, 600)


def test_render_options_overrides_skip_none():
    options = RenderOptions().with_overrides(title='CPU', granularity='day', destination=None)

    assert options.title == 'CPU'
    assert options.granularity is Granularity.DAY
    assert options.destination == 'stl-decomposition.png'


def test_render_options_validate_size():
    with pytest.raises(ValueError):
        RenderOptions(width=0)


def test_render_options_from_env():
    options = RenderOptions.from_env({
        'STLPLOT_TITLE': 'From Env',
        'STLPLOT_GRANULARITY': 'hour',
        'STLPLOT_OUTPUT': 'env.png',
    })

    assert options.title == 'From Env'
    assert options.granularity is Granularity.HOUR
    assert options.destination == 'env.png'


def test_render_options_from_empty_env():
    assert RenderOptions.from_env({}) == RenderOptions()
