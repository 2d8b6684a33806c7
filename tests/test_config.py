import pytest

from config import ARRAY_SIZES, SPEED_MULTIPLIERS, VisualizerConfig


def test_defaults():
    cfg = VisualizerConfig()
    assert (cfg.grid_rows, cfg.grid_cols) == (10, 20)
    assert cfg.animation_speed_ms == 30
    assert cfg.array_size in ARRAY_SIZES
    assert cfg.sort_delay_ms == 100


@pytest.mark.parametrize("speed, delay", [("0.5x", 200), ("1x", 100), ("4x", 25), ("100x", 1)])
def test_sort_delay_follows_multiplier(speed, delay):
    assert VisualizerConfig(sort_speed=speed).sort_delay_ms == delay
    assert speed in SPEED_MULTIPLIERS


def test_invalid_values_rejected():
    with pytest.raises(ValueError):
        VisualizerConfig(grid_rows=0)
    with pytest.raises(ValueError):
        VisualizerConfig(sort_speed="2x")
    with pytest.raises(ValueError):
        VisualizerConfig(min_value=50, max_value=10)


def test_from_mapping_coerces_strings():
    cfg = VisualizerConfig.from_mapping({"grid_rows": "12", "muted": "yes", "animation_speed_ms": "5"})
    assert cfg.grid_rows == 12
    assert cfg.muted is True
    assert cfg.animation_speed_ms == 5.0


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError, match="colour"):
        VisualizerConfig.from_mapping({"colour": "red"})


def test_from_env(monkeypatch):
    monkeypatch.setenv("VISUALIZER_GRID_COLS", "30")
    monkeypatch.setenv("VISUALIZER_SORT_SPEED", "4x")
    cfg = VisualizerConfig.from_env()
    assert cfg.grid_cols == 30
    assert cfg.sort_speed == "4x"


def test_with_overrides_returns_copy():
    base = VisualizerConfig()
    fast = base.with_overrides(animation_speed_ms=0)
    assert fast.animation_speed_ms == 0
    assert base.animation_speed_ms == 30
