"""
Palette generation entry point tests
"""

import numpy as np
import pytest

from palette_gen import DistanceType, GenerateOptions, generate, generate_with_options
from palette_gen.gamut import is_valid_color
from palette_gen.colour_convert import lab_to_rgb
from palette_gen.mode import resolve_strategy


def bluish(rgb):
    r, g, b = rgb
    return b > r and b > g


class TestGenerate:
    @pytest.mark.parametrize("strategy", ["kmeans", "force"])
    def test_count_and_predicate(self, strategy):
        palette = generate(4, bluish, strategy=strategy, quality=2, seed=21)
        assert len(palette) == 4
        for colour in palette:
            assert is_valid_color(colour)
            assert bluish(tuple(lab_to_rgb(colour)))

    def test_returns_float_triples(self):
        palette = generate(3, quality=1, seed=0)
        assert isinstance(palette, tuple)
        for colour in palette:
            assert isinstance(colour, tuple)
            assert len(colour) == 3
            assert all(isinstance(v, float) for v in colour)

    @pytest.mark.parametrize("strategy", ["kmeans", "force"])
    def test_same_seed_same_palette(self, strategy):
        first = generate(5, strategy=strategy, quality=2, seed=99)
        second = generate(5, strategy=strategy, quality=2, seed=99)
        assert first == second

    def test_caller_rng(self):
        first = generate(3, quality=1, rng=np.random.default_rng(4))
        second = generate(3, quality=1, seed=4)
        assert first == second

    def test_seed_and_rng_rejected(self):
        with pytest.raises(ValueError):
            generate(3, seed=1, rng=np.random.default_rng(1))

    def test_single_colour(self):
        palette = generate(1, quality=1, seed=3)
        assert len(palette) == 1
        assert is_valid_color(palette[0])

    def test_compromise_distance(self):
        palette = generate(3, quality=1, distance_type=DistanceType.COMPROMISE, seed=5)
        assert len(palette) == 3
        assert all(is_valid_color(c) for c in palette)

    def test_colour_blind_distance_force(self):
        palette = generate(
            3, strategy="force", quality=1, distance_type=DistanceType.DEUTERANOPE, seed=8
        )
        assert all(is_valid_color(c) for c in palette)

    @pytest.mark.parametrize("count", [0, -2])
    def test_bad_count(self, count):
        with pytest.raises(ValueError):
            generate(count)

    @pytest.mark.parametrize("count", [2.5, "4", True])
    def test_count_must_be_int(self, count):
        with pytest.raises(TypeError):
            generate(count)

    def test_bad_quality(self):
        with pytest.raises(ValueError):
            generate(3, quality=0)

    def test_bad_strategy(self):
        with pytest.raises(ValueError):
            generate(3, strategy="annealing")

    def test_bad_distance_type(self):
        with pytest.raises(TypeError):
            generate(3, distance_type="cmc")

    def test_accept_must_be_callable(self):
        with pytest.raises(TypeError):
            generate(3, accept=42, seed=1)

    def test_debug_output(self, capsys):
        generate(2, quality=1, seed=2, debug=True)
        out = capsys.readouterr().out
        assert "[debug] [generate] Colours: 2" in out
        assert "[debug] palette: #" in out

    def test_quiet_by_default(self, capsys):
        generate(2, quality=1, seed=2)
        assert capsys.readouterr().out == ""


class TestOptions:
    def test_defaults(self):
        opts = GenerateOptions(count=3)
        assert opts.strategy == "kmeans"
        assert opts.quality == 50
        assert opts.high_resolution is False
        assert opts.distance_type is DistanceType.EUCLIDEAN

    def test_strategy_alias_is_resolved(self):
        assert GenerateOptions(count=3, strategy="Force-Directed").strategy == "force"

    def test_from_mapping(self):
        opts = GenerateOptions.from_mapping(
            {"count": 6, "strategy": "k-means", "distance_type": "protanope", "seed": 7}
        )
        assert opts.count == 6
        assert opts.strategy == "kmeans"
        assert opts.distance_type is DistanceType.PROTANOPE
        assert opts.seed == 7

    def test_from_mapping_unknown_key(self):
        with pytest.raises(ValueError, match="colour"):
            GenerateOptions.from_mapping({"count": 2, "colours": 3})

    def test_from_mapping_unknown_distance(self):
        with pytest.raises(ValueError):
            GenerateOptions.from_mapping({"count": 2, "distance_type": "manhattan"})

    def test_generate_with_options_matches_generate(self):
        opts = GenerateOptions(count=3, quality=1, seed=12)
        assert generate_with_options(opts) == generate(3, quality=1, seed=12)


@pytest.mark.parametrize(
    "name, expected",
    [("kmeans", "kmeans"), (" K-Means ", "kmeans"), ("force-vector", "force")],
)
def test_resolve_strategy(name, expected):
    assert resolve_strategy(name) == expected
