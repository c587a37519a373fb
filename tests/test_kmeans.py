"""
K-means strategy tests
"""

import numpy as np
import pytest

from palette_gen.colour_convert import lab_to_rgb
from palette_gen.colour_distance import DistanceType
from palette_gen.constants import KMEANS_INIT_RETRIES
from palette_gen.core_types import accept_all
from palette_gen.gamut import valid_lab_mask
from palette_gen.kmeans import (
    UNASSIGNED,
    _assign_samples,
    _initial_centroids,
    _nearest_sample,
    _update_centroids,
    build_sample_lattice,
    run_kmeans,
)
from palette_gen.sampling import make_lab_check, random_lab


def reject_all(rgb):
    return False


def warm(rgb):
    return rgb[0] > rgb[2]


class TestLattice:
    def test_standard_lattice(self):
        samples = build_sample_lattice(accept_all)
        assert samples.ndim == 2 and samples.shape[1] == 3
        assert 0 < samples.shape[0] < 21 * 21 * 21
        assert np.all(valid_lab_mask(samples))
        assert set(np.unique(samples[:, 0]) % 5) == {0.0}
        assert set(np.unique(samples[:, 1]) % 10) == {0.0}
        assert set(np.unique(samples[:, 2]) % 10) == {0.0}

    def test_order_is_l_then_a_then_b(self):
        samples = build_sample_lattice(accept_all)
        order = np.lexsort((samples[:, 2], samples[:, 1], samples[:, 0]))
        np.testing.assert_array_equal(order, np.arange(samples.shape[0]))

    def test_high_resolution_is_denser(self):
        coarse = build_sample_lattice(accept_all)
        fine = build_sample_lattice(accept_all, high_resolution=True)
        assert fine.shape[0] > coarse.shape[0]
        assert set(np.unique(fine[:, 1]) % 5) == {0.0}

    def test_predicate_filters_points(self):
        samples = build_sample_lattice(warm)
        rgb = lab_to_rgb(samples)
        assert samples.shape[0] > 0
        assert np.all(rgb[:, 0] > rgb[:, 2])

    def test_reject_all_gives_empty_lattice(self):
        assert build_sample_lattice(reject_all).shape == (0, 3)


class TestInitialCentroids:
    def test_valid_draws(self, rng):
        centroids, kept_invalid = _initial_centroids(4, make_lab_check(accept_all), rng)
        assert kept_invalid == 0
        assert np.all(valid_lab_mask(centroids))

    def test_bounded_retries_keep_last_draw(self):
        centroids, kept_invalid = _initial_centroids(
            2, make_lab_check(reject_all), np.random.default_rng(7)
        )
        assert kept_invalid == 2

        replay = np.random.default_rng(7)
        draws = [random_lab(replay) for _ in range(2 * (KMEANS_INIT_RETRIES + 1))]
        np.testing.assert_array_equal(centroids[0], draws[KMEANS_INIT_RETRIES])
        np.testing.assert_array_equal(centroids[1], draws[-1])


class TestRunKMeans:
    def test_count_and_validity(self, rng):
        palette = run_kmeans(5, warm, 3, False, DistanceType.CMC, rng)
        assert len(palette) == 5
        check = make_lab_check(warm)
        assert all(check(c) for c in palette)

    def test_centroids_are_distinct(self, rng):
        palette = np.array(run_kmeans(6, accept_all, 4, False, DistanceType.EUCLIDEAN, rng))
        assert np.unique(palette, axis=0).shape[0] == 6

    def test_compromise_distance(self, rng):
        palette = run_kmeans(3, accept_all, 1, False, DistanceType.COMPROMISE, rng)
        assert len(palette) == 3
        assert np.all(valid_lab_mask(np.array(palette)))

    def test_same_seed_same_result(self):
        first = run_kmeans(4, accept_all, 3, False, DistanceType.CMC, np.random.default_rng(3))
        second = run_kmeans(4, accept_all, 3, False, DistanceType.CMC, np.random.default_rng(3))
        np.testing.assert_array_equal(np.array(first), np.array(second))

    def test_empty_lattice_still_returns_count(self, rng):
        palette = run_kmeans(3, reject_all, 2, False, DistanceType.EUCLIDEAN, rng)
        assert len(palette) == 3

    def test_debug_output(self, rng, capsys):
        run_kmeans(2, accept_all, 1, False, DistanceType.EUCLIDEAN, rng, debug=True)
        out = capsys.readouterr().out
        assert "[debug] [kmeans]" in out
        assert "Samples:" in out


def test_unassigned_is_not_an_index():
    assert UNASSIGNED < 0


def strong_red(rgb):
    r, g, b = rgb
    return r > 200.0 and g < 80.0 and b < 80.0


OUT_OF_GAMUT = [50.0, 120.0, 0.0]


class TestAssignment:
    SAMPLES = np.array([[50.0, 10.0, 10.0], [60.0, -10.0, 5.0]])

    def test_unmeasurable_centroid_is_skipped(self):
        centroids = np.array([OUT_OF_GAMUT, [52.0, 10.0, 10.0]])
        previous = np.full(2, UNASSIGNED, dtype=np.int64)
        assignment = _assign_samples(self.SAMPLES, centroids, previous, DistanceType.PROTANOPE)
        np.testing.assert_array_equal(assignment, [1, 1])

    def test_no_measurable_centroid_keeps_previous(self):
        centroids = np.array([OUT_OF_GAMUT])
        previous = np.array([UNASSIGNED, 0], dtype=np.int64)
        assignment = _assign_samples(self.SAMPLES, centroids, previous, DistanceType.DEUTERANOPE)
        np.testing.assert_array_equal(assignment, previous)

    def test_nearest_sample_skips_unmeasurable_target(self):
        pool = np.ones(2, dtype=bool)
        target = np.array(OUT_OF_GAMUT)
        assert _nearest_sample(self.SAMPLES, pool, target, DistanceType.TRITANOPE) == -1
        assert _nearest_sample(self.SAMPLES, pool, target, DistanceType.EUCLIDEAN) == 0


def lattice_check(samples):
    def check(lab):
        return bool(np.any(np.all(samples == lab, axis=1)))

    return check


class TestUpdate:
    def test_rejected_mean_takes_nearest_unclaimed_sample(self):
        samples = np.array(
            [[50.0, 0.0, 0.0], [58.0, 0.0, 0.0], [70.0, 0.0, 0.0], [63.0, 0.0, 0.0]]
        )
        centroids = np.zeros((2, 3))
        assignment = np.array([1, 0, 1, UNASSIGNED])
        fallbacks = _update_centroids(
            samples, centroids, assignment, lattice_check(samples), DistanceType.EUCLIDEAN
        )
        # mean of centroid 1 is (60, 0, 0); (58, 0, 0) is already taken by centroid 0
        assert fallbacks == 1
        np.testing.assert_array_equal(centroids, [[58.0, 0.0, 0.0], [63.0, 0.0, 0.0]])

    def test_all_samples_claimed_takes_nearest_overall(self):
        samples = np.array([[50.0, 0.0, 0.0], [60.0, 0.0, 0.0]])
        centroids = np.full((3, 3), 7.0)
        assignment = np.array([0, 1])
        fallbacks = _update_centroids(
            samples, centroids, assignment, lattice_check(samples), DistanceType.EUCLIDEAN
        )
        assert fallbacks == 1
        np.testing.assert_array_equal(
            centroids, [[50.0, 0.0, 0.0], [60.0, 0.0, 0.0], [50.0, 0.0, 0.0]]
        )

    def test_more_colours_than_samples(self, rng):
        samples = build_sample_lattice(strong_red)
        n_samples = samples.shape[0]
        assert n_samples > 0

        palette = np.array(
            run_kmeans(n_samples + 3, strong_red, 3, False, DistanceType.EUCLIDEAN, rng)
        )
        assert palette.shape == (n_samples + 3, 3)
        check = make_lab_check(strong_red)
        assert all(check(c) for c in palette)
        assert np.unique(palette, axis=0).shape[0] <= n_samples
