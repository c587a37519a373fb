import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_labs(rng):
    """Random in-gamut Lab colours (rows), built from random sRGB."""
    from palette_gen.colour_convert import rgb_to_lab

    rgb = rng.uniform(0.0, 255.0, size=(200, 3))
    return rgb_to_lab(rgb)
