import math

import pytest

from picotrace.distributions import (
    BeckmannDistribution,
    CosWeightedHemisphereDistribution,
    Distribution,
)

SAMPLES = [(0.0, 0.0), (0.25, 0.5), (0.5, 0.1), (0.9, 0.75), (0.999, 0.33)]


def length(v):
    return math.sqrt(sum(c * c for c in v))


def test_distribution_is_abstract():
    with pytest.raises(TypeError):
        Distribution()


@pytest.mark.parametrize("xi", SAMPLES)
def test_cos_weighted_samples_are_unit_and_upper(xi):
    h = CosWeightedHemisphereDistribution().sample(xi, (0.0, 0.0, 1.0), 0.5)
    assert length(h) == pytest.approx(1.0)
    assert h[2] >= 0.0


def test_cos_weighted_zero_sample_is_normal():
    h = CosWeightedHemisphereDistribution().sample((0.0, 0.3), (0.0, 0.0, 1.0), 0.5)
    assert h == pytest.approx((0.0, 0.0, 1.0))


def test_cos_weighted_pdf():
    dist = CosWeightedHemisphereDistribution()
    assert dist.pdf((0, 0, 1), (0.0, 0.0, 1.0), 0.5) == pytest.approx(1.0 / math.pi)
    assert dist.pdf((0, 0, 1), (0.0, 0.0, -1.0), 0.5) == 0.0


@pytest.mark.parametrize("xi", SAMPLES)
@pytest.mark.parametrize("view", [(0.0, 0.6, 0.8), (0.3, 0.0, -0.95)])
def test_beckmann_samples_follow_view_hemisphere(xi, view):
    h = BeckmannDistribution().sample(xi, view, 0.6)
    assert length(h) == pytest.approx(1.0)
    assert h[2] * view[2] > 0.0


def test_beckmann_sample_at_one_is_the_normal():
    h = BeckmannDistribution().sample((1.0, 0.4), (0.0, 0.0, -1.0), 0.5)
    assert h == pytest.approx((0.0, 0.0, -1.0))


def test_roughness_to_alpha_at_one_is_constant_term():
    assert BeckmannDistribution().roughness_to_alpha(1.0) == pytest.approx(1.62142)


def test_roughness_to_alpha_clamps_small_roughness():
    dist = BeckmannDistribution()
    assert dist.roughness_to_alpha(0.0) == dist.roughness_to_alpha(1e-3)


def test_microfacet_d_is_zero_at_grazing():
    assert BeckmannDistribution().microfacet_d((1.0, 0.0, 0.0), 0.5) == 0.0


@pytest.mark.parametrize("h", [(0.0, 0.0, 1.0), (0.6, 0.0, 0.8), (0.0, -0.28, 0.96), (0.6, 0.0, -0.8)])
def test_beckmann_pdf_bounded_by_cosine(h):
    value = BeckmannDistribution().pdf((0.0, 0.0, 1.0), h, 0.7)
    assert 0.0 <= value <= abs(h[2]) + 1e-12


def test_beckmann_pdf_ignores_outgoing_direction():
    dist = BeckmannDistribution()
    h = (0.6, 0.0, 0.8)
    assert dist.pdf((0.0, 0.0, 1.0), h, 0.4) == dist.pdf((0.8, 0.0, 0.6), h, 0.4)