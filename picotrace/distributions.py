"""Direction distributions in tangent space (z is the surface normal)."""

from __future__ import annotations

import abc
import math
from typing import Sequence

Vec3 = tuple[float, float, float]


def _normalize(v: Sequence[float]) -> Vec3:
    length = math.sqrt(sum(c * c for c in v))
    return (v[0] / length, v[1] / length, v[2] / length)


def _cos2_theta(w: Sequence[float]) -> float:
    return w[2] * w[2]


def _sin2_theta(w: Sequence[float]) -> float:
    return max(0.0, 1.0 - _cos2_theta(w))


def _tan2_theta(w: Sequence[float]) -> float:
    cos2 = _cos2_theta(w)
    if cos2 == 0.0:
        return math.inf
    return _sin2_theta(w) / cos2


def _cos_phi(w: Sequence[float]) -> float:
    sin_theta = math.sqrt(_sin2_theta(w))
    return 1.0 if sin_theta == 0.0 else min(max(w[0] / sin_theta, -1.0), 1.0)


def _sin_phi(w: Sequence[float]) -> float:
    sin_theta = math.sqrt(_sin2_theta(w))
    return 0.0 if sin_theta == 0.0 else min(max(w[1] / sin_theta, -1.0), 1.0)


def _same_hemisphere(a: Sequence[float], b: Sequence[float]) -> bool:
    return a[2] * b[2] > 0.0


def _spherical_direction(sin_theta: float, cos_theta: float, phi: float) -> Vec3:
    return (sin_theta * math.cos(phi), sin_theta * math.sin(phi), cos_theta)


class Distribution(abc.ABC):
    """A distribution of half-vectors or directions about the normal."""

    @abc.abstractmethod
    def sample(self, xi: Sequence[float], view: Sequence[float], roughness: float) -> Vec3:
        """Map a 2D sample ``xi`` in [0, 1) to a unit direction."""

    @abc.abstractmethod
    def pdf(self, wo: Sequence[float], h: Sequence[float], roughness: float) -> float:
        """Probability density of drawing ``h``."""


class CosWeightedHemisphereDistribution(Distribution):
    """Cosine-weighted directions over the upper hemisphere."""

    def sample(self, xi: Sequence[float], view: Sequence[float], roughness: float) -> Vec3:
        u1, u2 = xi[0], xi[1]
        r = math.sqrt(u1)
        phi = u2 * math.pi * 2.0
        return _normalize((r * math.cos(phi), r * math.sin(phi), math.sqrt(max(0.0, 1.0 - u1))))

    def pdf(self, wo: Sequence[float], h: Sequence[float], roughness: float) -> float:
        return max(0.0, h[2] / math.pi)


class BeckmannDistribution(Distribution):
    """Beckmann microfacet normal distribution."""

    def sample(self, xi: Sequence[float], view: Sequence[float], roughness: float) -> Vec3:
        alpha = roughness * roughness
        remaining = 1.0 - xi[0]
        log_sample = 0.0 if remaining == 0.0 else math.log(remaining)
        tan2_theta = -alpha * alpha * log_sample
        phi = xi[1] * 2.0 * math.pi

        cos_theta = 1.0 / math.sqrt(1.0 + tan2_theta)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
        h = _spherical_direction(sin_theta, cos_theta, phi)
        if not _same_hemisphere(view, h):
            h = (-h[0], -h[1], -h[2])
        return _normalize(h)

    def pdf(self, wo: Sequence[float], h: Sequence[float], roughness: float) -> float:
        d = min(max(self.microfacet_d(h, roughness), 0.0), 1.0)
        return d * abs(h[2])

    def roughness_to_alpha(self, roughness: float) -> float:
        """Map perceptual roughness to the Beckmann alpha parameter."""
        x = math.log(max(roughness, 1e-3))
        return (
            1.62142
            + 0.819955 * x
            + 0.1734 * x * x
            + 0.0171201 * x * x * x
            + 0.000640711 * x * x * x * x
        )

    def microfacet_d(self, wh: Sequence[float], roughness: float) -> float:
        """Density of microfacets oriented along ``wh``."""
        alpha_x = self.roughness_to_alpha(roughness)
        alpha_y = alpha_x

        tan2_theta = _tan2_theta(wh)
        if math.isinf(tan2_theta):
            return 0.0
        cos4_theta = _cos2_theta(wh) * _cos2_theta(wh)
        cos2_phi = _cos_phi(wh) ** 2
        sin2_phi = _sin_phi(wh) ** 2
        exponent = -tan2_theta * (cos2_phi / (alpha_x * alpha_x) + sin2_phi / (alpha_y * alpha_y))
        return math.exp(exponent) / (math.pi * alpha_x * alpha_y * cos4_theta)