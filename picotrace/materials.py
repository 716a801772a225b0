"""Surface materials: constant parameter sets and texture-driven materials."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

Vec2 = Sequence[float]
Vec3 = tuple[float, float, float]

_DIELECTRIC_F0: Vec3 = (0.04, 0.04, 0.04)
_UP: Vec3 = (0.0, 1.0, 0.0)
_BLACK: Vec3 = (0.0, 0.0, 0.0)


def _vec3(values: Sequence[float]) -> Vec3:
    return (float(values[0]), float(values[1]), float(values[2]))


def _scale(v: Sequence[float], factor: float) -> Vec3:
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def _lerp(a: Sequence[float], b: Sequence[float], t: float) -> Vec3:
    return (
        a[0] + (b[0] - a[0]) * t,
        a[1] + (b[1] - a[1]) * t,
        a[2] + (b[2] - a[2]) * t,
    )


def _metalness_diffuse(albedo: Sequence[float], metalness: float) -> Vec3:
    return _scale(albedo, (1.0 - 0.04) * (1.0 - metalness))


def _metalness_specular(albedo: Sequence[float], metalness: float) -> Vec3:
    return _lerp(_DIELECTRIC_F0, albedo, metalness)


def _gloss_to_roughness(gloss: float) -> float:
    return 1.0 - gloss * gloss


@dataclass(frozen=True)
class EvaluatedMaterial:
    """Material parameters at one surface point."""

    diffuse: Vec3 = _BLACK
    specular: Vec3 = _BLACK
    roughness: float = 1.0
    normal: Vec3 = _UP
    emissive: Vec3 = _BLACK


class Texture(Protocol):
    """What a material needs from a texture image."""

    def sample(self, uv: Vec2) -> float: ...

    def sample3(self, uv: Vec2) -> Sequence[float]: ...

    def sample4(self, uv: Vec2) -> Sequence[float]: ...

    def residence_size(self) -> int: ...

    def is_resident(self) -> bool: ...

    def make_resident(self, memory: Any) -> None: ...

    def make_nonresident(self) -> None: ...


class Material(abc.ABC):
    """A surface material whose data may be loaded into and out of memory."""

    @abc.abstractmethod
    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        """Material parameters at texture coordinate ``uv``."""

    @abc.abstractmethod
    def is_light(self) -> bool:
        """True if the material emits light."""

    @abc.abstractmethod
    def residence_size(self) -> int:
        """Bytes needed to hold the material's data in memory."""

    @abc.abstractmethod
    def is_resident(self) -> bool:
        """True if the material's data is loaded."""

    @abc.abstractmethod
    def make_resident(self, memory: Any) -> None:
        """Load the material's data into ``memory``."""

    @abc.abstractmethod
    def make_nonresident(self) -> None:
        """Release the material's data."""


class ConstantMaterial(Material):
    """A material with no external data; always resident."""

    _backing_memory: Any = None

    def residence_size(self) -> int:
        return 0

    def is_resident(self) -> bool:
        return True

    def make_resident(self, memory: Any) -> None:
        # Nothing needs to be copied; only the memory handed over is kept.
        self._backing_memory = memory

    def make_nonresident(self) -> None:
        self._backing_memory = None


class ConstantTransparentMaterial(ConstantMaterial):
    """A constant material that lets light through."""

    def __init__(self, transparency: float, index_of_refraction: float) -> None:
        self._transparency = float(transparency)
        self._index_of_refraction = float(index_of_refraction)

    @property
    def transparency(self) -> float:
        return self._transparency

    @property
    def index_of_refraction(self) -> float:
        return self._index_of_refraction


class _ColouredConstantMaterial(ConstantMaterial):
    def __init__(self, colour: Sequence[float]) -> None:
        self._colour = _vec3(colour)

    @property
    def colour(self) -> Vec3:
        return self._colour

    def is_light(self) -> bool:
        return False


class SmoothMetalMaterial(_ColouredConstantMaterial):
    """Polished metal tinted by ``colour``."""

    def __init__(self, colour: Sequence[float]) -> None:
        super().__init__(colour)

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        return EvaluatedMaterial(_DIELECTRIC_F0, self._colour, 0.05, _UP, _BLACK)


class RoughMetalMaterial(_ColouredConstantMaterial):
    """Rough metal tinted by ``colour``."""

    def __init__(self, colour: Sequence[float]) -> None:
        super().__init__(colour)

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        return EvaluatedMaterial(_DIELECTRIC_F0, self._colour, 0.8, _UP, _BLACK)


class MattPlasticMaterial(_ColouredConstantMaterial):
    """Rough plastic with diffuse ``colour``."""

    def __init__(self, colour: Sequence[float]) -> None:
        super().__init__(colour)

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        return EvaluatedMaterial(self._colour, _DIELECTRIC_F0, 0.8, _UP, _BLACK)


class EmissiveMaterial(ConstantMaterial):
    """A grey light-emitting surface."""

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        return EvaluatedMaterial((0.8, 0.8, 0.8), _BLACK, 0.8, _UP, (0.5, 0.5, 0.5))

    def is_light(self) -> bool:
        return True


def _emits(material: EvaluatedMaterial) -> bool:
    return any(c > 0.0 for c in material.emissive)


class ConstantMetalnessRoughnessMaterial(ConstantMaterial):
    """Metalness/roughness parameters that are the same everywhere."""

    def __init__(
        self,
        albedo: Sequence[float],
        metalness: float,
        roughness: float,
        emissive: Sequence[float],
    ) -> None:
        self._material = EvaluatedMaterial(
            diffuse=_metalness_diffuse(albedo, metalness),
            specular=_metalness_specular(albedo, metalness),
            roughness=float(roughness),
            emissive=_vec3(emissive),
        )

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        return self._material

    def is_light(self) -> bool:
        return _emits(self._material)


class ConstantDiffuseSpecularMaterial(ConstantMaterial):
    """Diffuse/specular/gloss parameters that are the same everywhere."""

    def __init__(
        self,
        diffuse: Sequence[float],
        specular: Sequence[float],
        gloss: float,
        emissive: Sequence[float],
    ) -> None:
        self._material = EvaluatedMaterial(
            diffuse=_vec3(diffuse),
            specular=_vec3(specular),
            roughness=_gloss_to_roughness(gloss),
            emissive=_vec3(emissive),
        )

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        return self._material

    def is_light(self) -> bool:
        return _emits(self._material)


class ConstantTransparentDiffuseSpecularMaterial(ConstantTransparentMaterial):
    """Transparent material from constant diffuse/specular/gloss parameters."""

    def __init__(
        self,
        diffuse: Sequence[float],
        specular: Sequence[float],
        gloss: float,
        transparency: float,
        index_of_refraction: float,
    ) -> None:
        super().__init__(transparency, index_of_refraction)
        self._material = EvaluatedMaterial(
            diffuse=_vec3(diffuse),
            specular=_vec3(specular),
            roughness=_gloss_to_roughness(gloss),
            emissive=_BLACK,
        )

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        return self._material

    def is_light(self) -> bool:
        return False


class ConstantTransparentMetalnessRoughnessMaterial(ConstantTransparentMaterial):
    """Transparent material from constant metalness/roughness parameters."""

    def __init__(
        self,
        albedo: Sequence[float],
        metalness: float,
        roughness: float,
        transparency: float,
        index_of_refraction: float,
    ) -> None:
        super().__init__(transparency, index_of_refraction)
        self._material = EvaluatedMaterial(
            diffuse=_metalness_diffuse(albedo, metalness),
            specular=_metalness_specular(albedo, metalness),
            roughness=float(roughness),
            emissive=_BLACK,
        )

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        return self._material

    def is_light(self) -> bool:
        return False


class _TexturedMaterial(Material):
    """Shared residency handling over an ordered set of optional textures."""

    @abc.abstractmethod
    def _textures(self) -> list[Optional[Texture]]:
        """The material's textures in residency order."""

    def residence_size(self) -> int:
        return sum(t.residence_size() for t in self._textures() if t is not None)

    def is_resident(self) -> bool:
        return any(t is not None and t.is_resident() for t in self._textures())

    def make_nonresident(self) -> None:
        for texture in self._textures():
            if texture is not None:
                texture.make_nonresident()


class MetalnessRoughnessMaterial(_TexturedMaterial):
    """Metalness/roughness material read from textures."""

    def __init__(
        self,
        albedo: Texture,
        metalness: Optional[Texture],
        roughness: Optional[Texture],
        emissive: Optional[Texture],
    ) -> None:
        self._combined_metalness_roughness = False
        self._albedo = albedo
        self._metalness = metalness
        self._roughness = roughness
        self._emissive = emissive

    @classmethod
    def combined(
        cls,
        albedo: Texture,
        combined_metalness_roughness: Optional[Texture],
        emissive: Optional[Texture],
    ) -> "MetalnessRoughnessMaterial":
        """Build from one texture holding roughness in y and metalness in z."""
        material = cls(albedo, combined_metalness_roughness, None, emissive)
        material._combined_metalness_roughness = True
        return material

    def _textures(self) -> list[Optional[Texture]]:
        return [self._albedo, self._metalness, self._roughness, self._emissive]

    def make_resident(self, memory: Any) -> None:
        view = memoryview(memory)
        offset = 0
        for texture in (self._albedo, self._metalness, self._roughness):
            if texture is not None:
                texture.make_resident(view[offset:])
                offset += texture.residence_size()
        if self._emissive is not None:
            # The emissive texture is placed after skipping its own size.
            offset += self._emissive.residence_size()
            self._emissive.make_resident(view[offset:])

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        albedo = self._albedo.sample4(uv)
        metalness = 0.0
        roughness = 1.0
        if self._combined_metalness_roughness:
            if self._metalness is not None:
                combined = self._metalness.sample4(uv)
                metalness = float(combined[2])
                roughness = float(combined[1])
        else:
            if self._metalness is not None:
                metalness = float(self._metalness.sample(uv))
            if self._roughness is not None:
                roughness = float(self._roughness.sample(uv))

        emissive = _BLACK
        if self._emissive is not None:
            emissive = _vec3(self._emissive.sample3(uv))

        return EvaluatedMaterial(
            diffuse=_metalness_diffuse(albedo, metalness),
            specular=_metalness_specular(albedo, metalness),
            roughness=roughness,
            normal=_UP,
            emissive=emissive,
        )

    def is_light(self) -> bool:
        return self._emissive is not None


class SpecularGlossMaterial(_TexturedMaterial):
    """Diffuse/specular/gloss material read from textures."""

    def __init__(
        self,
        diffuse: Texture,
        specular: Optional[Texture],
        gloss: Optional[Texture],
        emissive: Optional[Texture],
    ) -> None:
        self._diffuse = diffuse
        self._specular = specular
        self._gloss = gloss
        self._emissive = emissive

    def _textures(self) -> list[Optional[Texture]]:
        return [self._diffuse, self._specular, self._gloss, self._emissive]

    def make_resident(self, memory: Any) -> None:
        view = memoryview(memory)
        offset = 0
        for texture in self._textures():
            if texture is not None:
                texture.make_resident(view[offset:])
                offset += texture.residence_size()

    def evaluate_material(self, uv: Vec2) -> EvaluatedMaterial:
        diffuse = _vec3(self._diffuse.sample4(uv))
        specular = _BLACK
        if self._specular is not None:
            specular = _vec3(self._specular.sample3(uv))
        emissive = _BLACK
        if self._emissive is not None:
            emissive = _vec3(self._emissive.sample3(uv))
        roughness = 1.0
        if self._gloss is not None:
            roughness = _gloss_to_roughness(float(self._gloss.sample(uv)))
        return EvaluatedMaterial(diffuse, specular, roughness, _UP, emissive)

    def is_light(self) -> bool:
        return self._emissive is not None