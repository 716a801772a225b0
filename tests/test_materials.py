import pytest

from picotrace.materials import (
    ConstantDiffuseSpecularMaterial,
    ConstantMetalnessRoughnessMaterial,
    ConstantTransparentDiffuseSpecularMaterial,
    ConstantTransparentMaterial,
    ConstantTransparentMetalnessRoughnessMaterial,
    EmissiveMaterial,
    EvaluatedMaterial,
    Material,
    MattPlasticMaterial,
    MetalnessRoughnessMaterial,
    RoughMetalMaterial,
    SmoothMetalMaterial,
    SpecularGlossMaterial,
)

UV = (0.25, 0.75)


class FakeTexture:
    def __init__(self, value=(0.5, 0.5, 0.5, 1.0), size=0, resident=False):
        self.value = tuple(value)
        self.size = size
        self.resident = resident
        self.received_lengths = []

    def sample(self, uv):
        return self.value[0]

    def sample3(self, uv):
        return self.value[:3]

    def sample4(self, uv):
        return self.value

    def residence_size(self):
        return self.size

    def is_resident(self):
        return self.resident

    def make_resident(self, memory):
        self.received_lengths.append(len(memory))
        self.resident = True

    def make_nonresident(self):
        self.resident = False


def assert_vec(actual, expected):
    assert actual == pytest.approx(expected)


def test_material_is_abstract():
    with pytest.raises(TypeError):
        Material()


def test_smooth_metal():
    material = SmoothMetalMaterial((0.9, 0.6, 0.3))
    result = material.evaluate_material(UV)
    assert_vec(result.diffuse, (0.04, 0.04, 0.04))
    assert_vec(result.specular, (0.9, 0.6, 0.3))
    assert result.roughness == pytest.approx(0.05)
    assert_vec(result.normal, (0.0, 1.0, 0.0))
    assert not material.is_light()


def test_rough_metal_and_plastic():
    metal = RoughMetalMaterial((0.2, 0.3, 0.4)).evaluate_material(UV)
    assert_vec(metal.specular, (0.2, 0.3, 0.4))
    assert metal.roughness == pytest.approx(0.8)
    plastic = MattPlasticMaterial((0.2, 0.3, 0.4)).evaluate_material(UV)
    assert_vec(plastic.diffuse, (0.2, 0.3, 0.4))
    assert_vec(plastic.specular, (0.04, 0.04, 0.04))
    assert plastic.roughness == pytest.approx(0.8)


def test_emissive_material():
    material = EmissiveMaterial()
    result = material.evaluate_material(UV)
    assert material.is_light()
    assert_vec(result.emissive, (0.5, 0.5, 0.5))
    assert_vec(result.diffuse, (0.8, 0.8, 0.8))


def test_constant_materials_always_resident():
    material = SmoothMetalMaterial((1.0, 1.0, 1.0))
    material.make_nonresident()
    assert material.is_resident()
    assert material.residence_size() == 0


def test_constant_metalness_roughness_dielectric():
    albedo = (0.5, 0.25, 1.0)
    result = ConstantMetalnessRoughnessMaterial(albedo, 0.0, 0.3, (0, 0, 0)).evaluate_material(UV)
    assert_vec(result.diffuse, tuple(c * 0.96 for c in albedo))
    assert_vec(result.specular, (0.04, 0.04, 0.04))
    assert result.roughness == pytest.approx(0.3)


def test_constant_metalness_roughness_full_metal():
    albedo = (0.5, 0.25, 1.0)
    material = ConstantMetalnessRoughnessMaterial(albedo, 1.0, 0.3, (0, 0, 0))
    result = material.evaluate_material(UV)
    assert_vec(result.diffuse, (0.0, 0.0, 0.0))
    assert_vec(result.specular, albedo)
    assert not material.is_light()


def test_constant_metalness_roughness_light_when_emissive():
    material = ConstantMetalnessRoughnessMaterial((1, 1, 1), 0.0, 0.5, (0.0, 0.0, 2.0))
    assert material.is_light()
    assert_vec(material.evaluate_material(UV).emissive, (0.0, 0.0, 2.0))


def test_constant_diffuse_specular_gloss():
    full_gloss = ConstantDiffuseSpecularMaterial((0.1, 0.2, 0.3), (0.4, 0.5, 0.6), 1.0, (0, 0, 0))
    result = full_gloss.evaluate_material(UV)
    assert result.roughness == pytest.approx(0.0)
    assert_vec(result.diffuse, (0.1, 0.2, 0.3))
    assert_vec(result.specular, (0.4, 0.5, 0.6))
    no_gloss = ConstantDiffuseSpecularMaterial((0.1, 0.2, 0.3), (0.4, 0.5, 0.6), 0.0, (1, 0, 0))
    assert no_gloss.evaluate_material(UV).roughness == pytest.approx(1.0)
    assert no_gloss.is_light()
    assert not full_gloss.is_light()


def test_transparent_materials():
    material = ConstantTransparentDiffuseSpecularMaterial((0.1, 0.2, 0.3), (1, 1, 1), 1.0, 0.7, 1.5)
    assert isinstance(material, ConstantTransparentMaterial)
    assert material.transparency == pytest.approx(0.7)
    assert material.index_of_refraction == pytest.approx(1.5)
    assert not material.is_light()
    assert_vec(material.evaluate_material(UV).emissive, (0.0, 0.0, 0.0))

    metal = ConstantTransparentMetalnessRoughnessMaterial((0.5, 0.5, 0.5), 1.0, 0.2, 0.4, 1.33)
    result = metal.evaluate_material(UV)
    assert_vec(result.specular, (0.5, 0.5, 0.5))
    assert_vec(result.diffuse, (0.0, 0.0, 0.0))
    assert metal.index_of_refraction == pytest.approx(1.33)


def test_evaluated_material_defaults():
    material = EvaluatedMaterial()
    assert material.roughness == 1.0
    assert material.normal == (0.0, 1.0, 0.0)


def test_metalness_roughness_separate_textures():
    albedo = FakeTexture((0.5, 0.5, 0.5, 1.0))
    metalness = FakeTexture((1.0, 0.0, 0.0, 0.0))
    roughness = FakeTexture((0.3, 0.0, 0.0, 0.0))
    material = MetalnessRoughnessMaterial(albedo, metalness, roughness, None)
    result = material.evaluate_material(UV)
    assert_vec(result.specular, (0.5, 0.5, 0.5))
    assert_vec(result.diffuse, (0.0, 0.0, 0.0))
    assert result.roughness == pytest.approx(0.3)
    assert not material.is_light()


def test_metalness_roughness_combined_uses_y_and_z():
    albedo = FakeTexture((0.5, 0.25, 1.0, 1.0))
    combined = FakeTexture((0.9, 0.6, 0.0, 0.0))
    emissive = FakeTexture((2.0, 3.0, 4.0, 1.0))
    material = MetalnessRoughnessMaterial.combined(albedo, combined, emissive)
    result = material.evaluate_material(UV)
    assert result.roughness == pytest.approx(0.6)
    assert_vec(result.diffuse, (0.5 * 0.96, 0.25 * 0.96, 1.0 * 0.96))
    assert_vec(result.emissive, (2.0, 3.0, 4.0))
    assert material.is_light()


def test_metalness_roughness_missing_textures_use_defaults():
    material = MetalnessRoughnessMaterial(FakeTexture((1.0, 1.0, 1.0, 1.0)), None, None, None)
    result = material.evaluate_material(UV)
    assert result.roughness == pytest.approx(1.0)
    assert_vec(result.specular, (0.04, 0.04, 0.04))


def test_metalness_roughness_residency():
    textures = [FakeTexture(size=s) for s in (4, 8, 2, 3)]
    material = MetalnessRoughnessMaterial(*textures)
    assert material.residence_size() == 17
    assert not material.is_resident()
    material.make_resident(bytearray(17))
    assert material.is_resident()
    assert textures[0].received_lengths == [17]
    assert textures[1].received_lengths == [13]
    assert textures[2].received_lengths == [5]
    # The emissive slot skips its own size before being placed.
    assert textures[3].received_lengths == [0]
    material.make_nonresident()
    assert not material.is_resident()


def test_specular_gloss_evaluate():
    diffuse = FakeTexture((0.1, 0.2, 0.3, 1.0))
    specular = FakeTexture((0.4, 0.5, 0.6, 1.0))
    gloss = FakeTexture((1.0, 0.0, 0.0, 0.0))
    material = SpecularGlossMaterial(diffuse, specular, gloss, None)
    result = material.evaluate_material(UV)
    assert_vec(result.diffuse, (0.1, 0.2, 0.3))
    assert_vec(result.specular, (0.4, 0.5, 0.6))
    assert result.roughness == pytest.approx(0.0)
    assert not material.is_light()


def test_specular_gloss_optional_textures():
    material = SpecularGlossMaterial(FakeTexture((0.1, 0.2, 0.3, 1.0)), None, None, FakeTexture())
    result = material.evaluate_material(UV)
    assert result.roughness == pytest.approx(1.0)
    assert_vec(result.specular, (0.0, 0.0, 0.0))
    assert material.is_light()


def test_specular_gloss_residency():
    textures = [FakeTexture(size=s) for s in (4, 8, 2, 3)]
    material = SpecularGlossMaterial(*textures)
    assert material.residence_size() == 17
    material.make_resident(bytearray(17))
    assert [t.received_lengths[0] for t in textures] == [17, 13, 5, 3]
    assert material.is_resident()
    material.make_nonresident()
    assert not any(t.resident for t in textures)


def test_residency_skips_missing_textures():
    albedo = FakeTexture(size=6)
    emissive = FakeTexture(size=5, resident=True)
    material = SpecularGlossMaterial(albedo, None, None, emissive)
    assert material.residence_size() == 11
    assert material.is_resident()