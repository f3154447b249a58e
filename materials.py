from typing import NamedTuple

import numpy as np


class _RGB(NamedTuple):
    r: int
    g: int
    b: int


class Color(_RGB):
    """An 8-bit RGB color."""
    __slots__ = ()

    def __new__(cls, r, g, b):
        channels = (int(r), int(g), int(b))
        if any(not 0 <= c <= 255 for c in channels):
            raise ValueError(f"color channels must be in 0..255, got {channels}")
        return super().__new__(cls, *channels)

    def as_vector(self):
        """Return the color as a float triplet in [0, 1]."""
        return np.array([self.r, self.g, self.b], dtype=np.float64) / 255.0

    @classmethod
    def from_vector(cls, v):
        """Quantize a float triplet to a color, clamping each channel to [0, 1] first."""
        c = np.round(np.clip(np.nan_to_num(v), 0.0, 1.0) * 255.0).astype(int)
        return cls(c[0], c[1], c[2])


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
# flat color used when the scene has no background image
BACKGROUND_COLOR = Color(50, 180, 200)


class Material:
    """Surface parameters; read-only once created."""
    __slots__ = ('_diffuse_color', '_albedo', '_specular_exponent', '_refractive_index')

    def __init__(self, diffuse_color, albedo=(1., 0., 0., 0.), specular_exponent=1., refractive_index=1.):
        """
        Create a new material with the given parameters.

        Parameters:
          diffuse_color : Color -- base color lit by the diffuse term
          albedo : (4,) -- weights of the diffuse, specular, reflection and refraction contributions
          specular_exponent : float -- Phong shininess
          refractive_index : float -- index of refraction (1.0 for air, 1.5 for glass)
        """
        albedo = tuple(float(a) for a in albedo)
        if len(albedo) != 4:
            raise ValueError(f"albedo needs 4 components, got {len(albedo)}")
        if any(a < 0 for a in albedo):
            raise ValueError(f"albedo components must be non-negative, got {albedo}")
        if specular_exponent <= 0:
            raise ValueError(f"specular exponent must be positive, got {specular_exponent}")
        if refractive_index < 1:
            raise ValueError(f"refractive index must be at least 1, got {refractive_index}")
        if len(diffuse_color) != 3:
            raise ValueError(f"diffuse color needs 3 channels, got {diffuse_color}")

        self._diffuse_color = Color(*diffuse_color)
        self._albedo = albedo
        self._specular_exponent = float(specular_exponent)
        self._refractive_index = float(refractive_index)

    @property
    def diffuse_color(self):
        return self._diffuse_color

    @property
    def albedo(self):
        return self._albedo

    @property
    def specular_exponent(self):
        return self._specular_exponent

    @property
    def refractive_index(self):
        return self._refractive_index

    def __eq__(self, other):
        if not isinstance(other, Material):
            return NotImplemented
        return (self.diffuse_color, self.albedo, self.specular_exponent, self.refractive_index) == \
            (other.diffuse_color, other.albedo, other.specular_exponent, other.refractive_index)

    def __hash__(self):
        return hash((self.diffuse_color, self.albedo, self.specular_exponent, self.refractive_index))

    def __repr__(self):
        return (f"Material({self.diffuse_color}, albedo={self.albedo}, "
                f"specular_exponent={self.specular_exponent}, refractive_index={self.refractive_index})")




IVORY = Material(Color(102, 102, 77), (0.6, 0.3, 0.1, 0.0), 50.)
RED_RUBBER = Material(Color(77, 26, 26), (0.9, 0.1, 0.0, 0.0), 10.)
MIRROR = Material(WHITE, (0.0, 10.0, 0.8, 0.0), 1425.)
GLASS = Material(Color(153, 179, 204), (0.0, 0.5, 0.1, 0.8), 125., 1.5)
GREEN = Material(Color(40, 140, 60), (0.9, 0.1, 0.0, 0.0), 10.)
PURPLE = Material(Color(110, 50, 140), (0.6, 0.3, 0.1, 0.0), 50.)
ORANGE = Material(Color(200, 110, 30), (0.6, 0.3, 0.1, 0.0), 50.)
RED = Material(Color(255, 0, 0))

PRESETS = {
    'ivory': IVORY,
    'red_rubber': RED_RUBBER,
    'mirror': MIRROR,
    'glass': GLASS,
    'green': GREEN,
    'purple': PURPLE,
    'orange': ORANGE,
    'red': RED,
}


def preset(name):
    """Look up a named material, ignoring case."""
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise KeyError(f"unknown material preset {name!r}; known presets: {', '.join(sorted(PRESETS))}") from None
