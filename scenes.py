import json
import logging
import os

import numpy as np
from materials import Material, preset, MIRROR, GLASS, GREEN, PURPLE, IVORY, ORANGE
from geometry import Sphere, Triangle, AABB
from ray import Scene, PointLight, Background
from utils import vec, read_obj_triangles

"""
Building scenes: the JSON scene description format, the built-in default
scene, OBJ meshes and background images.
"""

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = "envmap.jpg"

# (file, material, offset) of the meshes placed in the default scene when present
DEFAULT_MESHES = [
    ("goblet.obj", PURPLE, vec([0.3, 0, 2])),
    ("seashell.obj", IVORY, vec([-0.1, 0.5, 1])),
    ("boat.obj", ORANGE, vec([1, 0.55, 1])),
]


class SceneError(ValueError):
    """A scene description could not be turned into a scene."""


def _vector(data, key, context):
    try:
        value = data[key]
    except KeyError:
        raise SceneError(f"{context} is missing '{key}'") from None
    try:
        v = vec(value)
    except (TypeError, ValueError):
        raise SceneError(f"{context} has a non-numeric '{key}': {value!r}") from None
    if v.shape != (3,):
        raise SceneError(f"{context} needs a 3-component '{key}', got {value!r}")
    return v

def _number(data, key, context):
    try:
        return float(data[key])
    except KeyError:
        raise SceneError(f"{context} is missing '{key}'") from None
    except (TypeError, ValueError):
        raise SceneError(f"{context} has a non-numeric '{key}': {data[key]!r}") from None


def parse_material(data, context="material"):
    """Build a Material from a preset name or a table of material parameters."""
    if isinstance(data, str):
        try:
            return preset(data)
        except KeyError as e:
            raise SceneError(f"{context}: {e.args[0]}") from None
    if not isinstance(data, dict):
        raise SceneError(f"{context} must be a preset name or an object, got {data!r}")

    try:
        return Material(
            data["diffuse_color"],
            albedo=data.get("albedo", (1., 0., 0., 0.)),
            specular_exponent=float(data.get("specular_exponent", 1.)),
            refractive_index=float(data.get("refractive_index", 1.)),
        )
    except KeyError:
        raise SceneError(f"{context} is missing 'diffuse_color'") from None
    except (TypeError, ValueError) as e:
        raise SceneError(f"{context} is invalid: {e}") from None


def add_triangulated_mesh(triangles, surfs, material, offset):
    """Append one Triangle per (3, 3) vertex array, translated by -offset."""
    for vs in triangles:
        surfs.append(Triangle(vs - offset, material))


def load_mesh(filename, material, offset, surfs):
    with open(filename) as f:
        triangles = read_obj_triangles(f)
    add_triangulated_mesh(triangles, surfs, material, offset)
    logger.info("loaded %d triangles from %s", len(triangles), filename)


def parse_object(data, base_dir="."):
    """Build the primitives described by one entry of the "objects" list."""
    if not isinstance(data, dict):
        raise SceneError(f"scene object must be an object, got {data!r}")
    name = data.get("name")
    context = f"{name} object"
    if name == "sphere":
        material = parse_material(data.get("material"), f"{context} material")
        center = _vector(data, "center", context)
        radius = _number(data, "radius", context)
        try:
            return [Sphere(center, radius, material)]
        except ValueError as e:
            raise SceneError(f"{context}: {e}") from None
    elif name == "box":
        material = parse_material(data.get("material"), f"{context} material")
        min_point = _vector(data, "min", context)
        max_point = _vector(data, "max", context)
        try:
            return [AABB(min_point, max_point, material)]
        except ValueError as e:
            raise SceneError(f"{context}: {e}") from None
    elif name == "triangle":
        material = parse_material(data.get("material"), f"{context} material")
        vs = [_vector(data, key, context) for key in ("v0", "v1", "v2")]
        return [Triangle(np.array(vs), material)]
    elif name == "mesh":
        material = parse_material(data.get("material"), f"{context} material")
        if "path" not in data:
            raise SceneError(f"{context} is missing 'path'")
        offset = _vector(data, "offset", context) if "offset" in data else vec([0, 0, 0])
        surfs = []
        path = os.path.join(base_dir, data["path"])
        try:
            load_mesh(path, material, offset, surfs)
        except OSError as e:
            raise SceneError(f"{context}: cannot read {path}: {e}") from None
        except (ValueError, IndexError) as e:
            raise SceneError(f"{context}: {path} is not a valid OBJ file: {e}") from None
        return surfs
    raise SceneError(f"unknown object type {name!r}")


def parse_scene(data, base_dir="."):
    """Build a Scene from an already decoded scene description."""
    if not isinstance(data, dict):
        raise SceneError("scene description must be a JSON object")
    for key in ("lights", "objects"):
        if not isinstance(data.get(key), list):
            raise SceneError(f"scene description does not contain a '{key}' list")

    lights = []
    for i, light in enumerate(data["lights"]):
        context = f"light {i}"
        if not isinstance(light, dict):
            raise SceneError(f"{context} must be an object, got {light!r}")
        lights.append(PointLight(_vector(light, "position", context), _number(light, "intensity", context)))

    surfs = []
    for obj in data["objects"]:
        surfs.extend(parse_object(obj, base_dir))

    return Scene(surfs, lights)


def load_scene(filename):
    """Read a JSON scene description file.

    Raises SceneError when the file is missing or does not describe a valid scene.
    """
    try:
        with open(filename, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SceneError(f"scene file not found: {filename}") from None
    except json.JSONDecodeError as e:
        raise SceneError(f"scene file {filename} is not valid JSON: {e}") from None
    except UnicodeDecodeError as e:
        raise SceneError(f"scene file {filename} is not UTF-8 text: {e}") from None
    except OSError as e:
        raise SceneError(f"cannot read scene file {filename}: {e}") from None

    scene = parse_scene(data, os.path.dirname(os.path.abspath(filename)))
    logger.info("loaded scene %s: %d objects, %d lights", filename, len(scene.surfs), len(scene.lights))
    return scene


def default_scene(mesh_dir="."):
    """The scene rendered when no scene file is given.

    Meshes whose OBJ file is missing from mesh_dir or cannot be read are left
    out with a warning.
    """
    surfs = [
        Sphere(vec([2.5, 0.3, -2]), 1., MIRROR),
        Sphere(vec([-2.5, 0.3, -2]), 1., GLASS),
        AABB(vec([-5, -1, -5]), vec([15, -0.54, 15]), GREEN),
    ]

    for filename, material, offset in DEFAULT_MESHES:
        path = os.path.join(mesh_dir, filename)
        try:
            load_mesh(path, material, offset, surfs)
        except FileNotFoundError:
            logger.warning("mesh %s not found, leaving it out of the default scene", path)
        except (OSError, ValueError, IndexError) as e:
            logger.warning("cannot load mesh %s (%s), leaving it out of the default scene", path, e)

    lights = [
        PointLight(vec([-3, 4, -1]), 1.5),
        PointLight(vec([2, 2, -1]), 1.5),
    ]
    return Scene(surfs, lights)


def load_background(filename):
    """Load an environment map, or return None (flat background) if it cannot be read."""
    try:
        background = Background.from_file(filename)
    except FileNotFoundError:
        logger.warning("background image %s not found, using a flat background color", filename)
        return None
    except (OSError, ValueError) as e:
        # PIL.UnidentifiedImageError is an OSError
        logger.warning("cannot decode background image %s (%s), using a flat background color", filename, e)
        return None
    logger.info("loaded %dx%d background %s", background.width, background.height, filename)
    return background
