import logging
import time

import numpy as np
from materials import Color, BLACK, WHITE, BACKGROUND_COLOR
from geometry import EPSILON, no_hit
from utils import vec, normalize, reflect, refract, load_image

"""
Core implementation of the ray tracer: rays, the camera, lights, the scene
container with its nearest-hit query, the recursive shading algorithm and the
frame driver `render_image`.

Vectors are NumPy float arrays of shape (3,); colors that leave this module are
8-bit `Color` values.
"""

logger = logging.getLogger(__name__)

MAX_DEPTH = 4 # max recursion depth
MAX_RENDER_DISTANCE = 1000. # hits further away than this are background
IMAGE_WIDTH = 1024
IMAGE_HEIGHT = 768
FOV = 90.0 # vertical field of view in degrees


class Ray:

    def __init__(self, origin, direction, start=EPSILON, end=np.inf):
        """Create a ray with the given origin and direction.

        Parameters:
          origin : (3,) -- the start point of the ray, a 3D point
          direction : (3,) -- the direction of the ray, a 3D vector (not necessarily normalized)
          start, end : float -- the open interval of t values accepted as hits
        """
        self.origin = np.array(origin, np.float64)
        self.direction = np.array(direction, np.float64)
        self.start = start
        self.end = end

class Camera:

    def __init__(self, eye=vec([0,0,0]), target=vec([0,0,-1]), up=vec([0,1,0]),
                 vfov=FOV, aspect=IMAGE_WIDTH / IMAGE_HEIGHT):
        """Create a pinhole camera with given viewing parameters.
        """
        self.eye = vec(eye)
        self.aspect = aspect
        self.vfov = vfov

        self.w = normalize(self.eye - vec(target))
        self.u = normalize(np.cross(vec(up), self.w))
        self.v = np.cross(self.w, self.u)

        rads = np.radians(self.vfov)

        self.img_h_half = np.tan(rads / 2.0)
        self.img_w_half = self.aspect * self.img_h_half

    def generate_ray(self, img_point):
        """Compute the ray corresponding to a point in the image.

        img_point is in [0, 1]^2 with (0, 0) at the top left corner.
        """
        alpha = self.img_w_half * (img_point[0] * 2.0 - 1.0)
        beta = self.img_h_half * (1.0 - img_point[1] * 2.0)

        direction = (alpha * self.u) + (beta * self.v) - self.w

        return Ray(self.eye, normalize(direction))


def offset_origin(point, normal, direction):
    """Nudge a surface point off the surface, onto the side the direction leaves through."""
    if np.dot(direction, normal) < 0:
        return point - normal * EPSILON
    return point + normal * EPSILON


class PointLight:
    def __init__(self, position, intensity):
        """Create a point light at given position and with given scalar intensity"""
        self.position = vec(position)
        self.intensity = float(intensity)

    def illuminate(self, scene, point, normal, direction, material):
        """Compute the diffuse and specular intensity this light adds at a surface point.

        Returns (0, 0) when anything in the scene sits between the point and the light.
        """
        light_vec_full = self.position - point
        light_dist = np.linalg.norm(light_vec_full)
        light_vec = normalize(light_vec_full)

        shadow_origin = offset_origin(point, normal, light_vec)
        shadow_hit = scene.intersect(Ray(shadow_origin, light_vec))
        if shadow_hit and np.linalg.norm(shadow_hit.point - shadow_origin) < light_dist:
            return 0.0, 0.0

        diffuse = self.intensity * max(0.0, np.dot(light_vec, normal))
        # the intensity scales the exponent, not the term
        highlight = max(0.0, -np.dot(reflect(-light_vec, normal), direction))
        specular = highlight ** (material.specular_exponent * self.intensity)
        return diffuse, specular


class Background:

    def __init__(self, pixels):
        """Wrap a (height, width, 3) array of 8-bit samples as an environment map."""
        self.pixels = np.asarray(pixels, dtype=np.uint8)
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3 or self.pixels.size == 0:
            raise ValueError(f"background needs a non-empty (height, width, 3) array, got shape {self.pixels.shape}")

    @classmethod
    def from_file(cls, filename):
        return cls(load_image(filename))

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    def pixel(self, x, y):
        return Color(*(int(c) for c in self.pixels[y, x]))

    def sample(self, direction):
        """Look up the color seen along a direction (equirectangular, nearest sample)."""
        d = normalize(vec(direction))
        phi = np.arccos(np.clip(d[1], -1.0, 1.0))
        theta = np.arctan2(d[2], d[0])

        u = np.clip((theta + np.pi) / (2 * np.pi), 0.0, 1.0)
        v = np.clip(phi / np.pi, 0.0, 1.0)

        return self.pixel(int(u * (self.width - 1)), int(v * (self.height - 1)))


class Scene:

    def __init__(self, surfs, lights=(), background=None):
        """Create a scene containing the given objects and lights.

        Parameters:
          surfs : list -- primitives (Sphere, Triangle, AABB), anything with intersect(ray)
          lights : list of PointLight
          background : Background or None -- environment map; a flat color is used without one
        """
        self.surfs = list(surfs)
        self.lights = list(lights)
        self.background = background

    def intersect(self, ray):
        """Computes the nearest intersection between a ray and the scene.

        Hits further than MAX_RENDER_DISTANCE from the ray origin are ignored.
        """
        closest_hit = no_hit
        closest_dist = MAX_RENDER_DISTANCE
        for surf in self.surfs:
            hit = surf.intersect(ray)
            if not hit:
                continue
            dist = np.linalg.norm(hit.point - ray.origin)
            if dist < closest_dist:
                closest_hit = hit
                closest_dist = dist
        return closest_hit

    def background_color(self, direction):
        if self.background is None:
            return BACKGROUND_COLOR
        return self.background.sample(direction)


def cast_ray(scene, origin, direction, depth=0):
    """Compute the color seen along a ray, following reflections and refractions.

    Past MAX_DEPTH bounces the background is returned without tracing.
    """
    if depth > MAX_DEPTH:
        return scene.background_color(direction)

    hit = scene.intersect(Ray(origin, direction))
    if not hit:
        return scene.background_color(direction)

    return shade(scene, hit.material, hit.point, hit.normal, direction, depth)


def shade(scene, material, point, normal, direction, depth):
    """Compute the color at a surface point seen from the given direction.

    Combines Phong-style direct lighting from every unshadowed light with the
    recursively traced reflection and refraction, weighted by the material albedo.
    """
    diffuse_intensity = 0.0
    specular_intensity = 0.0
    for light in scene.lights:
        diffuse, specular = light.illuminate(scene, point, normal, direction, material)
        diffuse_intensity += diffuse
        specular_intensity += specular

    k_d, k_s, k_m, k_t = material.albedo

    reflect_color = BLACK
    if k_m != 0:
        reflect_dir = normalize(reflect(direction, normal))
        reflect_color = cast_ray(scene, offset_origin(point, normal, reflect_dir), reflect_dir, depth + 1)

    refract_color = BLACK
    if k_t != 0:
        refract_dir = refract(direction, normal, material.refractive_index)
        # total internal reflection contributes nothing
        if np.any(refract_dir):
            refract_dir = normalize(refract_dir)
            refract_color = cast_ray(scene, offset_origin(point, normal, refract_dir), refract_dir, depth + 1)

    color = (material.diffuse_color.as_vector() * diffuse_intensity * k_d
             + WHITE.as_vector() * specular_intensity * k_s
             + reflect_color.as_vector() * k_m
             + refract_color.as_vector() * k_t)
    return Color.from_vector(color)


def render_image(scene, width=IMAGE_WIDTH, height=IMAGE_HEIGHT, camera=None):
    """
    Render the scene through a pinhole camera at the origin looking down -z.

    Returns a (height, width, 3) uint8 array of pixel colors.
    """
    if camera is None:
        camera = Camera(aspect=width / height)

    logger.info("rendering %dx%d image of %d objects and %d lights",
                width, height, len(scene.surfs), len(scene.lights))
    start_time = time.time()

    output_image = np.zeros((height, width, 3), np.uint8)

    for i in range(height):
        logger.debug("rendering row %d/%d...", i + 1, height)
        for j in range(width):
            ray = camera.generate_ray(np.array([(j + 0.5) / width, (i + 0.5) / height]))
            output_image[i, j] = cast_ray(scene, ray.origin, ray.direction, 0)

    logger.info("render complete in %.2f seconds", time.time() - start_time)
    return output_image
