import logging

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)

def normalize(v):
    """Return a unit vector in the direction of the vector v.

    The zero vector is returned unchanged.
    """
    norm = np.linalg.norm(v)
    if norm == 0:
        return v
    return v / norm


def reflect(incident, normal):
    """Mirror the incident direction about the normal."""
    return incident - 2.0 * np.dot(incident, normal) * normal

def refract(incident, normal, refractive_index):
    """Bend the incident direction through a surface using Snell's law.

    The normal may face either side of the surface: when the ray is leaving
    the medium the indices are swapped and the normal flipped. Returns the
    zero vector on total internal reflection.
    """
    cos_i = -np.clip(np.dot(incident, normal), -1.0, 1.0)
    eta_i = 1.0
    eta_t = refractive_index
    n = normal
    if cos_i < 0:
        # inside the object
        cos_i = -cos_i
        eta_i, eta_t = eta_t, eta_i
        n = -normal

    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0:
        return np.zeros(3)
    return incident * eta + n * (eta * cos_i - np.sqrt(k))


def load_image(filename):
    """Read an image file into a (height, width, 3) uint8 array."""
    with Image.open(filename) as pil_img:
        return np.array(pil_img.convert('RGB'), dtype=np.uint8)

def save_image(filename, pixels):
    """Write a (height, width, 3) uint8 array to an image file."""
    pixels = np.asarray(pixels, dtype=np.uint8)
    Image.fromarray(pixels).save(filename)
    logger.info("wrote %dx%d image to %s", pixels.shape[1], pixels.shape[0], filename)

def read_obj(f):
    """Read a file in the Wavefront OBJ file format.

    Argument is an open file.
    Returns a tuple (positions, faces): positions is an (n, 3) float array and
    faces is a list of lists of 0-based position indices, one per polygon.
    """

    f_posns = []
    f_faces = []

    for words in (line.split() for line in f.readlines()):
        if not words or words[0].startswith('#'):
            continue
        if words[0] == 'v':
            f_posns.append([float(s) for s in words[1:4]])
        elif words[0] == 'f':
            face = []
            for w in words[1:]:
                # only the position index is needed; negative indices count from the end
                i = int(w.split('/')[0])
                face.append(i - 1 if i > 0 else len(f_posns) + i)
            f_faces.append(face)

    return np.array(f_posns, dtype=np.float64).reshape(-1, 3), f_faces


def read_obj_triangles(f):
    """Read a file in the Wavefront OBJ file format and convert to separate triangles.

    Argument is an open file.
    Polygons with more than three vertices are split into a triangle fan.
    Returns an array of shape (n, 3, 3) that has the 3D vertex positions of n triangles.
    """

    (p, faces) = read_obj(f)
    inds = []
    for face in faces:
        for k in range(1, len(face) - 1):
            inds.append([face[0], face[k], face[k + 1]])
    if not inds:
        return np.zeros((0, 3, 3), dtype=np.float64)
    return p[np.array(inds, dtype=np.int32), :]
