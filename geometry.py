import numpy as np
from utils import vec, normalize

# offset used to reject hits at (or numerically near) the ray origin
EPSILON = 1e-4


class Hit:
    def __init__(self, t, point=None, normal=None, material=None):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray
          point : (3,) -- the 3D point where the intersection happens
          normal : (3,) -- the 3D unit normal to the surface at the hit point
          material : (Material) -- the material of the surface
        """
        self.t = t
        self.point = point
        self.normal = normal
        self.material = material

    def __bool__(self):
        return bool(self.t < np.inf)

# Value to represent absence of an intersection
no_hit = Hit(np.inf)


class Sphere:

    def __init__(self, center, radius, material):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- a Python float specifying the sphere's radius
          material : Material -- the material of the surface
        """
        if radius <= 0:
            raise ValueError(f"sphere radius must be positive, got {radius}")
        self.center = vec(center)
        self.radius = float(radius)
        self.material = material

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and this sphere.

        Uses the closest-approach construction: the center is projected onto
        the ray, and the distance from the center to that projection decides
        whether the ray passes inside the sphere.

        Parameters:
          ray : Ray -- the ray to intersect with the sphere
        Return:
          Hit -- the hit data
        """
        dir_sq = np.dot(ray.direction, ray.direction)
        if dir_sq == 0:
            return no_hit
        to_center = self.center - ray.origin
        # ray parameter of the point closest to the center
        t_ca = np.dot(to_center, ray.direction) / dir_sq
        dist_sq = np.dot(to_center, to_center) - t_ca * t_ca * dir_sq
        r_sq = self.radius * self.radius
        if dist_sq > r_sq:
            return no_hit

        t_hc = np.sqrt(r_sq - dist_sq) / np.sqrt(dir_sq)
        t = t_ca - t_hc
        if t <= ray.start:
            t = t_ca + t_hc
        if t <= ray.start or t >= ray.end:
            return no_hit

        point = ray.origin + t * ray.direction
        normal = normalize(point - self.center)
        return Hit(t, point, normal, self.material)


class Triangle:

    def __init__(self, vs, material):
        """Create a triangle from the given vertices.

        Parameters:
          vs (3,3) -- an array of 3 3D points that are the vertices; the winding
                      order fixes the direction of the normal
          material : Material -- the material of the surface
        """
        self.vs = vec(vs)
        self.material = material
        self.edge_1 = self.vs[1] - self.vs[0]
        self.edge_2 = self.vs[2] - self.vs[0]
        self.normal = normalize(np.cross(self.edge_1, self.edge_2))

    def intersect(self, ray):
        """Computes the intersection between a ray and this triangle, if it exists.

        Parameters:
          ray : Ray -- the ray to intersect with the triangle
        Return:
          Hit -- the hit data
        """
        temp_vec = np.cross(ray.direction, self.edge_2)
        det = np.dot(self.edge_1, temp_vec)

        # parallel ray or degenerate triangle
        if -EPSILON < det and det < EPSILON:
            return no_hit

        inverse_det = 1.0 / det
        s = ray.origin - self.vs[0]
        u = np.dot(s, temp_vec) * inverse_det

        if u < 0 or u > 1:
            return no_hit

        temp_vec2 = np.cross(s, self.edge_1)
        v = np.dot(ray.direction, temp_vec2) * inverse_det

        if v < 0 or u + v > 1:
            return no_hit

        t = np.dot(self.edge_2, temp_vec2) * inverse_det

        if t > ray.start and t < ray.end:
            point = ray.origin + t * ray.direction
            return Hit(t, point, self.normal, self.material)

        return no_hit


class AABB:
    def __init__(self, min_point, max_point, material):
        """Create an axis-aligned box from its minimum and maximum corners."""
        self.min = vec(min_point)
        self.max = vec(max_point)
        if np.any(self.min > self.max):
            raise ValueError(f"box minimum corner {self.min} exceeds maximum corner {self.max}")
        self.material = material

    def get_center(self):
        """Get the center point of the AABB."""
        return (self.min + self.max) * 0.5

    def normal_at(self, point):
        """Return the outward normal of the face the point lies on.

        Faces are checked along x, then y, then z; a point on none of them
        (within EPSILON) gets the zero vector.
        """
        center = self.get_center()
        half_extent = (self.max - self.min) * 0.5
        local = point - center
        for i in range(3):
            if abs(abs(local[i]) - half_extent[i]) < EPSILON:
                normal = np.zeros(3)
                normal[i] = 1.0 if local[i] > 0 else -1.0
                return normal
        return np.zeros(3)

    def intersect(self, ray):
        """Intersect the ray with the box using the slab test.

        When the ray starts inside the box the exit point is returned.
        """
        tmin = -np.inf
        tmax = np.inf

        for i in range(3):
            dir_i = ray.direction[i]
            orig_i = ray.origin[i]

            # If the ray is parallel to the slab, check origin against bounds
            if dir_i == 0:
                if orig_i < self.min[i] or orig_i > self.max[i]:
                    return no_hit
                continue

            inv = 1.0 / dir_i
            t0 = (self.min[i] - orig_i) * inv
            t1 = (self.max[i] - orig_i) * inv

            if t0 > t1:
                t0, t1 = t1, t0

            tmin = max(tmin, t0)
            tmax = min(tmax, t1)

        if tmin > tmax or tmax < 0:
            return no_hit

        # origin inside the box (or on its surface): use the exit point
        t = tmin if tmin > ray.start else tmax
        if t <= ray.start or t >= ray.end:
            return no_hit

        point = ray.origin + t * ray.direction
        return Hit(t, point, self.normal_at(point), self.material)
