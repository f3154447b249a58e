import unittest
from unittest import mock

import numpy as np
import ray
from ray import Ray, Camera, PointLight, Scene, Background, cast_ray, render_image, MAX_DEPTH
from geometry import Sphere, Triangle, AABB, Hit, no_hit
from materials import Color, Material, BLACK, BACKGROUND_COLOR, MIRROR, RED, preset
from utils import normalize, vec, reflect, refract

def assert_direction_matches(v, w):
    np.testing.assert_almost_equal(normalize(v), normalize(w))


def flipy_vec(vect):
    v = vec(vect);
    v[1] = 1-v[1];
    return v;

class TestColor(unittest.TestCase):

    def test_round_trip(self):
        for i in range(256):
            c = Color(i, 255 - i, (7 * i) % 256)
            self.assertEqual(Color.from_vector(c.as_vector()), c)

    def test_from_vector_clamps(self):
        self.assertEqual(Color.from_vector(vec([-0.5, 3.0, 0.5])), Color(0, 255, 128))

    def test_channels_out_of_range(self):
        for channels in [(300, 0, 0), (0, -1, 0), (0, 0, 256)]:
            with self.assertRaises(ValueError):
                Color(*channels)

    def test_as_vector_range(self):
        np.testing.assert_allclose(Color(255, 0, 51).as_vector(), [1.0, 0.0, 0.2])


class TestMaterial(unittest.TestCase):

    def test_read_only(self):
        with self.assertRaises(AttributeError):
            MIRROR.albedo = (1, 0, 0, 0)
        with self.assertRaises(AttributeError):
            MIRROR.refractive_index = 2.0
        self.assertEqual(MIRROR.albedo, (0.0, 10.0, 0.8, 0.0))
        self.assertEqual(hash(MIRROR), hash(Material(Color(255, 255, 255), (0, 10, 0.8, 0), 1425.)))

    def test_presets(self):
        self.assertEqual(MIRROR.albedo, (0.0, 10.0, 0.8, 0.0))
        glass = preset("GLASS")
        self.assertEqual(glass.albedo, (0.0, 0.5, 0.1, 0.8))
        self.assertEqual(glass.refractive_index, 1.5)
        with self.assertRaises(KeyError):
            preset("unobtainium")

    def test_invalid(self):
        with self.assertRaises(ValueError):
            Material(Color(1, 2, 3), albedo=(1, -0.1, 0, 0))
        with self.assertRaises(ValueError):
            Material(Color(1, 2, 3), refractive_index=0.9)
        with self.assertRaises(ValueError):
            Material(Color(1, 2, 3), specular_exponent=0)
        with self.assertRaises(ValueError):
            Material(Color(1, 2, 3), albedo=(1, 0, 0))


class TestSphereIntersect(unittest.TestCase):

    def confirm_hit(self, sphere, ray):
        # make sure hit is self-consistent, then return it
        hit = sphere.intersect(ray)
        self.assertLess(hit.t, np.inf)
        np.testing.assert_almost_equal(ray.origin + hit.t * ray.direction, hit.point)
        np.testing.assert_almost_equal(normalize(hit.point - sphere.center), hit.normal)
        self.assertAlmostEqual(np.linalg.norm(hit.point - sphere.center), sphere.radius)
        self.assertIs(hit.material, sphere.material)
        return hit

    def test_unitsphere_hits(self):
        unit_sphere = Sphere(np.array([0,0,0]), 1.0, None)
        # dead center hit
        hit = self.confirm_hit(unit_sphere, Ray(vec([2.0,0.0,0.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        # dead center with non-unit direction
        hit = self.confirm_hit(unit_sphere, Ray(vec([3.0,0.0,0.0]), vec([-2.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        # off center hit
        hit = self.confirm_hit(unit_sphere, Ray(vec([1.0,0.5,0.0]), vec([-1.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))
        # center hit from off axis
        hit = self.confirm_hit(unit_sphere, Ray(vec([2.0,3.0,4.0]), vec([-2.0,-3.0,-4.0])))
        self.assertAlmostEqual(hit.t, 1 - 1 / np.sqrt(29))

    def test_unitsphere_misses(self):
        unit_sphere = Sphere(vec([0,0,0]), 1.0, None)
        # on axis miss
        hit = unit_sphere.intersect(Ray(vec([2.0,3.0,0.0]), vec([-1.0,0.0,0.0])))
        self.assertEqual(hit.t, np.inf)
        # sphere behind the origin
        hit = unit_sphere.intersect(Ray(vec([2.0,0.0,0.0]), vec([1.0,0.0,0.0])))
        self.assertIs(hit, no_hit)
        self.assertFalse(hit)

    def test_nonunit_hits(self):
        # all the same as the first case, but scaled by 3 and shifted by (-1, -5, -7)
        sphere = Sphere(vec([-1,-5,-7]), 3.0, None)
        hit = self.confirm_hit(sphere, Ray(vec([5.0,-5.0,-7.0]), vec([-3.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        hit = self.confirm_hit(sphere, Ray(vec([8.0,-5.0,-7.0]), vec([-6.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1.0)
        hit = self.confirm_hit(sphere, Ray(vec([2.0,-3.5,-7.0]), vec([-3.0,0.0,0.0])))
        self.assertAlmostEqual(hit.t, 1 - np.sin(np.pi/3))

    def test_aimed_at_center(self):
        # distance is |origin - center| - radius and the normal faces straight back
        for center, radius, origin in [
            (vec([0, 0, 0]), 2.0, vec([0, 0, 5])),
            (vec([-3, 0, -16]), 2.0, vec([0, 0, 0])),
            (vec([4, -2, 7]), 0.5, vec([-1, 3, 2])),
        ]:
            direction = normalize(center - origin)
            hit = self.confirm_hit(Sphere(center, radius, None), Ray(origin, direction))
            self.assertAlmostEqual(hit.t, np.linalg.norm(center - origin) - radius)
            np.testing.assert_almost_equal(hit.normal, -direction)

    def test_origin_inside(self):
        sphere = Sphere(vec([0, 0, 0]), 2.0, None)
        hit = self.confirm_hit(sphere, Ray(vec([0, 0, 0]), vec([0, 1, 0])))
        self.assertAlmostEqual(hit.t, 2.0)
        np.testing.assert_almost_equal(hit.normal, [0, 1, 0])

    def test_invalid_radius(self):
        with self.assertRaises(ValueError):
            Sphere(vec([0, 0, 0]), 0.0, None)


class TestTriangleIntersect(unittest.TestCase):

    def test_simple(self):
        # A triangle on the xy plane and perpendicular rays
        tri = Triangle(np.array([[0,0,0], [1,0,0], [0,1,0]]), None)
        hit = tri.intersect(Ray(vec([0.3, 0.3, 1]), vec([0, 0, -1])))
        self.assertAlmostEqual(hit.t, 1.)
        np.testing.assert_allclose(hit.point, [0.3, 0.3, 0])
        np.testing.assert_allclose(hit.normal, [0, 0, 1])
        hit = tri.intersect(Ray(vec([-0.3, 0.3, 1]), vec([0, 0, -1])))
        self.assertEqual(hit.t, np.inf)

    def test_transformed(self):
        # The same triangle under a linear xf of positive determinant
        M = np.array([[3,1,4],[1,5,9],[2,6,5]])
        M = np.sign(np.linalg.det(M)) * M  # ensure no reflection
        u = np.array([2,7,1])
        tri = Triangle(np.array([u + M @ [0,0,0], u + M @ [1,0,0], u + M @ [0,1,0]]), None)
        hit = tri.intersect(Ray(u + M @ [0.3, 0.3, 1], M @ [0, 0, -1]))
        self.assertAlmostEqual(hit.t, 1.)
        np.testing.assert_allclose(hit.point, u + M @ [0.3, 0.3, 0])
        assert_direction_matches(hit.normal, np.linalg.inv(M.transpose()) @ [0, 0, 1])
        hit = tri.intersect(Ray(u + M @ [-0.3, 0.3, 1], M @ [0, 0, -1]))
        self.assertEqual(hit.t, np.inf)

    def test_back_face_keeps_winding_normal(self):
        tri = Triangle(np.array([[0,0,0], [1,0,0], [0,1,0]]), None)
        hit = tri.intersect(Ray(vec([0.2, 0.2, -1]), vec([0, 0, 1])))
        self.assertAlmostEqual(hit.t, 1.)
        np.testing.assert_allclose(hit.normal, [0, 0, 1])

    def test_outside_hypotenuse(self):
        # u and v are each in [0, 1] but u + v > 1
        tri = Triangle(np.array([[0,0,0], [1,0,0], [0,1,0]]), None)
        self.assertIs(tri.intersect(Ray(vec([0.6, 0.6, 1]), vec([0, 0, -1]))), no_hit)
        self.assertLess(tri.intersect(Ray(vec([0.4, 0.4, 1]), vec([0, 0, -1]))).t, np.inf)

    def test_parallel_and_degenerate(self):
        tri = Triangle(np.array([[0,0,0], [1,0,0], [0,1,0]]), None)
        self.assertIs(tri.intersect(Ray(vec([0.2, 0.2, 1]), vec([1, 0, 0]))), no_hit)
        flat = Triangle(np.array([[0,0,0], [1,1,1], [2,2,2]]), None)
        self.assertIs(flat.intersect(Ray(vec([1, 0, 0]), normalize(vec([-1, 1, 0])))), no_hit)

    def test_behind_origin(self):
        tri = Triangle(np.array([[0,0,0], [1,0,0], [0,1,0]]), None)
        self.assertIs(tri.intersect(Ray(vec([0.3, 0.3, 1]), vec([0, 0, 1]))), no_hit)


class TestAABBIntersect(unittest.TestCase):

    def test_hit_from_outside(self):
        box = AABB(vec([-1, -1, -3]), vec([1, 1, -1]), None)
        hit = box.intersect(Ray(vec([0, 0, 0]), vec([0, 0, -1])))
        self.assertAlmostEqual(hit.t, 1.)
        np.testing.assert_allclose(hit.point, [0, 0, -1])
        np.testing.assert_allclose(hit.normal, [0, 0, 1])

    def test_origin_inside_uses_exit(self):
        box = AABB(vec([-1, -1, -1]), vec([1, 1, 1]), None)
        hit = box.intersect(Ray(vec([0, 0, 0]), vec([1, 0, 0])))
        self.assertAlmostEqual(hit.t, 1.)
        np.testing.assert_allclose(hit.normal, [1, 0, 0])

    def test_axis_parallel(self):
        box = AABB(vec([2, -1, -1]), vec([3, 1, 1]), None)
        hit = box.intersect(Ray(vec([-5, 0, 0]), vec([1, 0, 0])))
        self.assertAlmostEqual(hit.t, 7.)
        np.testing.assert_allclose(hit.normal, [-1, 0, 0])
        self.assertIs(box.intersect(Ray(vec([-5, 5, 0]), vec([1, 0, 0]))), no_hit)

    def test_behind_origin(self):
        box = AABB(vec([2, -1, -1]), vec([3, 1, 1]), None)
        self.assertIs(box.intersect(Ray(vec([0, 0, 0]), vec([-1, 0, 0]))), no_hit)

    def test_normal_order(self):
        box = AABB(vec([0, 0, 0]), vec([1, 1, 1]), None)
        # hits the edge shared by the -x and -y faces; x is checked first
        hit = box.intersect(Ray(vec([-1, -1, 0.5]), normalize(vec([1, 1, 0]))))
        np.testing.assert_allclose(hit.point, [0, 0, 0.5], atol=1e-9)
        np.testing.assert_allclose(hit.normal, [-1, 0, 0])
        np.testing.assert_allclose(box.normal_at(vec([0.5, 0.5, 0.5])), [0, 0, 0])

    def test_invalid_corners(self):
        with self.assertRaises(ValueError):
            AABB(vec([1, 0, 0]), vec([0, 1, 1]), None)


class TestCamera(unittest.TestCase):

    def test_default_camera(self):
        # A camera located at the origin facing the -z direction
        cam = Camera(aspect=1)
        # Center ray is straight down the axis
        ray = cam.generate_ray(flipy_vec([0.5, 0.5]))
        np.testing.assert_almost_equal(ray.origin, vec([0,0,0]))
        assert_direction_matches(ray.direction, vec([0,0,-1]))
        # FOV is 90 degrees, so corner rays are centered in octants
        ray = cam.generate_ray(flipy_vec([0, 0]))
        assert_direction_matches(ray.direction, vec([-1,-1,-1]))
        ray = cam.generate_ray(flipy_vec([1, 0]))
        assert_direction_matches(ray.direction, vec([ 1,-1,-1]))
        ray = cam.generate_ray(flipy_vec([0, 1]))
        assert_direction_matches(ray.direction, vec([-1, 1,-1]))

    def test_pinhole_pixel(self):
        # top left pixel of the default 1024x768 frame
        cam = Camera()
        ray = cam.generate_ray(vec([0.5 / 1024, 0.5 / 768]))
        x = (2 * 0.5 / 1024 - 1) * np.tan(np.pi / 4) * 1024 / 768
        y = -(2 * 0.5 / 768 - 1) * np.tan(np.pi / 4)
        np.testing.assert_almost_equal(ray.direction, normalize(vec([x, y, -1])))
        self.assertAlmostEqual(np.linalg.norm(ray.direction), 1.0)

    def test_aspect(self):
        # A camera with a different aspect ratio: rays should be scaled in x
        aspect = 1.5
        cam = Camera(aspect=aspect)
        # Center ray is still straight down the axis
        ray = cam.generate_ray(flipy_vec([0.5, 0.5]))
        np.testing.assert_almost_equal(ray.origin, vec([0,0,0]))
        assert_direction_matches(ray.direction, vec([0,0,-1]))
        ray = cam.generate_ray(flipy_vec([1, 0.5]))
        assert_direction_matches(ray.direction, vec([aspect, 0, -1]))


class TestReflectRefract(unittest.TestCase):

    def test_reflect(self):
        n = vec([0, 1, 0])
        d = normalize(vec([1, -1, 0]))
        np.testing.assert_almost_equal(reflect(d, n), normalize(vec([1, 1, 0])))

    def test_reflect_involutive(self):
        rng = np.random.default_rng(7)
        for _ in range(20):
            d = normalize(rng.normal(size=3))
            n = normalize(rng.normal(size=3))
            np.testing.assert_almost_equal(reflect(reflect(d, n), n), d)

    def test_index_one_does_not_bend(self):
        n = vec([0, 1, 0])
        for d in [vec([0, -1, 0]), normalize(vec([1, -1, 0])), normalize(vec([3, 1, -2]))]:
            np.testing.assert_almost_equal(refract(d, n, 1.0), d)

    def test_snell(self):
        n = vec([0, 1, 0])
        d = normalize(vec([1, -1, 0]))
        t = refract(d, n, 1.5)
        sin_t = np.sin(np.pi / 4) / 1.5
        np.testing.assert_almost_equal(t, [sin_t, -np.sqrt(1 - sin_t**2), 0])
        # the mirrored ray leaving the medium bends back to 45 degrees
        leaving = vec([t[0], -t[1], 0])
        np.testing.assert_almost_equal(refract(leaving, n, 1.5), normalize(vec([1, 1, 0])))

    def test_total_internal_reflection(self):
        # grazing ray leaving glass, normal pointing out of the glass
        n = vec([0, 1, 0])
        d = normalize(vec([1, 0.1, 0]))
        np.testing.assert_array_equal(refract(d, n, 1.5), np.zeros(3))


class TestPointLight(unittest.TestCase):

    def setUp(self):
        self.material = Material(Color(255, 255, 255), albedo=(1, 1, 0, 0), specular_exponent=2.)
        self.point = vec([0, 0, 0])
        self.normal = vec([0, 1, 0])

    def test_diffuse(self):
        light = PointLight(vec([0, 10, 0]), 2.0)
        diffuse, _ = light.illuminate(Scene([]), self.point, self.normal, vec([0, -1, 0]), self.material)
        self.assertAlmostEqual(diffuse, 2.0)
        # light at 60 degrees from the normal
        light = PointLight(vec([0, 1, np.sqrt(3)]), 1.0)
        diffuse, _ = light.illuminate(Scene([]), self.point, self.normal, vec([0, -1, 0]), self.material)
        self.assertAlmostEqual(diffuse, 0.5)

    def test_specular_exponent_scaled_by_intensity(self):
        light = PointLight(vec([0, 10, 0]), 2.0)
        view = normalize(vec([1, -1, 0]))
        _, specular = light.illuminate(Scene([]), self.point, self.normal, view, self.material)
        self.assertAlmostEqual(specular, np.sqrt(0.5) ** (2.0 * 2.0))

    def test_light_below_surface(self):
        light = PointLight(vec([0, -10, 0]), 1.0)
        diffuse, _ = light.illuminate(Scene([]), self.point, self.normal, vec([0, -1, 0]), self.material)
        self.assertEqual(diffuse, 0.0)

    def test_shadow(self):
        light = PointLight(vec([0, 10, 0]), 1.5)
        blocker = Sphere(vec([0, 5, 0]), 1.0, RED)
        scene = Scene([blocker], [light])
        self.assertEqual(light.illuminate(scene, self.point, self.normal, vec([0, -1, 0]), self.material), (0.0, 0.0))

    def test_blocker_beyond_light(self):
        light = PointLight(vec([0, 10, 0]), 1.5)
        blocker = Sphere(vec([0, 20, 0]), 1.0, RED)
        scene = Scene([blocker], [light])
        diffuse, _ = light.illuminate(scene, self.point, self.normal, vec([0, -1, 0]), self.material)
        self.assertAlmostEqual(diffuse, 1.5)

    def test_shadow_ray_starts_on_light_side(self):
        # light behind the surface; a sliver closer than EPSILON on the light's
        # side is skipped, so the shadow origin must be offset toward the light
        vs = np.array([[-1, -1, 0], [1, -1, 0], [0, 1, 0]])
        surface = Triangle(vs, RED)
        sliver = Triangle(vs + vec([0, 0, -1.5e-4]), RED)
        light = PointLight(vec([0, 0, -1]), 1.0)
        scene = Scene([surface, sliver], [light])
        point = vec([0, 0, 0])
        normal = surface.normal
        np.testing.assert_allclose(normal, [0, 0, 1])
        diffuse, specular = light.illuminate(scene, point, normal, vec([0, 0, 1]), self.material)
        self.assertEqual(diffuse, 0.0)
        self.assertAlmostEqual(specular, 1.0)
        # a real blocker on the light's side still casts a shadow
        blocker = Triangle(vs + vec([0, 0, -0.5]), RED)
        scene = Scene([surface, blocker], [light])
        self.assertEqual(light.illuminate(scene, point, normal, vec([0, 0, 1]), self.material), (0.0, 0.0))


class TestBackground(unittest.TestCase):

    def setUp(self):
        pixels = np.zeros((3, 5, 3), np.uint8)
        for y in range(3):
            for x in range(5):
                pixels[y, x] = (x * 50, y * 100, 7)
        self.background = Background(pixels)

    def test_size(self):
        self.assertEqual((self.background.width, self.background.height), (5, 3))
        self.assertEqual(self.background.pixel(4, 2), Color(200, 200, 7))

    def test_sample(self):
        # straight up is the top row, straight down the bottom row
        self.assertEqual(self.background.sample(vec([0, 1, 0])), self.background.pixel(2, 0))
        self.assertEqual(self.background.sample(vec([0, -5, 0])), self.background.pixel(2, 2))
        # along -x theta is pi, the right edge
        self.assertEqual(self.background.sample(vec([-1, 0, 0])), self.background.pixel(4, 1))
        # along -z theta is -pi/2
        self.assertEqual(self.background.sample(vec([0, 0, -1])), self.background.pixel(1, 1))

    def test_flat_fallback(self):
        self.assertEqual(Scene([]).background_color(vec([0, 0, -1])), BACKGROUND_COLOR)
        self.assertEqual(BACKGROUND_COLOR, Color(50, 180, 200))

    def test_invalid_pixels(self):
        with self.assertRaises(ValueError):
            Background(np.zeros((4, 4), np.uint8))


class TestScene(unittest.TestCase):

    def test_empty_scene(self):
        scene = Scene([])
        self.assertIs(scene.intersect(Ray(vec([0, 0, 0]), vec([0, 0, -1]))), no_hit)
        self.assertEqual(cast_ray(scene, vec([0, 0, 0]), vec([0, 0, -1])), BACKGROUND_COLOR)

    def test_nearest_hit(self):
        near = Sphere(vec([0, 0, -5]), 1.0, RED)
        far = Sphere(vec([0, 0, -10]), 1.0, MIRROR)
        for surfs in ([near, far], [far, near]):
            hit = Scene(surfs).intersect(Ray(vec([0, 0, 0]), vec([0, 0, -1])))
            self.assertIs(hit.material, RED)
            self.assertAlmostEqual(hit.t, 4.0)

    def test_hit_truthiness(self):
        hit = Sphere(vec([0, 0, -5]), 1.0, RED).intersect(Ray(vec([0, 0, 0]), vec([0, 0, -1])))
        self.assertIs(bool(hit), True)
        self.assertIs(bool(no_hit), False)

    def test_light_inside_box(self):
        # the inner walls face outward, so a light inside leaves them unlit
        box = AABB(vec([-2, -2, -2]), vec([2, 2, 2]), RED)
        scene = Scene([box], [PointLight(vec([0, 1, 0]), 1.5)])
        hit = scene.intersect(Ray(vec([0, 0, 0]), vec([0, 0, -1])))
        self.assertAlmostEqual(hit.t, 2.0)
        np.testing.assert_allclose(hit.normal, [0, 0, -1])
        self.assertEqual(cast_ray(scene, vec([0, 0, 0]), vec([0, 0, -1])), BLACK)

    def test_render_distance(self):
        sphere = Sphere(vec([0, 0, -2000]), 1.0, RED)
        box = AABB(vec([-1, -1, 1500]), vec([1, 1, 1600]), RED)
        scene = Scene([sphere, box])
        self.assertIs(scene.intersect(Ray(vec([0, 0, 0]), vec([0, 0, -1]))), no_hit)
        self.assertIs(scene.intersect(Ray(vec([0, 0, 0]), vec([0, 0, 1]))), no_hit)
        self.assertEqual(cast_ray(scene, vec([0, 0, 0]), vec([0, 0, -1])), BACKGROUND_COLOR)


class TestCastRay(unittest.TestCase):

    def test_depth_cap_returns_background(self):
        scene = Scene([Sphere(vec([0, 0, -5]), 1.0, RED)], [PointLight(vec([0, 0, 0]), 1.0)])
        self.assertEqual(cast_ray(scene, vec([0, 0, 0]), vec([0, 0, -1]), MAX_DEPTH + 1), BACKGROUND_COLOR)
        self.assertNotEqual(cast_ray(scene, vec([0, 0, 0]), vec([0, 0, -1]), MAX_DEPTH), BACKGROUND_COLOR)

    def test_mirror_box_terminates(self):
        # six mirrored walls around the origin: every reflection hits another wall
        walls = [
            AABB(vec([-3, -3, -3]), vec([-2, 3, 3]), MIRROR),
            AABB(vec([2, -3, -3]), vec([3, 3, 3]), MIRROR),
            AABB(vec([-3, -3, -3]), vec([3, -2, 3]), MIRROR),
            AABB(vec([-3, 2, -3]), vec([3, 3, 3]), MIRROR),
            AABB(vec([-3, -3, -3]), vec([3, 3, -2]), MIRROR),
            AABB(vec([-3, -3, 2]), vec([3, 3, 3]), MIRROR),
        ]
        scene = Scene(walls)
        with mock.patch.object(ray, 'cast_ray', wraps=ray.cast_ray) as traced:
            color = ray.cast_ray(scene, vec([0, 0, 0]), normalize(vec([0.3, 0.2, -1])), 0)
        self.assertIsInstance(color, Color)
        depths = [c.args[3] for c in traced.call_args_list]
        self.assertEqual(max(depths), MAX_DEPTH + 1)
        self.assertEqual(len(depths), MAX_DEPTH + 2)

    def test_glass_sphere_shows_background(self):
        # a clear sphere with no lights passes on the color behind it
        clear = Material(Color(0, 0, 0), albedo=(0, 0, 0, 1), refractive_index=1.0)
        scene = Scene([Sphere(vec([0, 0, -5]), 1.0, clear)])
        self.assertEqual(cast_ray(scene, vec([0, 0, 0]), vec([0, 0, -1])), BACKGROUND_COLOR)

    def test_mirror_reflects_background(self):
        mirror = Material(Color(0, 0, 0), albedo=(0, 0, 1, 0))
        pixels = np.zeros((2, 2, 3), np.uint8)
        pixels[:, :] = (10, 20, 30)
        scene = Scene([Sphere(vec([0, 0, -5]), 1.0, mirror)], background=Background(pixels))
        self.assertEqual(cast_ray(scene, vec([0, 0, 0]), vec([0, 0, -1])), Color(10, 20, 30))


class TestRender(unittest.TestCase):

    def setUp(self):
        pixels = np.zeros((1, 1, 3), np.uint8)
        pixels[0, 0] = (100, 100, 80)
        self.background = Background(pixels)

    def test_unlit_sphere_is_black(self):
        scene = Scene([Sphere(vec([-3, 0, -16]), 2, RED)], background=self.background)
        image = render_image(scene, 32, 24)
        self.assertEqual(image.shape, (24, 32, 3))
        self.assertEqual(image.dtype, np.uint8)
        np.testing.assert_array_equal(image[11, 13], [0, 0, 0])
        np.testing.assert_array_equal(image[0, 0], [100, 100, 80])

    def test_lit_sphere_is_red(self):
        scene = Scene([Sphere(vec([-3, 0, -16]), 2, RED)], [PointLight(vec([0, 0, 0]), 1.5)],
                      background=self.background)
        color = cast_ray(scene, vec([0, 0, 0]), normalize(vec([-3, 0, -16])))
        self.assertGreater(color.r, 0)
        self.assertEqual((color.g, color.b), (0, 0))


if __name__ == '__main__':
    unittest.main()
