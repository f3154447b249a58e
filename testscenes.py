import io
import json
import os
import tempfile
import unittest

import numpy as np
from PIL import Image

import cli
from geometry import Sphere, Triangle, AABB
from materials import Color, GLASS, MIRROR, GREEN
from ray import Scene, BACKGROUND_COLOR
from scenes import (SceneError, load_scene, parse_scene, parse_material, default_scene,
                    load_background, add_triangulated_mesh)
from utils import vec, read_obj_triangles, load_image, save_image

QUAD_OBJ = """# unit quad
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
f 1/1/1 2/2/1 3/3/1 4/4/1
"""


class TempDirTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name, text):
        path = os.path.join(self.dir, name)
        with open(path, "w") as f:
            f.write(text)
        return path


class TestParseMaterial(unittest.TestCase):

    def test_preset_name(self):
        self.assertIs(parse_material("glass"), GLASS)
        self.assertIs(parse_material("Mirror"), MIRROR)

    def test_table(self):
        m = parse_material({"diffuse_color": [10, 20, 30], "albedo": [0.5, 0.2, 0.1, 0.0],
                            "specular_exponent": 30, "refractive_index": 1.2})
        self.assertEqual(m.diffuse_color, Color(10, 20, 30))
        self.assertEqual(m.albedo, (0.5, 0.2, 0.1, 0.0))
        self.assertEqual(m.specular_exponent, 30.)
        self.assertEqual(m.refractive_index, 1.2)

    def test_invalid(self):
        for data in ["velvet", None, {"albedo": [1, 0, 0, 0]},
                     {"diffuse_color": [1, 2, 3], "refractive_index": 0.5},
                     {"diffuse_color": [1, 2, 3], "albedo": [1, 0]}]:
            with self.assertRaises(SceneError):
                parse_material(data)


class TestParseScene(unittest.TestCase):

    def test_objects(self):
        scene = parse_scene({
            "lights": [{"position": [1, 2, 3], "intensity": 1.5}],
            "objects": [
                {"name": "sphere", "center": [0, 0, -5], "radius": 1, "material": "glass"},
                {"name": "box", "min": [-1, -1, -1], "max": [1, 1, 1], "material": "green"},
                {"name": "triangle", "v0": [0, 0, 0], "v1": [1, 0, 0], "v2": [0, 1, 0], "material": "mirror"},
            ],
        })
        self.assertIsInstance(scene, Scene)
        self.assertEqual([type(s) for s in scene.surfs], [Sphere, AABB, Triangle])
        self.assertIs(scene.surfs[1].material, GREEN)
        np.testing.assert_array_equal(scene.lights[0].position, [1, 2, 3])
        self.assertEqual(scene.lights[0].intensity, 1.5)
        self.assertIsNone(scene.background)

    def test_empty_scene(self):
        scene = parse_scene({"lights": [], "objects": []})
        self.assertEqual(scene.surfs, [])
        self.assertEqual(scene.background_color(vec([0, 0, -1])), BACKGROUND_COLOR)

    def test_errors(self):
        sphere = {"name": "sphere", "center": [0, 0, -5], "radius": 1, "material": "glass"}
        bad = [
            [],
            {"objects": [sphere]},
            {"lights": [], "objects": [{"name": "torus", "material": "glass"}]},
            {"lights": [], "objects": [dict(sphere, center=[0, 0])]},
            {"lights": [], "objects": [dict(sphere, radius=-1)]},
            {"lights": [], "objects": [dict(sphere, radius="big")]},
            {"lights": [], "objects": [{"name": "box", "min": [1, 1, 1], "max": [0, 0, 0], "material": "glass"}]},
            {"lights": [{"position": [0, 0, 0]}], "objects": []},
        ]
        for data in bad:
            with self.assertRaises(SceneError):
                parse_scene(data)

    def test_unknown_object_message(self):
        with self.assertRaisesRegex(SceneError, "torus"):
            parse_scene({"lights": [], "objects": [{"name": "torus"}]})


class TestLoadScene(TempDirTestCase):

    def test_load(self):
        self.write("quad.obj", QUAD_OBJ)
        path = self.write("scene.json", json.dumps({
            "lights": [{"position": [0, 5, 0], "intensity": 1}],
            "objects": [
                {"name": "sphere", "center": [0, 0, -5], "radius": 1, "material": "glass"},
                {"name": "mesh", "path": "quad.obj", "offset": [0, 0, 1], "material": "ivory"},
            ],
        }))
        scene = load_scene(path)
        self.assertEqual(len(scene.surfs), 3)
        np.testing.assert_array_equal(scene.surfs[1].vs[0], [0, 0, -1])

    def test_missing_file(self):
        with self.assertRaisesRegex(SceneError, "not found"):
            load_scene(os.path.join(self.dir, "nope.json"))

    def test_invalid_json(self):
        with self.assertRaisesRegex(SceneError, "not valid JSON"):
            load_scene(self.write("scene.json", "{lights: ["))

    def test_directory(self):
        with self.assertRaisesRegex(SceneError, "cannot read"):
            load_scene(self.dir)

    def test_not_utf8(self):
        path = os.path.join(self.dir, "scene.json")
        with open(path, "wb") as f:
            f.write(b"\xff\xfe{}")
        with self.assertRaisesRegex(SceneError, "UTF-8"):
            load_scene(path)

    def test_missing_mesh(self):
        path = self.write("scene.json", json.dumps({
            "lights": [],
            "objects": [{"name": "mesh", "path": "missing.obj", "material": "ivory"}],
        }))
        with self.assertRaises(SceneError):
            load_scene(path)


class TestMeshes(TempDirTestCase):

    def test_read_obj_triangles(self):
        triangles = read_obj_triangles(io.StringIO(QUAD_OBJ))
        self.assertEqual(triangles.shape, (2, 3, 3))
        np.testing.assert_array_equal(triangles[1], [[0, 0, 0], [1, 1, 0], [0, 1, 0]])

    def test_add_triangulated_mesh(self):
        surfs = []
        triangles = read_obj_triangles(io.StringIO(QUAD_OBJ))
        add_triangulated_mesh(triangles, surfs, GREEN, vec([1, 1, 1]))
        self.assertEqual(len(surfs), 2)
        np.testing.assert_array_equal(surfs[0].vs, [[-1, -1, -1], [0, -1, -1], [0, 0, -1]])
        np.testing.assert_allclose(surfs[0].normal, [0, 0, 1])
        self.assertIs(surfs[0].material, GREEN)

    def test_default_scene_without_meshes(self):
        with self.assertLogs("scenes", level="WARNING") as logs:
            scene = default_scene(self.dir)
        self.assertEqual(len(logs.output), 3)
        self.assertEqual(len(scene.surfs), 3)
        self.assertEqual(len(scene.lights), 2)
        self.assertIs(scene.surfs[0].material, MIRROR)
        self.assertIs(scene.surfs[1].material, GLASS)

    def test_default_scene_with_mesh(self):
        self.write("boat.obj", QUAD_OBJ)
        with self.assertLogs("scenes", level="WARNING"):
            scene = default_scene(self.dir)
        self.assertEqual(len(scene.surfs), 5)

    def test_default_scene_with_broken_mesh(self):
        self.write("boat.obj", "v 0 0\nf 1 2 3\n")
        self.write("goblet.obj", QUAD_OBJ)
        with self.assertLogs("scenes", level="WARNING") as logs:
            scene = default_scene(self.dir)
        self.assertTrue(any("boat.obj" in line for line in logs.output))
        self.assertEqual(len(scene.surfs), 5)


class TestImages(TempDirTestCase):

    def test_save_and_load(self):
        pixels = np.zeros((2, 3, 3), np.uint8)
        pixels[1, 2] = (1, 2, 3)
        path = os.path.join(self.dir, "img.png")
        save_image(path, pixels)
        np.testing.assert_array_equal(load_image(path), pixels)

    def test_load_background(self):
        path = os.path.join(self.dir, "env.png")
        Image.new("RGB", (4, 2), (9, 8, 7)).save(path)
        background = load_background(path)
        self.assertEqual((background.width, background.height), (4, 2))
        self.assertEqual(background.sample(vec([0, 0, -1])), Color(9, 8, 7))

    def test_missing_background(self):
        with self.assertLogs("scenes", level="WARNING"):
            self.assertIsNone(load_background(os.path.join(self.dir, "envmap.jpg")))

    def test_corrupt_background(self):
        path = self.write("envmap.jpg", "not an image")
        with self.assertLogs("scenes", level="WARNING"):
            self.assertIsNone(load_background(path))


class TestCli(TempDirTestCase):

    def test_render_scene_file(self):
        scene = self.write("scene.json", json.dumps({
            "lights": [{"position": [0, 0, 0], "intensity": 1.5}],
            "objects": [{"name": "sphere", "center": [0, 0, -3], "radius": 1, "material": "red"}],
        }))
        output = os.path.join(self.dir, "out.png")
        status = cli.main(["-s", scene, "-o", output, "-b", os.path.join(self.dir, "none.jpg"),
                           "--width", "8", "--height", "6"])
        self.assertEqual(status, 0)
        image = load_image(output)
        self.assertEqual(image.shape, (6, 8, 3))
        self.assertEqual(tuple(image[0, 0]), tuple(BACKGROUND_COLOR))
        self.assertGreater(image[3, 4, 0], 0)

    def test_bad_scene(self):
        scene = self.write("scene.json", json.dumps({"objects": []}))
        output = os.path.join(self.dir, "out.png")
        self.assertEqual(cli.main(["-s", scene, "-o", output]), 1)
        self.assertFalse(os.path.exists(output))

    def test_scene_is_directory(self):
        output = os.path.join(self.dir, "out.png")
        self.assertEqual(cli.main(["-s", self.dir, "-o", output]), 1)
        self.assertFalse(os.path.exists(output))

    def test_invalid_size(self):
        with self.assertRaises(SystemExit):
            cli.parse_args(["--width", "0"])


if __name__ == '__main__':
    unittest.main()
