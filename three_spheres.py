import logging

from utils import *
from ray import *
from geometry import Sphere
from materials import Material, Color
from cli import render

logging.basicConfig(level=logging.INFO)

red = Material(Color(255, 0, 0), albedo=(0.9, 0.1, 0, 0), specular_exponent=10.)
green = Material(Color(0, 255, 0), albedo=(0.9, 0.1, 0, 0), specular_exponent=10.)
blue = Material(Color(0, 0, 255), albedo=(0.6, 0.3, 0.1, 0), specular_exponent=50.)

scene = Scene([
    Sphere(vec([-3, 0, -16]), 2, red),
    Sphere(vec([-1, -1.5, -12]), 2, green),
    Sphere(vec([1.5, -0.5, -18]), 2, blue),
], lights=[
    PointLight(vec([-20, 20, 20]), 1.5),
])

render(scene, "three_spheres.png")
