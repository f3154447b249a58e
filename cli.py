import argparse
import logging
import sys

from ray import render_image, IMAGE_WIDTH, IMAGE_HEIGHT
from scenes import SceneError, load_scene, default_scene, load_background, DEFAULT_BACKGROUND
from utils import save_image

logger = logging.getLogger(__name__)


def render(scene, output_path="out.png", width=IMAGE_WIDTH, height=IMAGE_HEIGHT):
    """Render the scene and write the image to output_path."""
    pixels = render_image(scene, width, height)
    save_image(output_path, pixels)
    return pixels


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Whitted-style recursive ray tracer')
    parser.add_argument('-s', '--scene', type=str, default=None,
                        help='JSON scene description (default: built-in scene)')
    parser.add_argument('-o', '--output', type=str, default='out.png',
                        help='Name of the output image file')
    parser.add_argument('-b', '--background', type=str, default=DEFAULT_BACKGROUND,
                        help='Equirectangular environment map image')
    parser.add_argument('--width', type=int, default=IMAGE_WIDTH, help='Image width')
    parser.add_argument('--height', type=int, default=IMAGE_HEIGHT, help='Image height')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log per-row progress')
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error("image width and height must be positive")
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        scene = load_scene(args.scene) if args.scene else default_scene()
    except SceneError as e:
        logger.error("%s", e)
        return 1
    scene.background = load_background(args.background)

    pixels = render_image(scene, args.width, args.height)
    try:
        save_image(args.output, pixels)
    except (OSError, ValueError) as e:
        # Pillow raises ValueError for an unrecognised file extension
        logger.error("cannot write %s: %s", args.output, e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
