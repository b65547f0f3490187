# main.py
import argparse
import os
import sys
import pygame
from core.vector import Vector3
from geometry.mesh import Triangle, load_obj_triangle
from renderer.framebuffer import Framebuffer
from renderer.rasterizer import BACKENDS, Rasterizer

# Reference scene: one triangle with a different colour at each vertex
DEFAULT_SCENE = {
    "width": 1024,
    "height": 1024,
    "fill": (0.32, 0.32, 0.32),
    "vertices": [(80, 80, 100), (160, 800, 100), (480, 320, 100)],
    "colors": [(0.84, 0.84, 0.0), (0.0, 0.84, 0.84), (0.84, 0.0, 0.84)],
    "output": os.path.join("ppm", "triangle.ppm"),
}

def default_triangle() -> Triangle:
    v0, v1, v2 = (Vector3(*p) for p in DEFAULT_SCENE["vertices"])
    c0, c1, c2 = (Vector3(*c) for c in DEFAULT_SCENE["colors"])
    return Triangle(v0, v1, v2, c0, c1, c2)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Rasterize a single triangle and write it as a PPM image.")
    parser.add_argument("--width", type=int, default=DEFAULT_SCENE["width"])
    parser.add_argument("--height", type=int, default=DEFAULT_SCENE["height"])
    parser.add_argument("--fill", type=float, nargs=3, metavar=("R", "G", "B"),
                        default=DEFAULT_SCENE["fill"], help="background colour in [0, 1]")
    parser.add_argument("--obj", help="OBJ file whose first face is rasterized instead of the default triangle")
    parser.add_argument("--output", default=DEFAULT_SCENE["output"], help="PPM output path")
    parser.add_argument("--png", help="also save a PNG (or any Pillow format) to this path")
    parser.add_argument("--two-sided", action="store_true", help="do not cull triangles facing away")
    parser.add_argument("--backend", choices=BACKENDS, default="numba")
    parser.add_argument("--no-clamp", action="store_true",
                        help="write out-of-range channels unclamped")
    parser.add_argument("--preview", action="store_true", help="show the result in a window")
    return parser.parse_args(argv)

def preview(frame: Framebuffer):
    """Show the framebuffer in a pygame window until it is closed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((frame.width, frame.height))
        pygame.display.set_caption("Triangle Rasterizer")
        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(frame.to_channels().transpose(1, 0, 2))
        screen.blit(surface, (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()

def main(argv=None) -> int:
    args = parse_args(argv)

    triangle = load_obj_triangle(args.obj) if args.obj else default_triangle()
    frame = Framebuffer(args.width, args.height, Vector3(*args.fill))
    rasterizer = Rasterizer(cull_backfaces=not args.two_sided, backend=args.backend)

    print(f"Rasterizing {triangle} at {frame.width}x{frame.height} ({args.backend} backend)")
    covered = rasterizer.rasterize(triangle, frame)
    print(f"Covered {covered} of {frame.width * frame.height} pixels")

    out_dir = os.path.dirname(args.output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    frame.write_ppm(args.output, clamp=not args.no_clamp)
    print(f"Wrote {args.output}")

    if args.png:
        frame.save_image(args.png)
        print(f"Wrote {args.png}")

    if args.preview:
        preview(frame)
    return 0

if __name__ == "__main__":
    sys.exit(main())
