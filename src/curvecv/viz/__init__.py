from .overlay import (
    points_from_binary_image, to_bgr,
    draw_line, draw_circle, draw_ellipse, draw_points, draw_primitive,
    draw_result, show_and_save_overlay,
)

__all__ = [
    "points_from_binary_image", "to_bgr",
    "draw_line", "draw_circle", "draw_ellipse", "draw_points", "draw_primitive",
    "draw_result", "show_and_save_overlay",
]
