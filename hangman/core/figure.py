from __future__ import annotations

from typing import List, Tuple

from .state import DEFAULT_LIVES

# Drawing order: one part per lost life.
FIGURE_PARTS: Tuple[str, ...] = (
    "rope",
    "head",
    "left_arm",
    "right_arm",
    "body",
    "left_leg",
    "right_leg",
)


def visible_parts(lost_lives: int) -> List[str]:
    """Parts shown after `lost_lives` misses (clamped to 0..7)."""
    n = max(0, min(int(lost_lives), len(FIGURE_PARTS)))
    return list(FIGURE_PARTS[:n])


def describe(lost_lives: int, max_lives: int = DEFAULT_LIVES) -> str:
    return f"Lost {max(0, min(lost_lives, max_lives))} / {max_lives} lives"


def _line(x1: float, y1: float, x2: float, y2: float, cls: str) -> str:
    return f'<line class="{cls}" x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}" />'


def render_svg(lost_lives: int, width: int = 260, height: int = 160, max_lives: int = DEFAULT_LIVES) -> str:
    """
    Render the gallows and the visible figure parts as an inline SVG.

    The gallows (base, post, beam, brace) is always drawn; body parts follow
    `visible_parts`. Proportions are relative to `width`/`height`; the
    accessible label counts against `max_lives`.
    """
    w, h = float(width), float(height)

    base_y = h * 0.95
    base_left_x = w * 0.15
    base_right_x = w * 0.85
    post_top_y = h * 0.1
    post_x = base_left_x
    rope_x = w * 0.55
    rope_bottom_y = h * 0.32

    head_r = h * 0.055
    head_cy = rope_bottom_y + head_r
    neck_y = head_cy + head_r
    torso_bottom_y = neck_y + h * 0.20

    arm_span = w * 0.16
    arm_y = neck_y + h * 0.05
    leg_span = w * 0.18
    leg_bottom_y = torso_bottom_y + h * 0.22

    shapes = [
        _line(base_left_x, base_y, base_right_x, base_y, "gallows"),
        _line(post_x, base_y, post_x, post_top_y, "gallows"),
        _line(post_x, post_top_y, rope_x, post_top_y, "gallows"),
        _line(post_x, h * 0.35, w * 0.32, post_top_y, "gallows"),
    ]

    parts = {
        "rope": _line(rope_x, post_top_y, rope_x, rope_bottom_y, "figure"),
        "head": f'<circle class="figure" cx="{rope_x:.1f}" cy="{head_cy:.1f}" r="{head_r:.1f}" />',
        "left_arm": _line(rope_x, arm_y, rope_x - arm_span, arm_y + h * 0.05, "figure"),
        "right_arm": _line(rope_x, arm_y, rope_x + arm_span, arm_y + h * 0.05, "figure"),
        "body": _line(rope_x, neck_y, rope_x, torso_bottom_y, "figure"),
        "left_leg": _line(rope_x, torso_bottom_y, rope_x - leg_span, leg_bottom_y, "figure"),
        "right_leg": _line(rope_x, torso_bottom_y, rope_x + leg_span, leg_bottom_y, "figure"),
    }
    shapes.extend(parts[name] for name in visible_parts(lost_lives))

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" role="img" aria-label="{describe(lost_lives, max_lives)}">'
        "<style>"
        ".gallows{stroke:#8a8a8a;stroke-width:3;fill:none}"
        ".figure{stroke:currentColor;stroke-width:3;fill:none}"
        "</style>"
        + "".join(shapes)
        + "</svg>"
    )
