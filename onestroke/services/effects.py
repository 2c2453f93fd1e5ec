"""
Presentation effects as data.

The engine attaches these to its events, the host plays them.
"""
from onestroke.schemas import VisualEffect

SHAKE_STEP = 0.08 # seconds per shake step
SHAKE_DISPLACEMENT = 10.0 # pixels
FAILURE_POP_DURATION = 0.8
FAILURE_FADE_DURATION = 0.3


def shake_effects() -> tuple[VisualEffect, ...]:
    """ Horizontal shake of the board: left, right, half left, half right, rest"""
    offsets = (
        -SHAKE_DISPLACEMENT,
        SHAKE_DISPLACEMENT,
        -SHAKE_DISPLACEMENT / 2,
        SHAKE_DISPLACEMENT / 2,
        0.0,
    )
    return tuple(
        VisualEffect(
            name="shake",
            delay=step * SHAKE_STEP,
            duration=SHAKE_STEP,
            params={"offset": offset, "curve": "linear"},
        )
        for step, offset in enumerate(offsets)
    )


def failure_indicator_effects() -> tuple[VisualEffect, ...]:
    return (
        VisualEffect(
            name="failure_indicator_pop",
            duration=FAILURE_POP_DURATION,
            params={"from_scale": 0.3, "to_scale": 1.0, "from_rotation": -180.0, "to_rotation": 0.0,
                    "curve": "spring", "stiffness": 170, "damping": 8},
        ),
        VisualEffect(
            name="failure_indicator_fade",
            delay=FAILURE_POP_DURATION,
            duration=FAILURE_FADE_DURATION,
            params={"from_opacity": 1.0, "to_opacity": 0.0, "curve": "ease_out"},
        ),
    )


def failure_effects() -> tuple[VisualEffect, ...]:
    return shake_effects() + failure_indicator_effects()


def success_effects(banner_duration: float) -> tuple[VisualEffect, ...]:
    return (
        VisualEffect(
            name="success_banner",
            duration=banner_duration,
            params={"text": "Level Complete!", "from_scale": 0.5, "to_scale": 1.0, "curve": "spring"},
        ),
    )
