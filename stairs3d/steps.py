"""Step sizing shared by the straight and curved generators.

A staircase is sized either by a fixed number of steps spread over the
requested height, or by a fixed riser height that snaps the overall height to
a whole number of steps.
"""
from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Union

from .errors import DegenerateGeometry, InvalidParameter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumSteps:
    """Divide the requested height into ``count`` equal steps."""

    count: int = 6


@dataclass(frozen=True)
class StepHeight:
    """Use a fixed riser height; the staircase height snaps to fit."""

    height: float = 0.5


StepType = Union[NumSteps, StepHeight]


@dataclass(frozen=True)
class StepLayout:
    """Resolved step count and riser height for one generation run."""

    num_steps: int
    step_height: float
    height: float


def check_positive(name: str, value: object) -> float:
    """Return ``value`` as a float, raising :class:`InvalidParameter` unless it is > 0."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not value > 0.0:
        raise InvalidParameter(f"{name} must be positive, got {value!r}")
    return value


def check_nondegenerate(name: str, value: float) -> float:
    """Raise :class:`DegenerateGeometry` when ``value`` is zero, infinite or NaN."""
    if value == 0.0 or not math.isfinite(value):
        raise DegenerateGeometry(f"{name} evaluates to {value!r}")
    return value


def make_step_type(step_type: object = "num_steps", num_steps: int = 6,
                   user_step_height: float = 0.5) -> StepType:
    """Build a :data:`StepType` from the flat keyword form used by the entry points.

    ``step_type`` may already be a :class:`NumSteps` / :class:`StepHeight`
    instance, in which case it is returned unchanged and the other two
    arguments are ignored.
    """
    if isinstance(step_type, (NumSteps, StepHeight)):
        return step_type
    if step_type == "num_steps":
        return NumSteps(num_steps)
    if step_type == "step_height":
        return StepHeight(user_step_height)
    raise InvalidParameter(f"step_type must be 'num_steps' or 'step_height', got {step_type!r}")


def resolve_steps(height: float, step_type: StepType) -> StepLayout:
    """Resolve ``step_type`` against the requested ``height``."""
    height = check_positive("height", height)
    if isinstance(step_type, NumSteps):
        count = step_type.count
        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            raise InvalidParameter(f"num_steps must be an integer, got {count!r}")
        if count < 1:
            raise InvalidParameter(f"num_steps must be at least 1, got {count!r}")
        num_steps = int(count)
        step_height = height / num_steps
    elif isinstance(step_type, StepHeight):
        step_height = check_positive("user_step_height", step_type.height)
        ratio = check_nondegenerate("height / user_step_height", height / step_height)
        num_steps = max(math.floor(ratio), 1)
        height = step_height * num_steps
    else:
        raise InvalidParameter(f"unsupported step type {step_type!r}")

    check_nondegenerate("step_height", step_height)
    check_nondegenerate("height", height)
    logger.debug("resolved %d steps of height %g (total %g)", num_steps, step_height, height)
    return StepLayout(num_steps=num_steps, step_height=step_height, height=height)


__all__ = [
    "NumSteps",
    "StepHeight",
    "StepType",
    "StepLayout",
    "check_positive",
    "check_nondegenerate",
    "make_step_type",
    "resolve_steps",
]
