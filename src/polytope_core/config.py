"""
Configuration & Numeric Constants
=================================
Central registry for the global tolerances and switches used by the polytope
core.

Every geometric comparison in the package (circumsphere consistency,
reciprocation-centre coincidence, equilateral checks, subspace rank tests,
cross-section genericity) is made against `EPSILON`. Each of those operations
also accepts an explicit `eps` keyword, so this value is only the default.

Importing this module switches JAX into 64-bit mode: a 1e-9 absolute tolerance
is below float32 resolution for coordinates of order one.

Exports:
    EPSILON (float): Absolute geometric tolerance. Env: POLYTOPE_EPSILON.
    DEFAULT_PYRAMID_HEIGHT (float): Apex height of concrete pyramid products.
    DEFAULT_PRISM_HEIGHT (float): Height of concrete prisms, tegums and
        antiprisms.
    STRICT_CONSTRUCTION (bool): Whether structural preconditions raise.
        Env: POLYTOPE_STRICT ("0", "false" or "no" to relax).
"""
import os
import logging

import jax

jax.config.update("jax_enable_x64", True)

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


# Global Constants
EPSILON: float = _env_float("POLYTOPE_EPSILON", 1e-9)
DEFAULT_PYRAMID_HEIGHT: float = 1.0
DEFAULT_PRISM_HEIGHT: float = 1.0
STRICT_CONSTRUCTION: bool = _env_flag("POLYTOPE_STRICT", True)


def check_precondition(condition: bool, message: str) -> None:
    """Enforce a structural precondition according to `STRICT_CONSTRUCTION`.

    Args:
        condition: The precondition that should hold
        message: Description of the violated precondition

    Raises:
        ValueError: If the condition fails and construction is strict
    """
    if condition:
        return
    if STRICT_CONSTRUCTION:
        raise ValueError(message)
    logger.warning(f"Precondition violated: {message}")
