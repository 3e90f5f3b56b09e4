"""Runtime configuration for the Taichi backend.

Taichi must be initialised before any module that declares a field is
imported (``core.stats``, ``scene.world``). ``init_tracer`` is the single
place that does this, so drivers and the test suite set up the runtime the
same way.

Example:
    >>> from tracecore.config import TracerConfig, init_tracer
    >>> init_tracer(TracerConfig(arch="cpu", random_seed=42))
    >>> from tracecore.scene.world import add_sphere_object
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import taichi as ti

logger = logging.getLogger(__name__)

_ARCHES = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
    "cuda": ti.cuda,
    "vulkan": ti.vulkan,
    "metal": ti.metal,
}


@dataclass
class TracerConfig:
    """Settings passed to ``ti.init``.

    Attributes:
        arch: Backend name, one of "cpu", "gpu", "cuda", "vulkan", "metal".
            "gpu" lets Taichi pick any available GPU backend and fall back
            to the CPU.
        random_seed: Seed for ti.random, which drives Lambertian scattering.
        debug: Enable Taichi's debug mode (bounds checks, kernel asserts).
        log_level: Level applied to the ``tracecore`` logger.
    """

    arch: str = "cpu"
    random_seed: int = 0
    debug: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> TracerConfig:
        """Build a config from TRACECORE_* environment variables.

        Unset variables keep the dataclass defaults.
        """
        defaults = cls()
        return cls(
            arch=os.environ.get("TRACECORE_ARCH", defaults.arch),
            random_seed=int(os.environ.get("TRACECORE_SEED", defaults.random_seed)),
            debug=os.environ.get("TRACECORE_DEBUG", "0").lower() in ("1", "true", "yes"),
            log_level=os.environ.get("TRACECORE_LOG_LEVEL", defaults.log_level),
        )


def resolve_arch(name: str):
    """Map a backend name to the Taichi arch constant.

    Raises:
        ValueError: If the name is not a known backend.
    """
    try:
        return _ARCHES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown Taichi arch {name!r}; expected one of {sorted(_ARCHES)}"
        ) from None


def init_tracer(config: TracerConfig | None = None) -> TracerConfig:
    """Initialise Taichi for tracing.

    Args:
        config: Settings to use. Defaults to ``TracerConfig.from_env()``.

    Returns:
        The config that was applied.

    Raises:
        ValueError: If the arch name or log level is not recognised.
    """
    if config is None:
        config = TracerConfig.from_env()

    arch = resolve_arch(config.arch)
    logging.getLogger("tracecore").setLevel(config.log_level.upper())

    ti.init(arch=arch, random_seed=config.random_seed, debug=config.debug)
    logger.info(
        "Taichi initialised (arch=%s, seed=%d, debug=%s)",
        config.arch,
        config.random_seed,
        config.debug,
    )
    return config
