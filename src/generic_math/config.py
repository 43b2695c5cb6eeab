"""Environment-driven feature flags, read once at import."""

from __future__ import annotations

import os
from typing import Final

USE_FLOAT_FAST_PATH: Final[bool] = os.environ.get("GENERIC_MATH_DISABLE_FLOAT_FAST_PATH", "0") != "1"
USE_JAX_JIT: Final[bool] = os.environ.get("GENERIC_MATH_DISABLE_JAX_JIT", "0") != "1"
PI_ITERATIONS: Final[int] = max(1, int(os.environ.get("GENERIC_MATH_PI_ITERATIONS", "100")))
LOG_SYNTHESIS: Final[bool] = os.environ.get("GENERIC_MATH_LOG_SYNTHESIS", "0") == "1"
