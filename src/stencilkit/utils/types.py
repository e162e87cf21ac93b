"""Shared typing aliases for stencilkit."""

from __future__ import annotations

from typing import Callable, TypeAlias

import numpy as np
from numpy.typing import NDArray

FloatArray: TypeAlias = NDArray[np.float64]

UnivariateFunction: TypeAlias = Callable[[float], float]
MultivariateFunction: TypeAlias = Callable[[FloatArray], float]
