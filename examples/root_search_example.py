#!/usr/bin/env python3

# Examples of finding all real roots of a scalar function in an interval.

import numpy as np

from dualroot import derivatives, newton, root_search


def damped_wave(x):
    """A decaying oscillation with a finite number of roots."""
    return np.cos(x) * np.exp(-0.1 * x) - 0.2


# Exact derivatives at a point.
f, df_dx, d2f_dx2 = derivatives(damped_wave, 1.0)
print(f"f(1) = {f:.6f}, f'(1) = {df_dx:.6f}, f''(1) = {d2f_dx2:.6f}")

# All roots found by scanning [0, 20].
roots, brackets = root_search(damped_wave, 0.0, 20.0, resolution=400,
                              patience=50, tolerance=1e-10, verbose=True)
print(f"Found {len(roots)} root(s) in {len(brackets)} bracket(s):")
for r in roots:
    print(f"    x = {r:.10f}, f(x) = {damped_wave(r):+.2E}")

# A single root, with convergence details.
root, result = newton(damped_wave, 1.0, 50, 1e-10, full_output=True,
                      verbose=True)
print(result)
