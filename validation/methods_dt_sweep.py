"""List accuracy of the single-step methods and their change with h"""

import math
import os

from odestep import fixed_step, adaptive_step, list_methods, AdaptiveConfig

a = 1.0
x0 = 10.0
T = 1.0

def actual(t):
    return x0 * math.exp(-a * t)

odes = [lambda xx, t: -a * xx[0]]
hs = [2.0**-2, 2.0**-4, 2.0**-6, 2.0**-8, 2.0**-10]
q_uppers = [5e-2, 5e-3, 5e-4, 5e-5]

methods = list_methods()

def run_fixed(results, failed):
    for method in methods:
        results[method] = []
        failed[method] = []
        for h in hs:
            try:
                res = fixed_step(method, odes, [x0], 0.0, T, h)
                error = abs(res.last.y[0] - actual(res.last.t))
                results[method].append((h, error, len(res)))
            except Exception as e:
                failed[method].append((h, str(e)))

def run_adaptive(results, failed):
    for method in methods:
        results[method] = []
        failed[method] = []
        for q_upper in q_uppers:
            cfg = AdaptiveConfig(q_upper=q_upper, q_lower=q_upper / 10)
            try:
                res = adaptive_step(method, odes, [x0], 0.0, T, 1e-6, 0.5, config=cfg)
                error = abs(res.last.y[0] - actual(res.last.t))
                results[method].append((q_upper, error, len(res)))
            except Exception as e:
                failed[method].append((q_upper, str(e)))

def write_results(f, results, failed, title, label):
    f.write(f"{title}\n")
    f.write("=" * len(title) + "\n\n")
    for method in methods:
        f.write(f"Method: {method}\n")
        f.write(f"{'rows':>10} {label:>10} {'error':>15}\n")
        f.write("-" * 37 + "\n")
        for value, error, rows in results[method]:
            f.write(f"{rows:>10} {value:>10.2e} {error:>15.4e}\n")
        if failed[method]:
            f.write("Failed:\n")
            for value, err in failed[method]:
                f.write(f"  {label}={value:.2e}: {err}\n")
        f.write("\n")

results_fixed = {}
failed_fixed = {}
run_fixed(results_fixed, failed_fixed)

results_adaptive = {}
failed_adaptive = {}
run_adaptive(results_adaptive, failed_adaptive)

# Write to file
fname = os.path.splitext(__file__)[0] + ".txt"
with open(fname, "w") as f:
    write_results(f, results_fixed, failed_fixed, "Fixed-step driver", "h")
    write_results(f, results_adaptive, failed_adaptive, "Adaptive driver", "q_upper")
