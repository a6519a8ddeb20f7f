from odestep import adaptive_step, fixed_step

k = 1.0
m = 1.0
b = 0.4

dxdt = lambda xx, t: xx[1]
dvdt = lambda xx, t: -k * xx[0] / m - b * xx[1] / m
odes = [dxdt, dvdt]

# select one of the drivers and one of the methods
res = adaptive_step("rk4", odes, [-0.5, 0.0], 0.0, 15.0, hmin=0.01, h=0.5)
print(res.format_table(["x", "v"], odes, rows=slice(-1, None)))

res_fixed = fixed_step("midpoint", odes, [-0.5, 0.0], 0.0, 15.0, h=0.125)
print(f"\nfixed midpoint: {len(res_fixed)} rows, adaptive rk4: {len(res)} rows")
