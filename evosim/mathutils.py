# evosim/mathutils.py
import math


def distance(p1, p2):
    """Euclidean distance between two (x, y) points."""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def angle(p1, p2):
    """Heading in radians from p1 towards p2."""
    return math.atan2(p2[1] - p1[1], p2[0] - p1[0])


def normalize_angle(a):
    return (a + math.pi) % (2 * math.pi) - math.pi


def angle_difference(current, target):
    """Shortest signed turn from `current` to `target`, in [-pi, pi)."""
    return normalize_angle(target - current)


def clamp(value, lo, hi):
    return max(lo, min(hi, value))


def map_range(value, in_min, in_max, out_min, out_max):
    return (value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def normalize(value, lo, hi):
    return (value - lo) / (hi - lo)


def lerp(a, b, t):
    return a + (b - a) * t


def magnitude(vx, vy):
    return math.hypot(vx, vy)


# --- Random sampling ---
# Every sampler takes an explicit numpy Generator so a simulation can be
# replayed from its seed.

def chance(rng, p):
    """Single Bernoulli trial."""
    return rng.random() < p


def uniform(rng, lo, hi):
    return float(rng.uniform(lo, hi))


def random_int(rng, lo, hi):
    """Random integer in [lo, hi], both ends inclusive."""
    return int(rng.integers(lo, hi + 1))


def gaussian(rng, mean=0.0, std_dev=1.0):
    return float(rng.normal(mean, std_dev))
