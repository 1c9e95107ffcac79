"""
Modular Vortex - modular power sequences on a circle

Places `modulus` points evenly around a circle and connects them following
the sequence of modular powers multiplier^1, multiplier^2, ... (mod modulus).
Since there are at most `modulus` distinct remainders, the sequence must
eventually revisit a value; from there on it cycles, and the diagram draws
exactly one period of that cycle.

NUMERIC CORE:
    - exp_mod(base, exp, mod): square-and-multiply modular power
    - detect_cycle(seq): two-pass scan isolating one period of the cycle
    - generate_roots(multiplier, modulus): check-then-append driving loop

DIGIT-ROOT TOOLKIT (alternate generation strategy):
    - digit_sum, digit_root, exp_digit_root
      dr(a * b) = dr(dr(a) * dr(b)), hence dr(x^n) = dr(dr(x) * dr(x^(n-1)))

GEOMETRY:
    - points_labels(modulus, start, center): modulus + 1 rotated points/labels
    - cycle_segments(roots, points): line segments for one cycle period

Usage:
    from modular_vortex import Vortex, detect_cycle, generate_roots

    result = Vortex(811, 3).compute()
    print(result.summary())

    generate_roots(2, 10)          # [2, 4, 8, 6, 2]
    detect_cycle([2, 4, 8, 6, 2])  # [2, 4, 8, 6]

    # Alternate generator: iterated digit roots in radix = modulus
    Vortex(97, 5, generator="digit_root").compute()

    # Geometry for an external renderer
    layout = Vortex(100, 7).layout(size=800)
    layout.points, layout.labels, layout.segments
"""

import logging
import math
import numpy as np
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple, Union


logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_MODULUS = 811
DEFAULT_MULTIPLIER = 3
DEFAULT_COLOR = '#5c37e1'

# Points and labels get unreadable past these sizes.
MAX_POINTS = 200
MAX_LABELS = 100

CANVAS_MARGIN = 50.0
LABEL_OFFSET = 20.0
POINT_RADIUS_CAP = 5.0


# =============================================================================
# ERRORS
# =============================================================================

class VortexError(Exception):
    """Base class for all modular vortex failures."""


class InvalidArgumentError(VortexError, ValueError):
    """An argument is outside the domain of the operation."""


class CycleBoundError(VortexError, RuntimeError):
    """The generation loop ran past the pigeonhole bound without a cycle.

    Every remainder lies in [0, modulus), so a repeat must appear within
    modulus + 1 values. Hitting this means a generator broke that guarantee.
    """


def _check_int(name: str, value, minimum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if minimum is not None and value < minimum:
        raise InvalidArgumentError(f"{name} must be >= {minimum}, got {value}")
    return value


# =============================================================================
# SEQUENCE GENERATOR
# =============================================================================

def exp_mod(base: int, exp: int, mod: int) -> int:
    """
    Compute base^exp mod mod for [possibly] large exp.

    Square-and-multiply: O(log exp) multiplications, every intermediate
    reduced mod `mod`, so nothing grows past mod^2.

    exp_mod(2, 10, 1000) = 24
    exp_mod(3, 0, 7) = 1
    exp_mod(5, 3, 1) = 0    (everything is 0 mod 1)
    """
    base = _check_int("base", base)
    exp = _check_int("exp", exp, minimum=0)
    mod = _check_int("mod", mod, minimum=1)
    if mod == 1:
        return 0

    result = 1
    base %= mod
    while exp > 0:
        if exp & 1:
            result = (result * base) % mod
        base = (base * base) % mod
        exp >>= 1
    return result


# =============================================================================
# DIGIT-ROOT TOOLKIT
# =============================================================================

def _check_radix(radix) -> int:
    return _check_int("radix", radix, minimum=2)


def digit_sum(x: int, radix: int) -> int:
    """Sum of the base-`radix` digits of x.

    digit_sum(9875, 10) = 29
    digit_sum(0b1011, 2) = 3
    """
    x = _check_int("x", x, minimum=0)
    radix = _check_radix(radix)
    total = 0
    while x > 0:
        x, digit = divmod(x, radix)
        total += digit
    return total


def digit_root(x: int, radix: int) -> int:
    """Repeat digit_sum until a single base-`radix` digit remains.

    digit_root(9875, 10) = 2    (9875 -> 29 -> 11 -> 2)
    """
    root = _check_int("x", x, minimum=0)
    radix = _check_radix(radix)
    while root >= radix:
        root = digit_sum(root, radix)
    return root


def exp_digit_root(x: int, n: int, radix: int) -> int:
    """
    Digit root of x^n in base `radix`, without computing x^n.

    Relies on dr(a * b) = dr(dr(a) * dr(b)), which gives
    dr(x^n) = dr(dr(x) * dr(x^(n-1))). Accumulated iteratively; n = 0
    yields 1, n = 1 yields dr(x).
    """
    x = _check_int("x", x, minimum=0)
    n = _check_int("n", n, minimum=0)
    radix = _check_radix(radix)
    if n == 0:
        return 1

    root = digit_root(x, radix)
    acc = root
    for _ in range(n - 1):
        acc = digit_root(root * acc, radix)
    return acc


# =============================================================================
# GENERATOR REGISTRY
# =============================================================================

# Canonical generator signature: (base, exp, mod) -> int in [0, mod)
GeneratorFn = Callable[[int, int, int], int]

GENERATORS: Dict[str, GeneratorFn] = {}


def register_generator(name: str, fn: GeneratorFn) -> GeneratorFn:
    """Register a named generation strategy (base, exp, mod) -> int."""
    if not callable(fn):
        raise InvalidArgumentError(f"generator {name!r} is not callable")
    GENERATORS[name] = fn
    return fn


register_generator("exp_mod", exp_mod)
register_generator("digit_root", exp_digit_root)


def resolve_generator(generator: Union[str, GeneratorFn]) -> Tuple[str, GeneratorFn]:
    """Return (name, fn) for a registered name or a bare callable."""
    if callable(generator):
        return getattr(generator, "__name__", "custom"), generator
    if generator not in GENERATORS:
        raise InvalidArgumentError(
            f"Unknown generator {generator!r}. Use one of {sorted(GENERATORS)}.")
    return generator, GENERATORS[generator]


# =============================================================================
# CYCLE DETECTOR
# =============================================================================

def detect_cycle(seq: Iterable[int]) -> List[int]:
    """
    Detect a cycle in the sequence (x^1, x^2, ..., x^i, ..., x^j) mod n.

    The cycle is closed once x^j = x^i for some j > i. Pass 1 scans for the
    first value already seen and notes where that value first appeared,
    which is where the pre-period ends. Pass 2 restarts from there with a
    fresh seen-set and collects values up to (not including) the first one
    that recurs, i.e. exactly one period.

    Returns [] while no value has repeated yet (including len(seq) < 2).

    detect_cycle([2, 4, 8, 6, 2]) = [2, 4, 8, 6]
    detect_cycle([1, 2, 3, 2])    = [2, 3]
    detect_cycle([1, 1])          = [1]
    detect_cycle([3, 9, 27])      = []
    """
    seq = [int(v) for v in seq]

    first_seen: Dict[int, int] = {}
    start = None
    for i, value in enumerate(seq):
        if value in first_seen:
            start = first_seen[value]
            break
        first_seen[value] = i
    if start is None:
        return []

    seen = set()
    result = []
    for value in seq[start:]:
        if value in seen:
            break
        seen.add(value)
        result.append(value)
    return result


# =============================================================================
# DRIVING LOOP
# =============================================================================

def _drive(multiplier: int, modulus: int, fn: GeneratorFn,
           max_steps: int) -> Tuple[List[int], List[int]]:
    roots: List[int] = []
    exp = 1
    while True:
        tail = detect_cycle(roots)
        if tail:
            logger.debug("cycle closed after %d values (period %d)",
                         len(roots), len(tail))
            return roots, tail
        if len(roots) >= max_steps:
            break
        roots.append(int(fn(multiplier, exp, modulus)))
        exp += 1
    raise CycleBoundError(
        f"No cycle after {max_steps} values for multiplier={multiplier}, "
        f"modulus={modulus}; generator must return values in [0, {modulus})")


def generate_roots(multiplier: int, modulus: int,
                   generator: Union[str, GeneratorFn] = "exp_mod",
                   max_steps: Optional[int] = None) -> List[int]:
    """
    Generate multiplier^1, multiplier^2, ... (mod modulus) until it cycles.

    Each iteration first checks the sequence as it stands and only then
    appends the next value, so the returned list ends with the value that
    closed the cycle (it also appears earlier in the list).

    generate_roots(2, 10) = [2, 4, 8, 6, 2]
    generate_roots(1, 7)  = [1, 1]

    Raises InvalidArgumentError for modulus < 1 or multiplier < 0, and
    CycleBoundError if no cycle appears within max_steps generated values
    (default modulus + 1, enough for any generator that stays in range).
    """
    multiplier = _check_int("multiplier", multiplier, minimum=0)
    modulus = _check_int("modulus", modulus, minimum=1)
    if max_steps is None:
        max_steps = modulus + 1
    max_steps = _check_int("max_steps", max_steps, minimum=1)
    _, fn = resolve_generator(generator)
    roots, _ = _drive(multiplier, modulus, fn, max_steps)
    return roots


# =============================================================================
# GEOMETRY
# =============================================================================

class Label(NamedTuple):
    """Ordinal text anchored at a 2D position."""
    text: str
    x: float
    y: float


def rotate_point(point, center, angle: float) -> Tuple[float, float]:
    """Rotate `point` around `center` by `angle` radians.

    Screen convention (y grows downward), so positive angles run clockwise
    on screen.
    """
    px, py = float(point[0]) - center[0], float(point[1]) - center[1]
    c, s = math.cos(angle), math.sin(angle)
    return (center[0] + px * c - py * s, center[1] + px * s + py * c)


def points_labels(modulus: int, start, center,
                  label_offset: float = LABEL_OFFSET) -> Tuple[np.ndarray, List[Label]]:
    """
    Compute modulus + 1 point positions and their ordinal labels.

    Point k is `start` rotated by k * 360/modulus degrees around `center`;
    point `modulus` closes the circle back onto point 0 and is labelled '0'.
    Labels start `label_offset` above `start` and rotate the same way.

    Returns (points, labels): points is a float array of shape
    (modulus + 1, 2).
    """
    modulus = _check_int("modulus", modulus, minimum=1)
    cx, cy = float(center[0]), float(center[1])
    sx, sy = float(start[0]), float(start[1])

    angles = np.arange(modulus + 1) * (2 * np.pi / modulus)
    cos, sin = np.cos(angles), np.sin(angles)

    dx, dy = sx - cx, sy - cy
    points = np.column_stack([cx + dx * cos - dy * sin,
                              cy + dx * sin + dy * cos])

    ldx, ldy = sx - cx, (sy - label_offset) - cy
    lx = cx + ldx * cos - ldy * sin
    ly = cy + ldx * sin + ldy * cos
    labels = [Label(str(k % modulus), float(lx[k]), float(ly[k]))
              for k in range(modulus + 1)]
    return points, labels


def cycle_start(roots: List[int]) -> int:
    """Index where the drawn cycle begins: first occurrence of roots[-1]."""
    if len(roots) == 0:
        return 0
    return list(roots).index(roots[-1])


def cycle_segments(roots: List[int], points: np.ndarray) -> np.ndarray:
    """
    Line segments for one period of the cycle.

    Connects points[roots[i]] -> points[roots[i + 1]] for i from
    cycle_start(roots) through len(roots) - 2. Shape (m, 2, 2).
    """
    points = np.asarray(points, dtype=float)
    roots = [int(r) for r in roots]
    if len(roots) < 2:
        return np.zeros((0, 2, 2))
    bad = next((r for r in roots if r < 0 or r >= len(points)), None)
    if bad is not None:
        raise InvalidArgumentError(
            f"roots reference point {bad} but only {len(points)} points exist")

    idx = np.array(roots[cycle_start(roots):], dtype=int)
    return np.stack([points[idx[:-1]], points[idx[1:]]], axis=1)


def point_radius(circle_radius: float, modulus: int,
                 cap: float = POINT_RADIUS_CAP) -> float:
    """Marker radius: 40% of the arc between neighbours, capped."""
    return min(0.4 * math.pi * circle_radius / modulus, cap)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass
class VortexResult:
    """Sequence and detected cycle for one (modulus, multiplier) pair."""
    modulus: int
    multiplier: int
    generator: str
    roots: List[int]
    tail: List[int]

    @property
    def steps(self) -> int:
        return len(self.roots)

    @property
    def period(self) -> int:
        return len(self.tail)

    @property
    def pre_period(self) -> int:
        """Number of roots before the cycle is entered."""
        return cycle_start(self.roots)

    def summary(self) -> str:
        lines = ["=" * 60, "MODULAR VORTEX", "=" * 60,
                 f"modulus={self.modulus}  multiplier={self.multiplier}  "
                 f"generator={self.generator}",
                 f"steps={self.steps}  pre_period={self.pre_period}  "
                 f"period={self.period}"]
        shown = self.tail if self.period <= 20 else self.tail[:20] + ['...']
        lines.append(f"cycle: {shown}")
        return "\n".join(str(line) for line in lines)

    def to_dict(self) -> Dict[str, object]:
        return {
            "modulus": self.modulus,
            "multiplier": self.multiplier,
            "generator": self.generator,
            "roots": list(self.roots),
            "tail": list(self.tail),
            "steps": self.steps,
            "period": self.period,
            "pre_period": self.pre_period,
        }

    def __repr__(self):
        return (f"VortexResult(modulus={self.modulus}, multiplier={self.multiplier}, "
                f"period={self.period}, pre_period={self.pre_period})")


@dataclass
class VortexLayout:
    """Canvas geometry for a computed vortex, in screen coordinates."""
    size: float
    center: Tuple[float, float]
    radius: float
    points: np.ndarray
    labels: List[Label]
    segments: np.ndarray
    point_radius: float
    result: Optional[VortexResult] = field(default=None, repr=False)


# =============================================================================
# VORTEX
# =============================================================================

class Vortex:
    """
    Main interface: one modulus/multiplier pair.

    Usage:
        vortex = Vortex(811, 3)
        result = vortex.compute()
        layout = vortex.layout(size=800)
    """

    def __init__(self, modulus: int = DEFAULT_MODULUS,
                 multiplier: int = DEFAULT_MULTIPLIER,
                 generator: Union[str, GeneratorFn] = "exp_mod"):
        self.modulus = _check_int("modulus", modulus, minimum=1)
        self.multiplier = _check_int("multiplier", multiplier, minimum=0)
        self.generator_name, self._generator = resolve_generator(generator)
        self._result: Optional[VortexResult] = None

    def __repr__(self):
        return (f"Vortex(modulus={self.modulus}, multiplier={self.multiplier}, "
                f"generator={self.generator_name!r})")

    def compute(self) -> VortexResult:
        """Run the driving loop (cached after the first call)."""
        if self._result is None:
            roots, tail = _drive(self.multiplier, self.modulus,
                                 self._generator, self.modulus + 1)
            self._result = VortexResult(
                modulus=self.modulus,
                multiplier=self.multiplier,
                generator=self.generator_name,
                roots=roots,
                tail=tail,
            )
        return self._result

    def layout(self, size: float = 800.0,
               margin: float = CANVAS_MARGIN) -> VortexLayout:
        return make_layout(self.compute(), size=size, margin=margin)


def make_layout(result: VortexResult, size: float = 800.0,
                margin: float = CANVAS_MARGIN) -> VortexLayout:
    """Circle inscribed in a size x size canvas with `margin` on each side.

    Point 0 sits at the top of the circle; indices advance clockwise.
    """
    if size <= 2 * margin:
        raise InvalidArgumentError(
            f"size {size} leaves no room inside margin {margin}")
    radius = (size - 2 * margin) / 2
    center = (size / 2, size / 2)
    start = (margin + radius, margin)
    points, labels = points_labels(result.modulus, start, center)
    return VortexLayout(
        size=float(size),
        center=center,
        radius=radius,
        points=points,
        labels=labels,
        segments=cycle_segments(result.roots, points),
        point_radius=point_radius(radius, result.modulus),
        result=result,
    )


def quick_vortex(modulus: int = DEFAULT_MODULUS,
                 multiplier: int = DEFAULT_MULTIPLIER) -> VortexResult:
    """Quick computation with the default generator."""
    return Vortex(modulus, multiplier).compute()
