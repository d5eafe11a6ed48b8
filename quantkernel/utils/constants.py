"""
Numerical constants, iteration caps and tolerances.

Every iterative routine in the kernel takes its cap as a keyword argument
defaulting to the value defined here, so convergence behaviour can be
tightened or relaxed per call. All values are calibrated for IEEE-754
double precision.
"""

from typing import Final

# Mathematical constants (correctly rounded doubles)
PI: Final[float] = 3.14159265358979323846264338327950288
E: Final[float] = 2.71828182845904523536028747135266250
SQRT2: Final[float] = 1.41421356237309504880168872420969808
TWO_PI: Final[float] = 2.0 * PI
HALF_PI: Final[float] = 0.5 * PI
LN2: Final[float] = 0.69314718055994530941723212145817657
LN10: Final[float] = 2.30258509299404568401799145468436421

# Series depths and iteration caps
EXP_SERIES_TERMS: Final[int] = 32  # Taylor terms for e^f, |f| <= 0.5
LN_MAX_ITERATIONS: Final[int] = 512  # Newton-Raphson steps for ln
SQRT_MAX_ITERATIONS: Final[int] = 1024  # Babylonian steps, initial guess 1
ERF_MAX_SERIES_TERMS: Final[int] = 128  # Maclaurin terms for |x| <= 4
ERF_MAX_ASYMPTOTIC_TERMS: Final[int] = 9  # asymptotic series diverges past this
ERF_ASYMPTOTIC_THRESHOLD: Final[float] = 4.0  # switch point between the two series
ERF_POSITIVE_SERIES_THRESHOLD: Final[float] = 2.0  # above this the Maclaurin series is summed term-positive
TRIG_SERIES_TERMS: Final[int] = 16  # Taylor terms for sin/cos on [-pi, pi)

# Composite Simpson partition schedule
SIMPSON_INITIAL_PARTITION: Final[int] = 4
SIMPSON_MIN_PARTITION: Final[int] = 16  # no convergence claim below this
SIMPSON_MAX_PARTITION: Final[int] = 65536

# Normal distribution bounds
MAX_STANDARD_DEVIATIONS: Final[float] = 8.0  # Beyond ±8σ, CDF is effectively 0 or 1
MAX_PDF_ARGUMENT: Final[float] = 10.0  # Beyond ±10, PDF < 2e-22

# Edge case detection thresholds
EPSILON_TIME: Final[float] = 1e-6  # ~30 seconds; below this, use intrinsic value
EPSILON_VOL: Final[float] = 1e-6  # below this, deterministic pricing

# Newton-Raphson inversion
IMPLIED_ERROR_SCALE: Final[float] = 1e2  # machine epsilon multiple for |model - target|
NEWTON_MAX_ITERATIONS: Final[int] = 100
NEWTON_STEP_TOLERANCE: Final[float] = 1e-12  # absolute step accepted as converged
NEWTON_MIN_DERIVATIVE: Final[float] = 1e-10  # below this, the step is meaningless

# Implied volatility
DEFAULT_IMPLIED_VOL: Final[float] = 0.5  # initial guess when no better one exists
IV_MIN_VOL: Final[float] = 1e-4
IV_MAX_VOL: Final[float] = 10.0  # 1000% annualized
ARBITRAGE_TOLERANCE: Final[float] = 1e-6

# Coupon bonds
DEFAULT_YIELD: Final[float] = 0.1  # initial guess for yield to maturity
DEFAULT_PAYMENTS_PER_YEAR: Final[int] = 2  # semiannual, bond equivalent
DEFAULT_FACE_VALUE: Final[float] = 100.0
YTM_MIN: Final[float] = -0.99  # keeps 1 + y/m strictly positive for m >= 1
YTM_MAX: Final[float] = 10.0
