from .errors import ShorError, InvalidInputError, OracleFailureError, NoFactorFoundError
from .utils import size_in_bits, precision_bits, prepare_state, bits_to_integer
from .utils_math import (
    gcd,
    lcm,
    mod_pow,
    multiplicative_order,
    integer_root,
    is_perfect_power,
    is_probable_prime,
    continued_fraction,
    convergent_denominator,
    extract_denominator,
)
from .arithmetic import ModularExp
from .oracle import PhaseEstimationOracle, QuantumPhaseOracle, FakeQuantumPhaseOracle
from .order import OrderFinder, OrderEstimator
from .shor import find_factor
