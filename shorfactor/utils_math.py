from __future__ import annotations

from functools import lru_cache

# Bases for which Miller-Rabin is deterministic below 3.3 * 10^24.
_MILLER_RABIN_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)


def gcd(a: int, b: int) -> int:
    """Return the greatest common divisor of `a` and `b`.

    Signs are ignored, so gcd(a, 0) == |a|.
    """
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    """Return the least common multiple of `a` and `b`. lcm(a, 0) == 0."""
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // gcd(a, b)


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Return `base` ** `exponent` modulo `modulus`.

    Args:
        base: The base.
        exponent: The exponent. Must be non-negative.
        modulus: The modulus. Must be >= 1.

    Raises:
        ValueError: if `exponent` < 0 or `modulus` < 1.
    """
    if exponent < 0:
        msg = f"mod_pow: `exponent` ({exponent}) must be non-negative."
        raise ValueError(msg)
    if modulus < 1:
        msg = f"mod_pow: `modulus` ({modulus}) must be >= 1."
        raise ValueError(msg)
    return pow(base, exponent, modulus)


@lru_cache(maxsize=128)
def multiplicative_order(a: int, N: int) -> int:
    """Return the order of `a` modulo `N` by brute force. Runs in O(N) time.

    Raises:
        ValueError: if `N` <= 1 or gcd(a, N) != 1.
    """
    if not (N > 1 and gcd(a, N) == 1):
        msg = f"multiplicative_order: invalid arguments a={a} and N={N}."
        raise ValueError(msg)
    d, r = a % N, 1
    while d != 1:
        d, r = (d * a) % N, r + 1
    return r


def integer_root(n: int, k: int) -> int:
    """Return the floor of the `k`-th root of `n`, computed exactly.

    Args:
        n: The radicand. Must be non-negative.
        k: The degree of the root. Must be >= 1.

    Raises:
        ValueError: if `n` < 0 or `k` < 1.
    """
    if n < 0 or k < 1:
        msg = f"integer_root: invalid arguments n={n} and k={k}."
        raise ValueError(msg)
    if n < 2 or k == 1:
        return n
    # Newton's method from an initial guess that is never below the root.
    x = 1 << -(-n.bit_length() // k)
    while True:
        y = ((k - 1) * x + n // x ** (k - 1)) // k
        if y >= x:
            return x
        x = y


def is_perfect_power(n: int) -> bool:
    """Return whether `n` = b^k for integers b >= 2 and k >= 2."""
    if n < 4:
        return False
    for k in range(2, n.bit_length() + 1):
        b = integer_root(n, k)
        if b < 2:
            break
        if b**k == n:
            return True
    return False


def is_probable_prime(n: int) -> bool:
    """Miller-Rabin primality test.

    Deterministic for n < 3.3 * 10^24. Above that, a composite passes with
    probability at most 4^-13.
    """
    if n < 2:
        return False
    for p in _MILLER_RABIN_BASES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d, s = d // 2, s + 1
    for a in _MILLER_RABIN_BASES:
        x = mod_pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = (x * x) % n
            if x == n - 1:
                break
        else:
            return False
    return True


def continued_fraction(p: int, q: int, limit: int | None = None) -> list[int]:
    """Given p/q, return its continued fraction.

    Args:
        p: The numerator.
        q: The denominator.
        limit: If given, stop after this many terms.

    Returns:
        The continued fraction expansion of p/q, [a0; a1, a2, ..., an].
    """
    coeffs = list()
    while q != 0 and (limit is None or len(coeffs) < limit):
        a = p // q
        coeffs.append(a)
        p, q = q, p - q * a
    return coeffs


def convergent_denominator(coeffs: list[int]) -> int:
    """Return the denominator of the fraction [a0; a1, ..., an].

    The fraction is folded from the innermost term outward, so an empty
    expansion gives 1/0.
    """
    x, y = 1, 0  # numerator, denominator
    for q in reversed(coeffs):
        x, y = q * x + y, x
    return y


def extract_denominator(j: int, m: int, bound: int) -> int:
    """Estimate the order behind a phase measurement j / 2^m.

    Continued fraction convergents of j / 2^m are taken with an increasing
    number of terms, starting at two. Stops when the denominator no longer
    changes or would reach `bound`, and returns the last denominator below
    `bound`. The result divides the true order when the measurement is
    close enough to some k/r, but may be a proper divisor of it.

    Args:
        j: The phase numerator. Must satisfy 0 < j < 2^m.
        m: The number of bits of precision of the phase.
        bound: Upper bound (exclusive) on the denominator, usually the
            modulus.

    Returns:
        The denominator of the best convergent below `bound`, or 1 if even
        the two-term convergent is too large.

    Raises:
        ValueError: if `j` is outside (0, 2^m).
    """
    if not 0 < j < 2**m:
        msg = f"extract_denominator: `j` ({j}) must be in (0, 2^{m})."
        raise ValueError(msg)
    q = 2**m
    limit = 2
    y = 0
    next_y = convergent_denominator(continued_fraction(j, q, limit))
    while y != next_y and next_y < bound:
        y = next_y
        limit += 1
        next_y = convergent_denominator(continued_fraction(j, q, limit))
    return y or 1
