# (C) 2024 Irreducible Inc.


def int_to_bits(x: int, n_bits: int) -> list[int]:
    """Little-endian bits of x; bit i is the coordinate of x_i when x indexes a point of the hypercube {0, 1}ⁿ."""
    return [(x >> i) & 1 for i in range(n_bits)]
