from __future__ import annotations

BINARY_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")
SI_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB")


def format_bytes(n: int, precision: int = 1, *, si: bool = False) -> str:
    """Scale a byte count to the largest unit whose value is >= 1.

    Binary (1024-based) units by default, decimal units when ``si`` is set.
    Plain byte counts are printed without decimals.
    """
    n = int(n)
    if n < 0:
        raise ValueError(f"byte count must be non-negative: {n}")

    base = 1000 if si else 1024
    units = SI_UNITS if si else BINARY_UNITS

    if n < base:
        return f"{n} B"

    v = float(n)
    idx = 0
    while v >= base and idx < len(units) - 1:
        v /= base
        idx += 1
    # rounding can carry into the next unit (1023.96 KiB -> 1.0 MiB)
    v = round(v, int(precision))
    if v >= base and idx < len(units) - 1:
        v /= base
        idx += 1
    return f"{v:.{int(precision)}f} {units[idx]}"
