"""Plain net-score ranking."""


def simple(plusminus: int) -> float:
    return float(plusminus)
