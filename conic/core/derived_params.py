"""
Derived CPTu parameters: stress exponent n, normalised cone resistance Qtn
and soil behaviour type index Ic.

Ic depends on Qtn, and Qtn depends on the stress exponent n, which in turn
depends on Ic (Robertson 2009). Each row is therefore solved by fixed-point
iteration on n, starting from n = 1:

    Qtn = ((qt - σv_tot) / Pa) * (Pa / σv_eff) ** n
    Ic  = sqrt((3.47 - log10 Qtn) ** 2 + (log10 Fr + 1.22) ** 2)
    n'  = min(1, 0.381 * Ic + 0.05 * σv_eff / Pa - 0.15)

until |n' - n| < tolerance or ``max_iter`` passes have been made.

Rows are independent. Every row ends in one of three states:

    CONVERGED  tolerance met
    EXHAUSTED  max_iter reached, last iterate kept
    SKIPPED    Fr negative or NaN, outputs are NaN
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

import numpy as np
import pandas as pd

from ..exceptions import ConfigError, SchemaError
from .basic_params import KPA_PER_MPA
from .columns import resolve_columns

logger = logging.getLogger(__name__)

P_ATM = 101.325  # kPa
DEFAULT_TOLERANCE = 1e-3
DEFAULT_MAX_ITER = 999


class SolverState(str, Enum):
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
    SKIPPED = "skipped"


class ConvergenceRecord(NamedTuple):
    """Outcome of the iterative solve for one row."""
    n: float
    qtn: float
    ic: float
    iterations: int
    converged: bool
    state: SolverState


SKIPPED_RECORD = ConvergenceRecord(np.nan, np.nan, np.nan, 0, False, SolverState.SKIPPED)


def calculate_qtn(n, qt, sigv_eff, sigv_tot, p_atm=P_ATM):
    """Normalised cone resistance with stress exponent ``n`` (qt in kPa)."""
    cn = np.power(p_atm / sigv_eff, n)
    return (qt - sigv_tot) / p_atm * cn


def calculate_ic(qtn, fr):
    """Soil behaviour type index from Qtn and Fr (%)."""
    qtn_term = 3.47 - np.log10(qtn)
    fr_term = np.log10(fr) + 1.22
    return np.sqrt(qtn_term ** 2 + fr_term ** 2)


def calculate_n(ic, sigv_eff, p_atm=P_ATM):
    """Stress exponent update, capped at 1.0 (no lower bound)."""
    return np.minimum(1.0, 0.381 * ic + 0.05 * (sigv_eff / p_atm) - 0.15)


def solve_row(
    qt: float,
    sigv_tot: float,
    sigv_eff: float,
    fr: float,
    p_atm: float = P_ATM,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> ConvergenceRecord:
    """Solve n and Ic for a single row.

    Args:
        qt: corrected cone resistance in kPa.
        sigv_tot: total vertical stress in kPa.
        sigv_eff: effective vertical stress in kPa.
        fr: normalised friction ratio in percent.
        p_atm: atmospheric reference pressure in kPa.
        tolerance: convergence tolerance on successive n values.
        max_iter: maximum number of fixed-point passes.

    Returns:
        ConvergenceRecord. Non-convergence is reported, never raised.
    """
    fr = np.float64(fr)
    if np.isnan(fr) or fr < 0.0:
        return SKIPPED_RECORD

    qt = np.float64(qt)
    sigv_tot = np.float64(sigv_tot)
    sigv_eff = np.float64(sigv_eff)

    n = 1.0
    qtn = ic = np.nan
    iterations = 0

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        while iterations < max_iter:
            iterations += 1
            qtn = calculate_qtn(n, qt, sigv_eff, sigv_tot, p_atm)
            ic = calculate_ic(qtn, fr)
            n_next = calculate_n(ic, sigv_eff, p_atm)

            if abs(n_next - n) < tolerance:
                return ConvergenceRecord(
                    float(n_next), float(qtn), float(ic), iterations, True, SolverState.CONVERGED
                )
            n = n_next

    return ConvergenceRecord(float(n), float(qtn), float(ic), iterations, False, SolverState.EXHAUSTED)


def solve_rows(
    qt, sigv_tot, sigv_eff, fr,
    p_atm: float = P_ATM,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
    workers: Optional[int] = None,
) -> List[ConvergenceRecord]:
    """Map ``solve_row`` over aligned arrays, keeping input order."""
    def _solve(args):
        return solve_row(*args, p_atm=p_atm, tolerance=tolerance, max_iter=max_iter)

    rows = zip(qt, sigv_tot, sigv_eff, fr)
    if workers and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(_solve, rows))
    return [_solve(args) for args in rows]


def add_derived_params(
    table: pd.DataFrame,
    p_atm: float = P_ATM,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
    columns: Optional[Dict] = None,
    workers: Optional[int] = None,
) -> pd.DataFrame:
    """Append n, Qtn, Ic and convergence columns to a copy of ``table``.

    ``table`` must already hold the basic parameter columns.
    """
    if not p_atm > 0.0:
        raise ConfigError(f"p_atm must be positive, got {p_atm}")
    if not tolerance > 0.0:
        raise ConfigError(f"tolerance must be positive, got {tolerance}")
    if int(max_iter) < 1:
        raise ConfigError(f"max_iter must be at least 1, got {max_iter}")

    cols = resolve_columns(columns)
    needed = [cols["qt"], cols["sigv_tot"], cols["sigv_eff"], cols["fr"]]
    missing = [name for name in needed if name not in table.columns]
    if missing:
        raise SchemaError(f"Missing basic parameter column(s): {missing}", missing)

    records = solve_rows(
        table[cols["qt"]].to_numpy(dtype=float) * KPA_PER_MPA,
        table[cols["sigv_tot"]].to_numpy(dtype=float),
        table[cols["sigv_eff"]].to_numpy(dtype=float),
        table[cols["fr"]].to_numpy(dtype=float),
        p_atm=p_atm,
        tolerance=tolerance,
        max_iter=int(max_iter),
        workers=workers,
    )

    out = table.copy()
    out[cols["n"]] = np.array([r.n for r in records], dtype=float)
    out[cols["qtn"]] = np.array([r.qtn for r in records], dtype=float)
    out[cols["ic"]] = np.array([r.ic for r in records], dtype=float)
    out[cols["converged"]] = np.array([r.converged for r in records], dtype=bool)
    out[cols["iterations"]] = np.array([r.iterations for r in records], dtype=int)

    summary = _count_states(records)
    if summary[SolverState.EXHAUSTED.value]:
        logger.warning(
            f"{summary[SolverState.EXHAUSTED.value]} rows did not converge "
            f"within {max_iter} iterations"
        )
    logger.debug(f"Solver summary: {summary}")

    return out


def _count_states(records: List[ConvergenceRecord]) -> Dict[str, int]:
    counts = {state.value: 0 for state in SolverState}
    for record in records:
        counts[record.state.value] += 1
    return counts


def summarize_convergence(table: pd.DataFrame, columns: Optional[Dict] = None) -> Dict[str, int]:
    """Count converged, exhausted and skipped rows of a solved table."""
    cols = resolve_columns(columns)
    converged = table[cols["converged"]].to_numpy(dtype=bool)
    iterations = table[cols["iterations"]].to_numpy(dtype=int)

    skipped = iterations == 0
    return {
        "total": int(len(table)),
        SolverState.CONVERGED.value: int(np.count_nonzero(converged)),
        SolverState.EXHAUSTED.value: int(np.count_nonzero(~converged & ~skipped)),
        SolverState.SKIPPED.value: int(np.count_nonzero(skipped)),
    }


__all__ = [
    "P_ATM",
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_ITER",
    "SolverState",
    "ConvergenceRecord",
    "calculate_qtn",
    "calculate_ic",
    "calculate_n",
    "solve_row",
    "solve_rows",
    "add_derived_params",
    "summarize_convergence",
]
