"""Cross-validation of high-precision vote percentages.

The shares of all candidates in a municipality must add up to 100.  Because
the feed rounds each share independently, two one-ulp artifacts are
tolerated; any other total is reported as a mismatch.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Context, Decimal, localcontext

TOLERATED_TOTALS = ("100", "100.000000001", "99.999999999")

_SUM_CONTEXT = Context(prec=50)


def canonical_decimal(value: Decimal) -> str:
    """Plain decimal rendering without trailing zeros or exponent (`99.5000` -> `99.5`)."""
    with localcontext(_SUM_CONTEXT):
        normalized = value.normalize()
    return format(normalized, "f")


@dataclass(frozen=True)
class MismatchRecord:
    """A municipality whose percentages do not sum to a tolerated total."""

    municipality_name: str
    computed_total: Decimal

    @property
    def display_total(self) -> str:
        return canonical_decimal(self.computed_total)


class PercentageAccumulator:
    """Running high-precision sum of one municipality's vote shares."""

    def __init__(self) -> None:
        self._total = Decimal(0)

    def add(self, value: Decimal) -> None:
        with localcontext(_SUM_CONTEXT):
            self._total += value

    @property
    def total(self) -> Decimal:
        return self._total

    def canonical_total(self) -> str:
        return canonical_decimal(self._total)

    def check(self, municipality_name: str) -> MismatchRecord | None:
        """Compare the total against the tolerated literals.

        Returns:
            ``None`` when the total is tolerated, otherwise a mismatch record.
        """
        if self.canonical_total() in TOLERATED_TOTALS:
            return None
        return MismatchRecord(municipality_name=municipality_name, computed_total=self._total)


def validate_percentages(municipality_name: str, values: Iterable[Decimal]) -> MismatchRecord | None:
    """Sum a municipality's shares with a fresh accumulator and check the total."""
    accumulator = PercentageAccumulator()
    for value in values:
        accumulator.add(value)
    return accumulator.check(municipality_name)
