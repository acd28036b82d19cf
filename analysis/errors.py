"""Build errors raised while validating the measure-map dataset.

Every error aborts the whole document build; there is no degraded mode.
"""

from __future__ import annotations

from collections.abc import Iterable


class MeasureMapBuildError(ValueError):
    """Base class for fatal measure-map build errors."""


class MissingDatasetError(MeasureMapBuildError):
    """Raised when the joined dataset file cannot be read."""

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize the error.

        Args:
            path: Path that was requested.
            reason: Short explanation from the underlying reader.
        """

        super().__init__(f"Cannot read measure-map dataset {path!r}: {reason}")
        self.path = path


class MissingFieldError(MeasureMapBuildError):
    """Raised when the dataset lacks one or more required fields."""

    def __init__(self, missing: Iterable[str]) -> None:
        """Initialize the error.

        Args:
            missing: Required field names absent from the dataset.
        """

        self.missing = tuple(missing)
        super().__init__(f"Dataset is missing required field(s): {', '.join(self.missing)}.")


class UnknownPhaseError(MeasureMapBuildError):
    """Raised when a row carries a phase outside the known vocabulary."""

    def __init__(self, values: Iterable[object]) -> None:
        """Initialize the error.

        Args:
            values: Offending phase values (None for missing phases).
        """

        self.values = tuple(values)
        shown = ", ".join(repr(value) for value in self.values)
        super().__init__(
            f"Unrecognised phase value(s): {shown}; expected one of demand, supply, operate, outcome."
        )


class StrengthQualityError(MeasureMapBuildError):
    """Raised when a genuine mapping has a null or zero strength.

    A zero strength is reserved for synthetic gap rows, so a real mapping that
    carries one cannot be told apart from "no mapping".
    """

    def __init__(self, *, field: str, measure_ids: Iterable[object]) -> None:
        """Initialize the error.

        Args:
            field: Strength field that failed the check.
            measure_ids: Measure identifiers on the offending rows.
        """

        self.field = field
        self.measure_ids = tuple(measure_ids)
        shown = ", ".join(str(value) for value in self.measure_ids)
        super().__init__(f"Mapped measure(s) with null or zero {field}: {shown}.")
