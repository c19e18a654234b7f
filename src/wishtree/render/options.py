"""Render configuration: failure policy and timestamp handling."""

import os
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

TimestampType = Union[int, float, datetime]


class FailurePolicy(str, Enum):
    """What to do with partial output when a render fails.

    Values:
        ABORT: Stop immediately and release the sink without finalizing it (default)
        LEAVE_PARTIAL: Finalize whatever was written so far, then report the error
        CLEAN_UP: Release the sink and delete the partial output, then report the error
    """

    ABORT = "abort"
    LEAVE_PARTIAL = "leave_partial"
    CLEAN_UP = "clean_up"

    @classmethod
    def parse(cls, value: Union[str, "FailurePolicy"]) -> "FailurePolicy":
        """Accept an enum member or its name in any case, with "-" or "_" separators."""
        if isinstance(value, FailurePolicy):
            return value
        try:
            return cls(value.lower().replace("-", "_"))
        except ValueError:
            choices = ", ".join(f"'{p.value}'" for p in cls)
            raise ValueError(f"Invalid on_failure policy: {value}. Must be one of: {choices}")


def to_epoch_seconds(value: TimestampType) -> int:
    """Convert a datetime or epoch number to whole epoch seconds.

    Naive datetimes are taken to be UTC.

    Example:
        >>> to_epoch_seconds(datetime(2020, 1, 1))
        1577836800
        >>> to_epoch_seconds(12.9)
        12
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Timestamp must be a datetime or epoch seconds, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Timestamp must not be negative: {value}")
    return int(value)


class RenderOptions:
    """Options shared by every render entry point.

    Attributes:
        fixed_timestamp (Optional[int]): Epoch seconds stamped on every entry, or None.
        on_failure (FailurePolicy): What to do with partial output on error.
        compress (bool): Whether zip entries are deflated.
        follow_symlinks (bool): Whether filtered directories follow symbolic links.

    Example:
        >>> options = RenderOptions(fixed_timestamp=0, on_failure="clean-up")
        >>> options.on_failure
        <FailurePolicy.CLEAN_UP: 'clean_up'>
        >>> options.resolve_timestamp()
        0
    """

    SOURCE_DATE_EPOCH = "SOURCE_DATE_EPOCH"

    def __init__(
        self,
        *,
        fixed_timestamp: Optional[TimestampType] = None,
        on_failure: Union[str, FailurePolicy] = FailurePolicy.ABORT,
        compress: bool = True,
        follow_symlinks: bool = False,
    ) -> None:
        self.fixed_timestamp = None if fixed_timestamp is None else to_epoch_seconds(fixed_timestamp)
        self.on_failure = FailurePolicy.parse(on_failure)
        self.compress = compress
        self.follow_symlinks = follow_symlinks

    def resolve_timestamp(self) -> int:
        """Pick the timestamp for one render.

        The explicit fixed timestamp wins, then the SOURCE_DATE_EPOCH environment
        variable, then the current time.

        Raises:
            ValueError: If SOURCE_DATE_EPOCH is set but is not a non-negative integer.
        """
        if self.fixed_timestamp is not None:
            return self.fixed_timestamp
        env_value = os.environ.get(self.SOURCE_DATE_EPOCH)
        if env_value:
            try:
                return to_epoch_seconds(int(env_value))
            except ValueError:
                raise ValueError(f"{self.SOURCE_DATE_EPOCH} must be a non-negative integer, got {env_value!r}")
        return int(time.time())

    @property
    def is_reproducible(self) -> bool:
        """True when the timestamp does not depend on the wall clock."""
        return self.fixed_timestamp is not None or bool(os.environ.get(self.SOURCE_DATE_EPOCH))

    def __repr__(self) -> str:
        return (
            f"RenderOptions(fixed_timestamp={self.fixed_timestamp!r}, on_failure={self.on_failure.value!r}, "
            f"compress={self.compress!r}, follow_symlinks={self.follow_symlinks!r})"
        )
