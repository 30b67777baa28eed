from .constants import UINT64_MAX
from .errors import InvalidTimestamps


def age_in_seconds(current_timestamp: int, birth_timestamp: int) -> int:
    if birth_timestamp > current_timestamp:
        raise InvalidTimestamps(
            f"birth timestamp {birth_timestamp} is after current timestamp {current_timestamp}"
        )
    age = current_timestamp - birth_timestamp
    if age > UINT64_MAX:
        raise InvalidTimestamps("age does not fit in 64 bits")
    return age


def meets_threshold(age: int, threshold: int) -> bool:
    return age >= threshold
