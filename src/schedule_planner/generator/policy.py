"""Override policy: which course activities may take part in an overlap."""

from collections.abc import Iterator, Mapping
from typing import Any, Self

from ..exceptions import InvalidInputError
from ..models import ActivityType
from ..normalization import normalize_course_code
from .constants import POLICY_KEY_SEPARATOR

PolicyKey = tuple[str, ActivityType]


class OverridePolicy(Mapping[PolicyKey, bool]):
    """Mapping of (course_code, activity_type) -> overlap permitted.

    Closed world: a key that is absent means "not permitted". Keys may be
    given as (course_code, activity_type) tuples or as "CODE:type" strings.
    """

    def __init__(self, permissions: Mapping[PolicyKey | str, bool] | None = None) -> None:
        self._permissions: dict[PolicyKey, bool] = {}
        for raw_key, permitted in (permissions or {}).items():
            course_code, activity_type = _split_key(raw_key)
            self.set(course_code, activity_type, permitted)

    def set(self, course_code: str, activity_type: ActivityType | str, permitted: bool = True) -> None:
        """Set the permission for one course activity type."""
        key = (normalize_course_code(course_code), ActivityType.parse(activity_type))
        self._permissions[key] = bool(permitted)

    def allows(self, course_code: str, activity_type: ActivityType | str) -> bool:
        """Whether this course's activities of this type may overlap."""
        key = (normalize_course_code(course_code), ActivityType.parse(activity_type))
        return self._permissions.get(key, False)

    def __getitem__(self, key: PolicyKey) -> bool:
        return self._permissions[key]

    def __iter__(self) -> Iterator[PolicyKey]:
        return iter(self._permissions)

    def __len__(self) -> int:
        return len(self._permissions)

    def __repr__(self) -> str:
        return f"OverridePolicy({self.to_dict()!r})"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Create a policy from {"CODE:type": bool} entries.

        Raises:
            InvalidInputError: If a key is not "CODE:type" or names an unknown type
        """
        policy = cls()
        for raw_key, permitted in data.items():
            course_code, activity_type = _split_key(str(raw_key))
            policy.set(course_code, activity_type, bool(permitted))
        return policy

    def to_dict(self) -> dict[str, bool]:
        """Convert to {"CODE:type": bool} entries."""
        return {
            f"{code}{POLICY_KEY_SEPARATOR}{activity_type.value}": permitted
            for (code, activity_type), permitted in self._permissions.items()
        }


def _split_key(raw_key: PolicyKey | str) -> tuple[str, ActivityType | str]:
    """Split a "CODE:type" string or a (code, type) pair into its parts."""
    if isinstance(raw_key, str):
        course_code, sep, activity_type = raw_key.partition(POLICY_KEY_SEPARATOR)
    elif isinstance(raw_key, tuple) and len(raw_key) == 2:
        course_code, activity_type = raw_key
        sep = POLICY_KEY_SEPARATOR
    else:
        sep, course_code, activity_type = "", "", ""

    if not sep or not str(course_code).strip():
        raise InvalidInputError(
            f"Override key {raw_key!r} must be 'CODE{POLICY_KEY_SEPARATOR}type' "
            f"or a (course_code, activity_type) pair",
            "overrides",
        )
    return course_code, activity_type
