"""Tag value type: an immutable (name, value) pair attached to photos."""

from __future__ import annotations

from dataclasses import dataclass


def _require_text(value: str | None, what: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{what} cannot be empty")
    return value.strip()


@dataclass(frozen=True, eq=False)
class Tag:
    """A (name, value) pair such as ``location=New York``.

    Both fields are trimmed on construction. Equality and hashing ignore
    case, so ``Tag("Color", "Red") == Tag("color", "red")``.
    """

    name: str
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _require_text(self.name, "Tag name"))
        object.__setattr__(self, "value", _require_text(self.value, "Tag value"))

    @property
    def key(self) -> tuple[str, str]:
        """Case-folded identity key."""
        return (self.name.casefold(), self.value.casefold())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self.name}={self.value}"
