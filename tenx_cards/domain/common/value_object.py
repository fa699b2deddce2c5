"""
Base class for Value Objects.

Value objects carry no identity: two of them are equal when all of their
attributes are equal. Subclasses are frozen dataclasses that validate
themselves in ``__post_init__``.
"""


class ValueObject:
    """Immutable, attribute-compared domain value."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.__dict__.items())))

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{self.__class__.__name__}({attrs})"

    def to_primitive(self) -> object:
        """Return the single wrapped value, or a dict for composite values."""
        values = list(self.__dict__.values())
        if len(values) == 1:
            return values[0]
        return dict(self.__dict__)
