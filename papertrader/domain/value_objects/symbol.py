"""Symbol value object for representing ticker symbols."""

from ..exceptions import InvalidOrderError


class Symbol:
    """Immutable value object representing an uppercase ticker symbol."""

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        """Initialize Symbol, normalizing to uppercase.

        Raises:
            InvalidOrderError: If the symbol is empty or not a string
        """
        if not isinstance(value, str) or not value.strip():
            raise InvalidOrderError("symbol", "symbol cannot be empty")

        object.__setattr__(self, "_value", value.strip().upper())

    @property
    def value(self) -> str:
        """Get the normalized symbol string."""
        return self._value

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Cannot modify immutable value object attribute '{name}'")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Symbol):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other.upper()
        return False

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Symbol('{self._value}')"

    def __str__(self) -> str:
        return self._value
