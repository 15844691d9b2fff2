"""A small restaurant model: kitchen, garden and the public entry points."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


@dataclass
class Breakfast:
    """A breakfast order; the toast can be changed, the fruit is set by the kitchen."""

    toast: str
    _seasonal_fruit: str = field(repr=False)

    @classmethod
    def summer(cls, toast: str) -> Breakfast:
        """Build a summer breakfast with the given toast and peaches."""
        return cls(toast=toast, _seasonal_fruit="peaches")


class Appetizer(enum.Enum):
    """Appetizers on the menu."""

    SOUP = "soup"
    SALAD = "salad"


@dataclass(frozen=True, repr=False)
class Asparagus:
    """A harvested vegetable."""

    def __repr__(self) -> str:
        return "Asparagus"


def order_breakfast() -> Breakfast:
    """Configure a breakfast, switch its toast to wheat and return it."""
    print("Kitchen: Configuring breakfast...")
    meal = Breakfast.summer("Rye")
    meal.toast = "Wheat"
    print(f"I'd like {meal.toast} toast please")
    return meal


def harvest() -> Asparagus:
    """Harvest asparagus from the garden."""
    crop = Asparagus()
    print(f"Garden: Harvesting {crop!r}!")
    return crop


def weed() -> str:
    """Weed the garden and return the status message that was printed."""
    message = "Garden: Weeding done!"
    print(message)
    return message


def help() -> str:  # noqa: A001 - name is part of the public surface
    """Print a helper message and return it."""
    message = "Utilities: helping out..."
    print(message)
    return message


def _internal_adder(a: int, b: int) -> int:
    return a + b


def eat_at_restaurant() -> tuple[Appetizer, Appetizer]:
    """Visit the garden and the kitchen, then order both appetizers."""
    print("--- 模块路径演示 ---")
    harvest()
    order_breakfast()
    return Appetizer.SOUP, Appetizer.SALAD


def main(argv: list[str] | None = None) -> int:
    """Run the restaurant demo."""
    print("=== Cargo Modules Demo ===")
    eat_at_restaurant()
    print("\nDirectly accessing library modules:")
    order_breakfast()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())