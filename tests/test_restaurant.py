from ferrokit import restaurant
from ferrokit.restaurant import (
    Appetizer,
    Asparagus,
    Breakfast,
    eat_at_restaurant,
    harvest,
    order_breakfast,
    weed,
)


def test_internal_logic():
    assert restaurant._internal_adder(2, 2) == 4


def test_public_api(capsys):
    orders = eat_at_restaurant()
    out = capsys.readouterr().out
    assert orders == (Appetizer.SOUP, Appetizer.SALAD)
    lines = out.splitlines()
    assert lines[0] == "--- 模块路径演示 ---"
    assert "Garden: Harvesting Asparagus!" in lines
    assert lines.index("Garden: Harvesting Asparagus!") < lines.index(
        "Kitchen: Configuring breakfast..."
    )


def test_from_outside(capsys):
    meal = order_breakfast()
    out = capsys.readouterr().out
    assert meal.toast == "Wheat"
    assert "I'd like Wheat toast please" in out


def test_summer_breakfast_sets_fruit():
    meal = Breakfast.summer("Rye")
    assert meal.toast == "Rye"
    assert meal._seasonal_fruit == "peaches"


def test_harvest_returns_asparagus(capsys):
    crop = harvest()
    assert crop == Asparagus()
    assert repr(crop) == "Asparagus"
    assert capsys.readouterr().out == "Garden: Harvesting Asparagus!\n"


def test_weed_and_help(capsys):
    weed()
    restaurant.help()
    assert capsys.readouterr().out == "Garden: Weeding done!\nUtilities: helping out...\n"


def test_main_output(capsys):
    assert restaurant.main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("=== Cargo Modules Demo ===")
    assert "Directly accessing library modules:" in out
    assert out.count("I'd like Wheat toast please") == 2