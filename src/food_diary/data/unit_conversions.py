"""Unit multipliers and average piece weights."""

DEFAULT_PIECE_GRAMS = 50.0
DEFAULT_PORTION_GRAMS = 100.0

# Grams per one unit. Millilitres assume the density of water.
UNIT_CONVERSIONS: dict[str, float] = {
    "г": 1.0,
    "мл": 1.0,
    "л": 1000.0,
    "кг": 1000.0,
    "шт": DEFAULT_PIECE_GRAMS,
    "ст.л": 15.0,
    "ч.л": 5.0,
    "порция": DEFAULT_PORTION_GRAMS,
}

UNIT_ALIASES: dict[str, str] = {
    "g": "г",
    "gr": "г",
    "gram": "г",
    "grams": "г",
    "гр": "г",
    "ml": "мл",
    "l": "л",
    "kg": "кг",
    "pcs": "шт",
    "pc": "шт",
    "piece": "шт",
    "pieces": "шт",
    "tbsp": "ст.л",
    "ст.л.": "ст.л",
    "ст л": "ст.л",
    "tsp": "ч.л",
    "ч.л.": "ч.л",
    "ч л": "ч.л",
    "portion": "порция",
    "serving": "порция",
}

# Matched as substrings of the lower-cased food name, first hit wins, so
# longer keywords precede the shorter ones they contain.
PIECE_WEIGHTS: dict[str, float] = {
    "яйцо перепелиное": 12.0,
    "яйц": 55.0,
    "яиц": 55.0,
    "яблоко": 150.0,
    "банан": 120.0,
    "апельсин": 150.0,
    "мандарин": 75.0,
    "груша": 160.0,
    "персик": 130.0,
    "киви": 75.0,
    "лимон": 100.0,
    "помидор черри": 15.0,
    "помидор": 120.0,
    "огурец": 110.0,
    "морков": 80.0,
    "картофель": 120.0,
    "луковица": 90.0,
    "лук": 90.0,
    "перец": 150.0,
    "зубчик чеснока": 5.0,
    "чеснок": 5.0,
    "авокадо": 170.0,
    "хлеб": 30.0,
    "батон": 30.0,
    "лаваш": 60.0,
    "тортилья": 45.0,
    "сосиска": 50.0,
    "котлета": 80.0,
    "блин": 50.0,
    "печенье": 12.0,
    "конфета": 10.0,
    "quail egg": 12.0,
    "egg": 55.0,
    "apple": 150.0,
    "banana": 120.0,
    "orange": 150.0,
    "tomato": 120.0,
    "cucumber": 110.0,
    "potato": 120.0,
}
