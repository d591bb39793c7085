"""Classifier label vocabulary mapped to catalog search hints."""

from food_diary.domain.vision import LabelMapping


def _mapping(name: str, terms: tuple[str, ...], weight: int) -> LabelMapping:
    return LabelMapping(canonical_name=name, search_terms=terms, default_weight_g=weight)


LABEL_TO_FOOD_MAP: dict[str, LabelMapping] = {
    # meat
    "chicken": _mapping("Курица", ("курица", "куриная грудка", "куриное филе"), 150),
    "chicken breast": _mapping("Куриная грудка", ("курица", "куриная грудка"), 150),
    "beef": _mapping("Говядина", ("говядина", "говяжий"), 150),
    "pork": _mapping("Свинина", ("свинина", "свиной"), 150),
    "turkey": _mapping("Индейка", ("индейка", "индюшка"), 150),
    # fish
    "salmon": _mapping("Лосось", ("лосось", "семга"), 150),
    "fish": _mapping("Рыба", ("рыба", "рыбное филе"), 150),
    "tuna": _mapping("Тунец", ("тунец",), 150),
    # sides
    "rice": _mapping("Рис", ("рис", "рис отварной"), 200),
    "pasta": _mapping("Макароны", ("макароны", "паста"), 200),
    "noodles": _mapping("Лапша", ("лапша", "вермишель"), 200),
    "potato": _mapping("Картофель", ("картофель", "картошка"), 200),
    "potatoes": _mapping("Картофель", ("картофель", "картошка"), 200),
    "bread": _mapping("Хлеб", ("хлеб", "хлеб белый"), 50),
    # vegetables
    "tomato": _mapping("Помидор", ("помидор", "томат"), 150),
    "tomatoes": _mapping("Помидор", ("помидор", "томат"), 150),
    "cucumber": _mapping("Огурец", ("огурец",), 100),
    "carrot": _mapping("Морковь", ("морковь",), 100),
    "carrots": _mapping("Морковь", ("морковь",), 100),
    "bell pepper": _mapping("Перец болгарский", ("перец", "болгарский перец"), 150),
    "pepper": _mapping("Перец", ("перец",), 100),
    "onion": _mapping("Лук", ("лук", "лук репчатый"), 100),
    "salad": _mapping("Салат", ("салат", "салат листовой"), 100),
    "lettuce": _mapping("Салат", ("салат", "салат листовой"), 100),
    "broccoli": _mapping("Брокколи", ("брокколи",), 150),
    "cabbage": _mapping("Капуста", ("капуста", "капуста белокочанная"), 150),
    # fruits
    "apple": _mapping("Яблоко", ("яблоко",), 150),
    "banana": _mapping("Банан", ("банан",), 120),
    "orange": _mapping("Апельсин", ("апельсин",), 150),
    "avocado": _mapping("Авокадо", ("авокадо",), 150),
    # dairy and eggs
    "cheese": _mapping("Сыр", ("сыр", "сыр твердый"), 50),
    "milk": _mapping("Молоко", ("молоко",), 200),
    "yogurt": _mapping("Йогурт", ("йогурт",), 150),
    "egg": _mapping("Яйцо", ("яйцо", "яйцо куриное"), 60),
    "eggs": _mapping("Яйцо", ("яйцо", "яйцо куриное"), 60),
    # dishes
    "pizza": _mapping("Пицца", ("пицца",), 300),
    "burger": _mapping("Бургер", ("бургер", "гамбургер"), 250),
    "sandwich": _mapping("Сэндвич", ("сэндвич", "бутерброд"), 150),
    "soup": _mapping("Суп", ("суп",), 300),
}

# (low, high) grams for labels without a mapping, checked in order.
LABEL_WEIGHT_BANDS: tuple[tuple[tuple[str, ...], int, int], ...] = (
    (("chicken", "beef", "pork", "turkey", "meat", "fish", "salmon", "tuna"), 120, 180),
    (("rice", "pasta", "noodles", "potato", "potatoes"), 150, 200),
    (("soup", "stew"), 250, 350),
    (("apple", "banana", "orange", "avocado"), 100, 150),
    (
        (
            "tomato",
            "cucumber",
            "carrot",
            "pepper",
            "salad",
            "lettuce",
            "broccoli",
            "cabbage",
        ),
        100,
        150,
    ),
)

DEFAULT_LABEL_WEIGHT_BAND = (150, 200)
