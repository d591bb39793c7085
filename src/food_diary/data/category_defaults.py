"""Average per-100 g macro profiles by food category."""

from food_diary.domain.foods import MacroProfile

DEFAULT_FALLBACK_CATEGORY = "vegetables"

CATEGORY_DEFAULTS: dict[str, MacroProfile] = {
    "vegetables": MacroProfile(calories=25, protein_g=1.5, fat_g=0.2, carbs_g=5.0),
    "fruits": MacroProfile(calories=50, protein_g=0.5, fat_g=0.2, carbs_g=12.0),
    "meat": MacroProfile(calories=200, protein_g=25.0, fat_g=10.0, carbs_g=0.0),
    "fish": MacroProfile(calories=150, protein_g=22.0, fat_g=5.0, carbs_g=0.0),
    "dairy": MacroProfile(calories=100, protein_g=8.0, fat_g=5.0, carbs_g=4.0),
    "grains": MacroProfile(calories=350, protein_g=10.0, fat_g=2.0, carbs_g=70.0),
    "eggs": MacroProfile(calories=157, protein_g=12.7, fat_g=11.5, carbs_g=0.7),
    "fastfood": MacroProfile(calories=300, protein_g=12.0, fat_g=15.0, carbs_g=30.0),
    "beverages": MacroProfile(calories=40, protein_g=0.0, fat_g=0.0, carbs_g=10.0),
    "bread": MacroProfile(calories=265, protein_g=9.0, fat_g=3.2, carbs_g=49.0),
    "canned": MacroProfile(calories=80, protein_g=5.0, fat_g=2.0, carbs_g=10.0),
    "snacks": MacroProfile(calories=500, protein_g=8.0, fat_g=30.0, carbs_g=50.0),
    "desserts": MacroProfile(calories=400, protein_g=5.0, fat_g=20.0, carbs_g=50.0),
    "sports": MacroProfile(calories=350, protein_g=30.0, fat_g=5.0, carbs_g=40.0),
    "oils": MacroProfile(calories=884, protein_g=0.0, fat_g=100.0, carbs_g=0.0),
    "nuts": MacroProfile(calories=600, protein_g=20.0, fat_g=50.0, carbs_g=20.0),
}

# Keyword groups for guessing a category from free text, checked in order.
# Keywords match the beginning of a word.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("vegetables", ("vegetable", "овощ")),
    ("fruits", ("fruit", "фрукт")),
    ("meat", ("meat", "мяс")),
    ("fish", ("fish", "рыб", "seafood")),
    ("dairy", ("dairy", "молок", "молоч", "cheese", "сыр", "milk", "yogurt")),
    ("grains", ("grain", "круп", "rice", "cereal")),
    ("bread", ("bread", "хлеб", "bakery")),
    ("desserts", ("dessert", "sweet", "десерт", "сладост", "chocolate")),
    ("snacks", ("snack", "chips", "закуск")),
    ("nuts", ("nuts", "орех", "peanut", "almond")),
    ("oils", ("oil", "масло")),
    ("beverages", ("drink", "beverage", "juice", "water", "напит", "сок")),
)
