"""Core catalog shipped with the application."""

from datetime import UTC, datetime

from food_diary.domain.foods import FoodItem

# id, name, name_localized, category, calories, protein, fat, carbs, aliases
_SEED_ROWS: tuple[tuple[str, str, str, str, float, float, float, float, tuple], ...] = (
    ("core_0001", "Яблоко", "Apple", "fruits", 52, 0.3, 0.2, 14, ("яблоки",)),
    ("core_0002", "Банан", "Banana", "fruits", 89, 1.1, 0.3, 22.8, ("бананы",)),
    ("core_0003", "Апельсин", "Orange", "fruits", 47, 0.9, 0.1, 11.8, ()),
    ("core_0004", "Помидор", "Tomato", "vegetables", 18, 0.9, 0.2, 3.9, ("томат",)),
    ("core_0005", "Огурец", "Cucumber", "vegetables", 15, 0.7, 0.1, 3.6, ()),
    ("core_0006", "Морковь", "Carrot", "vegetables", 41, 0.9, 0.2, 9.6, ()),
    ("core_0007", "Картофель", "Potato", "vegetables", 77, 2.0, 0.1, 17, ("картошка",)),
    ("core_0008", "Куриная грудка", "Chicken breast", "meat", 165, 31, 3.6, 0, ("курица",)),
    ("core_0009", "Говядина", "Beef", "meat", 250, 26, 15, 0, ()),
    ("core_0010", "Лосось", "Salmon", "fish", 208, 20, 13, 0, ("семга",)),
    ("core_0011", "Рис отварной", "Boiled rice", "grains", 130, 2.7, 0.3, 28, ("рис",)),
    ("core_0012", "Гречка отварная", "Boiled buckwheat", "grains", 110, 4.2, 1.1, 21.3, ("гречка",)),
    ("core_0013", "Макароны отварные", "Boiled pasta", "grains", 131, 5, 1.1, 25, ("паста",)),
    ("core_0014", "Хлеб пшеничный", "Wheat bread", "bread", 265, 9, 3.2, 49, ("хлеб",)),
    ("core_0015", "Молоко 3.2%", "Milk 3.2%", "dairy", 60, 2.9, 3.2, 4.7, ("молоко",)),
    ("core_0016", "Йогурт натуральный", "Plain yogurt", "dairy", 61, 3.5, 3.3, 4.7, ("йогурт",)),
    ("core_0017", "Сыр твердый", "Hard cheese", "dairy", 356, 25, 28, 1.3, ("сыр",)),
    ("core_0018", "Яйцо куриное", "Chicken egg", "eggs", 157, 12.7, 11.5, 0.7, ("яйцо",)),
    ("core_0019", "Шоколад молочный", "Milk chocolate", "desserts", 535, 7.6, 29.7, 59.4, ("шоколад",)),
    ("core_0020", "Печенье овсяное", "Oatmeal cookies", "desserts", 437, 6.5, 14.4, 71.8, ("печенье",)),
    ("core_0021", "Масло подсолнечное", "Sunflower oil", "oils", 884, 0, 100, 0, ()),
    ("core_0022", "Грецкий орех", "Walnut", "nuts", 654, 15.2, 65.2, 13.7, ("орехи",)),
)


def seed_foods() -> list[FoodItem]:
    """Build the core catalog entries."""
    now = datetime.now(tz=UTC)
    return [
        FoodItem(
            id=food_id,
            name=name,
            name_localized=name_localized,
            category=category,
            calories=float(calories),
            protein_g=float(protein),
            fat_g=float(fat),
            carbs_g=float(carbs),
            aliases=aliases,
            source="local",
            created_at=now,
            updated_at=now,
        )
        for (
            food_id,
            name,
            name_localized,
            category,
            calories,
            protein,
            fat,
            carbs,
            aliases,
        ) in _SEED_ROWS
    ]
