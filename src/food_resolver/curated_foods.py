"""Hand-verified nutrition baselines (USDA, ICMR) per 100 g or 100 ml."""

from food_resolver.domain.foods import (
    AccuracyTier,
    CuratedSource,
    FoodId,
    FoodRecord,
    SourceKind,
    stable_hash,
)
from food_resolver.domain.nutrition import MacroProfile

_RICE_UNITS = ("50g", "100g", "150g", "200g", "bowl (150g)", "cup (185g)")
_DAL_UNITS = (
    "50g",
    "75g",
    "100g",
    "125g",
    "150g",
    "200g",
    "bowl (150g)",
    "small bowl (100g)",
)
_HOT_DRINK_UNITS = (
    "100ml",
    "150ml",
    "200ml",
    "250ml",
    "cup (200ml)",
    "small cup (150ml)",
    "mug (300ml)",
    "shot (30ml)",
    "ml",
)
_PLATE_UNITS = ("150g", "200g", "250g", "plate (250g)", "bowl (200g)", "serving (200g)")
_BIRYANI_UNITS = ("200g", "250g", "300g", "plate (300g)", "bowl (250g)", "serving (250g)")
_GRAVY_UNITS = ("150g", "200g", "250g", "bowl (200g)", "serving (200g)", "cup (240g)")

# name, category, calories, protein, carbs, fat, default unit, units, liquid
_ROWS: tuple[
    tuple[str, str, float, float, float, float, str, tuple[str, ...], bool], ...
] = (
    ("Rice (Cooked)", "Grains", 130, 2.7, 28, 0.3, "bowl (150g)", _RICE_UNITS, False),
    ("Basmati Rice (Cooked)", "Grains", 121, 2.5, 25, 0.2, "bowl (150g)", _RICE_UNITS, False),
    ("Brown Rice (Cooked)", "Grains", 111, 2.3, 23, 0.9, "bowl (150g)", _RICE_UNITS, False),
    ("Dal (Cooked Lentils)", "Legumes", 85, 5.5, 14, 0.9, "bowl (150g)", _DAL_UNITS, False),
    ("Moong Dal (Cooked)", "Legumes", 82, 5.2, 13.8, 0.8, "bowl (150g)", _DAL_UNITS, False),
    ("Toor Dal (Cooked)", "Legumes", 87, 5.8, 14.2, 1.0, "bowl (150g)", _DAL_UNITS, False),
    (
        "Chicken Breast (Cooked)",
        "Protein",
        165,
        31,
        0,
        3.6,
        "piece (100g)",
        ("50g", "75g", "100g", "125g", "150g", "piece (100g)", "small piece (75g)"),
        False,
    ),
    (
        "Chicken Curry",
        "Protein",
        180,
        20,
        5,
        10,
        "serving (150g)",
        ("100g", "150g", "200g", "serving (150g)", "bowl (200g)"),
        False,
    ),
    (
        "Fish (Cooked)",
        "Protein",
        136,
        25,
        0,
        4.5,
        "piece (100g)",
        ("75g", "100g", "125g", "150g", "piece (100g)", "fillet (125g)"),
        False,
    ),
    (
        "Egg (Whole)",
        "Protein",
        155,
        13,
        1.1,
        11,
        "piece (50g)",
        ("piece (50g)", "2 pieces (100g)"),
        False,
    ),
    (
        "Potato (Cooked)",
        "Vegetables",
        87,
        1.9,
        20,
        0.1,
        "medium (150g)",
        ("100g", "150g", "200g", "small (100g)", "medium (150g)", "large (200g)"),
        False,
    ),
    (
        "Onion",
        "Vegetables",
        40,
        1.1,
        9.3,
        0.1,
        "medium (100g)",
        ("50g", "100g", "150g", "small (60g)", "medium (100g)", "large (150g)"),
        False,
    ),
    (
        "Tomato",
        "Vegetables",
        18,
        0.9,
        3.9,
        0.2,
        "medium (120g)",
        ("100g", "120g", "150g", "small (80g)", "medium (120g)", "large (150g)"),
        False,
    ),
    (
        "Apple",
        "Fruits",
        52,
        0.3,
        14,
        0.2,
        "medium (180g)",
        ("100g", "180g", "small (150g)", "medium (180g)", "large (200g)"),
        False,
    ),
    (
        "Banana",
        "Fruits",
        89,
        1.1,
        23,
        0.3,
        "medium (120g)",
        ("100g", "120g", "small (90g)", "medium (120g)", "large (150g)"),
        False,
    ),
    (
        "Mango",
        "Fruits",
        60,
        0.8,
        15,
        0.4,
        "medium (200g)",
        ("100g", "200g", "slice (50g)", "medium (200g)", "large (300g)"),
        False,
    ),
    ("Whole Milk", "Dairy", 42, 3.4, 4.8, 1.0, "cup (200ml)", _HOT_DRINK_UNITS, True),
    (
        "Yogurt (Plain)",
        "Dairy",
        59,
        10,
        3.6,
        0.4,
        "cup (240g)",
        ("100g", "150g", "240g", "cup (240g)", "small cup (150g)"),
        False,
    ),
    (
        "Paneer",
        "Dairy",
        296,
        25,
        1.2,
        20,
        "piece (50g)",
        ("25g", "50g", "75g", "100g", "piece (50g)", "cube (25g)"),
        False,
    ),
    (
        "Tea (with milk and sugar)",
        "Beverages",
        60,
        1.5,
        12,
        1.0,
        "cup (200ml)",
        _HOT_DRINK_UNITS,
        True,
    ),
    (
        "Coffee (with milk and sugar)",
        "Beverages",
        65,
        1.8,
        13,
        1.2,
        "cup (200ml)",
        _HOT_DRINK_UNITS,
        True,
    ),
    (
        "Coca Cola",
        "Beverages",
        42,
        0,
        10.6,
        0,
        "can (330ml)",
        ("200ml", "330ml", "500ml", "can (330ml)", "bottle (500ml)", "glass (200ml)"),
        True,
    ),
    (
        "Beer",
        "Beverages",
        43,
        0.5,
        3.6,
        0,
        "bottle (650ml)",
        ("330ml", "500ml", "650ml", "can (330ml)", "bottle (650ml)", "pint (500ml)"),
        True,
    ),
    (
        "Chapati/Roti",
        "Grains",
        297,
        9.6,
        58,
        3.7,
        "piece (50g)",
        ("piece (50g)", "2 pieces (100g)", "3 pieces (150g)"),
        False,
    ),
    (
        "Naan",
        "Grains",
        310,
        8.7,
        56,
        5.4,
        "piece (80g)",
        ("piece (80g)", "half piece (40g)", "large piece (100g)"),
        False,
    ),
    (
        "White Bread",
        "Grains",
        265,
        9,
        49,
        3.2,
        "slice (30g)",
        ("slice (30g)", "2 slices (60g)", "3 slices (90g)"),
        False,
    ),
    (
        "Almonds",
        "Nuts",
        579,
        21.2,
        21.6,
        49.9,
        "10 pieces (12g)",
        ("piece (1.2g)", "5 pieces (6g)", "10 pieces (12g)", "handful (20g)"),
        False,
    ),
    (
        "Cashews",
        "Nuts",
        553,
        18.2,
        30.2,
        43.8,
        "10 pieces (17g)",
        ("piece (1.7g)", "5 pieces (8.5g)", "10 pieces (17g)", "handful (25g)"),
        False,
    ),
    (
        "Walnuts",
        "Nuts",
        654,
        15.2,
        13.7,
        65.2,
        "5 pieces (12.5g)",
        ("piece (2.5g)", "3 pieces (7.5g)", "5 pieces (12.5g)", "handful (20g)"),
        False,
    ),
    ("Chicken Fried Rice", "Main Course", 163, 8.2, 20.8, 4.9, "plate (250g)", _PLATE_UNITS, False),
    ("Vegetable Fried Rice", "Main Course", 142, 3.8, 24.5, 3.2, "plate (250g)", _PLATE_UNITS, False),
    ("Egg Fried Rice", "Main Course", 156, 6.1, 22.3, 4.1, "plate (250g)", _PLATE_UNITS, False),
    ("Mutton Fried Rice", "Main Course", 175, 9.5, 19.2, 6.8, "plate (250g)", _PLATE_UNITS, False),
    ("Prawn Fried Rice", "Main Course", 154, 8.9, 21.1, 3.8, "plate (250g)", _PLATE_UNITS, False),
    ("Chicken Biryani", "Main Course", 185, 12.3, 22.1, 6.4, "plate (300g)", _BIRYANI_UNITS, False),
    ("Vegetable Biryani", "Main Course", 165, 4.8, 28.2, 4.1, "plate (300g)", _BIRYANI_UNITS, False),
    ("Mutton Biryani", "Main Course", 205, 14.2, 20.8, 8.9, "plate (300g)", _BIRYANI_UNITS, False),
    ("Chicken Noodles", "Main Course", 158, 9.1, 18.4, 4.6, "plate (250g)", _PLATE_UNITS, False),
    ("Vegetable Noodles", "Main Course", 138, 4.2, 22.8, 3.1, "plate (250g)", _PLATE_UNITS, False),
    ("Rajma", "Main Course", 127, 8.7, 22.8, 0.5, "bowl (200g)", _GRAVY_UNITS, False),
    ("Chole", "Main Course", 164, 8.9, 27.4, 2.6, "bowl (200g)", _GRAVY_UNITS, False),
    ("Dal Makhani", "Main Course", 143, 9.7, 15.2, 5.8, "bowl (200g)", _GRAVY_UNITS, False),
    (
        "Paneer Butter Masala",
        "Main Course",
        195,
        11.8,
        8.4,
        13.6,
        "serving (150g)",
        ("100g", "150g", "200g", "serving (150g)", "bowl (200g)"),
        False,
    ),
    (
        "Aloo Paratha",
        "Main Course",
        250,
        6.2,
        35.8,
        9.4,
        "piece (120g)",
        ("piece (120g)", "half piece (60g)", "large piece (150g)"),
        False,
    ),
    (
        "Samosa",
        "Snacks",
        308,
        5.4,
        28.7,
        19.5,
        "piece (50g)",
        ("piece (50g)", "2 pieces (100g)", "large piece (70g)"),
        False,
    ),
    (
        "Pakora",
        "Snacks",
        285,
        6.8,
        22.4,
        18.9,
        "5 pieces (100g)",
        ("piece (20g)", "3 pieces (60g)", "5 pieces (100g)", "serving (100g)"),
        False,
    ),
)


def curated_food(  # noqa: PLR0913
    name: str,
    category: str,
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
    default_unit: str,
    common_units: tuple[str, ...],
    is_liquid: bool = False,
) -> FoodRecord:
    """Build a curated record; curated data is always high accuracy."""
    return FoodRecord(
        id=FoodId(SourceKind.CURATED, stable_hash(name.lower())),
        name=name,
        category=category,
        per_100=MacroProfile(
            calories=calories, protein_g=protein, carbs_g=carbs, fat_g=fat
        ),
        is_liquid=is_liquid,
        default_unit=default_unit,
        common_units=common_units,
        source=CuratedSource(),
        accuracy=AccuracyTier.HIGH,
    )


CURATED_FOODS: tuple[FoodRecord, ...] = tuple(curated_food(*row) for row in _ROWS)
