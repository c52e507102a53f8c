"""Static category catalog served verbatim by GET /api/categories."""

from typing import List

from src.models.models import Category

CATEGORIES: List[Category] = [
    Category(id="quick-curries", title="Quick Curries", summary="30-minute paneer curries."),
    Category(id="grills-tikkas", title="Grills & Tikkas", summary="Skewers, tandoori, air-fryer."),
    Category(id="snacks", title="Snacks & Starters", summary="Bites, pakoras, rolls."),
    Category(id="wraps-bowls", title="Wraps & Bowls", summary="Rolls & bowl meals."),
    Category(id="street-style", title="Street-Style", summary="Chatpata, bold flavors."),
    Category(id="kid-friendly", title="Kid-Friendly", summary="Mild, cheesy twists."),
    Category(id="high-protein", title="High-Protein", summary="Gym-friendly meals."),
    Category(id="breakfast", title="Breakfast", summary="Bhurji, sandwiches."),
    Category(id="party", title="Party Dishes", summary="Crowd pleasers."),
    Category(id="pure-veg", title="100% Veg", summary="Pure veg options."),
]
